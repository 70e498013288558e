"""
Use Cases

Application business logic, one class per operation.
"""
