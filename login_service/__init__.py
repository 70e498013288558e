"""
Login Service

Credential-based authentication: signup, login, forgot-password and
password reset.
"""

__version__ = "0.1.0"
