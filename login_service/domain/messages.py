"""
User-facing messages.

Several failures deliberately share one message so that a client cannot tell
an unknown email from a wrong password, or an expired token from a used one.
"""

SIGNUP_FIELDS_REQUIRED = "All fields are required."
LOGIN_FIELDS_REQUIRED = "Email and password are required."
EMAIL_REQUIRED = "Email is required."
RESET_FIELDS_REQUIRED = "Token and new password are required."
PASSWORD_TOO_LONG = "Password must be at most 72 bytes."
INVALID_REQUEST = "Invalid request body."

EMAIL_ALREADY_EXISTS = "User with this email already exists."
INVALID_CREDENTIALS = "Incorrect email or password. Please double-check your credentials."
RESET_LINK_SENT = (
    "If an account with that email exists, a password reset link has been sent."
)
INVALID_TOKEN = "Invalid or expired token. Please request a new reset link."
PASSWORD_RESET = "Password has been reset successfully!"

INTERNAL_ERROR = "Internal server error"
