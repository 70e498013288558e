"""
Authentication Use Cases

All authentication-related business logic.
"""

from .signup_use_case import SignupUseCase
from .login_use_case import LoginUseCase
from .forgot_password_use_case import ForgotPasswordUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    SignupCommand,
    UserInfo,
    ForgotPasswordResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "SignupUseCase",
    "LoginUseCase",
    "ForgotPasswordUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "SignupCommand",
    # DTOs - Responses
    "UserInfo",
    "ForgotPasswordResponse",
    "ResetPasswordResponse",
]
