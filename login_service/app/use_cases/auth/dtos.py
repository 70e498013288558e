"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class SignupCommand(BaseModel):
    """
    Signup command - represents signup intent

    Fields are optional here; presence is a business rule checked by
    SignupUseCase so that missing input maps to VALIDATION_ERROR.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserInfo(BaseModel):
    """Public identity of a user; never carries the password hash"""

    id: str
    name: str
    email: str


class ForgotPasswordResponse(BaseModel):
    """Response for forgot password use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
