from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field, field_validator

from login_service.api.error import ClientError, ServerError
from login_service.app.services.password_hasher import IPasswordHasher
from login_service.app.services.reset_notifier import IResetNotifier
from login_service.app.services.unit_of_work import UnitOfWork
from login_service.app.use_cases.auth import (
    SignupCommand,
    SignupUseCase,
    LoginUseCase,
    ForgotPasswordUseCase,
    ResetPasswordUseCase,
    UserInfo,
    ForgotPasswordResponse,
    ResetPasswordResponse,
)
from login_service.depends import (
    get_config,
    get_password_hasher,
    get_reset_notifier,
    get_unit_of_work,
)

router = APIRouter()


class AuthRequest(BaseModel):
    """
    Base for auth request payloads.

    Every string field must be valid UTF-8: lone surrogates decoded from
    JSON escapes cannot be hashed or stored, so they are rejected here as a
    VALIDATION_ERROR (400) instead of failing inside a use case.
    """

    @field_validator("*")
    @classmethod
    def require_utf8(cls, value):
        if isinstance(value, str):
            try:
                value.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise ValueError("must be valid UTF-8") from exc
        return value


class SignupRequest(AuthRequest):
    """
    Signup HTTP request payload

    Fields are optional at the HTTP layer; the use case reports missing
    ones as VALIDATION_ERROR (400).
    """

    name: Optional[str] = Field(None, description="Display name")
    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=UserInfo)
async def signup(
    request: SignupRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Signup

    Creates a new account and returns its public identity.

    Raises:
        - 400 Bad Request: Missing name, email or password
        - 409 Conflict: Email already exists
        - 500 Internal Server Error: Server error
    """
    command = SignupCommand(
        name=request.name, email=request.email, password=request.password
    )

    use_case = SignupUseCase(uow, hasher)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(AuthRequest):
    """Login HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")
    password: Optional[str] = Field(None, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=UserInfo)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    User Login

    Verifies credentials and returns the user's public identity.

    Raises:
        - 400 Bad Request: Missing email or password
        - 401 Unauthorized: Invalid credentials (same for unknown email)
        - 500 Internal Server Error: Server error
    """
    use_case = LoginUseCase(uow, hasher)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class ForgotPasswordRequest(AuthRequest):
    """Forgot password HTTP request payload"""

    email: Optional[str] = Field(None, description="User email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=ForgotPasswordResponse,
)
async def forgot_password(
    request: ForgotPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: IResetNotifier = Depends(get_reset_notifier),
    config=Depends(get_config),
):
    """
    Forgot Password

    Issues a reset token (valid for one hour) and delivers the reset link.

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Reset link is built from APP_BASE_URL, never from request headers

    Returns:
        - 200 OK: Always returns success (no enumeration)
        - 400 Bad Request: Missing email
        - 500 Internal Server Error: Server error
    """
    use_case = ForgotPasswordUseCase(
        uow,
        notifier,
        reset_url=f"{config.APP_BASE_URL.rstrip('/')}{config.RESET_PASSWORD_PATH}",
        token_ttl=timedelta(seconds=config.RESET_TOKEN_TTL_SECONDS),
    )
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "VALIDATION_ERROR":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(AuthRequest):
    """Reset password HTTP request payload"""

    model_config = ConfigDict(populate_by_name=True)

    token: Optional[str] = Field(None, description="Password reset token from the link")
    new_password: Optional[str] = Field(
        None, alias="newPassword", description="New password"
    )


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ResetPasswordResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    hasher: IPasswordHasher = Depends(get_password_hasher),
):
    """
    Reset Password

    Validates the reset token and sets the new password. The token is
    single use.

    Raises:
        - 400 Bad Request: Missing fields, or invalid/expired/used token
        - 500 Internal Server Error: Server error
    """
    use_case = ResetPasswordUseCase(uow, hasher)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("VALIDATION_ERROR", "INVALID_TOKEN"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
