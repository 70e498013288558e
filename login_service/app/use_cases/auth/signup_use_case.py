import logging

from login_service.libs.result import Error, Result, Return
from login_service.app.repositories.user_repository import DuplicateEmailError
from login_service.app.services.password_hasher import IPasswordHasher, password_too_long
from login_service.app.services.unit_of_work import UnitOfWork
from login_service.domain import messages
from login_service.domain.entities import User
from .dtos import SignupCommand, UserInfo

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Command/Response Pattern:
    - Input: SignupCommand
    - Output: Result[UserInfo]

    Business Logic:
    1. name, email and password are all required
    2. Check if email already exists
    3. Hash password with bcrypt
    4. Create User (the store rejects a concurrent duplicate as well)
    5. Commit and return the public identity
    """

    def __init__(self, uow: UnitOfWork, hasher: IPasswordHasher):
        self.uow = uow
        self.hasher = hasher

    async def execute(self, command: SignupCommand) -> Result[UserInfo]:
        """
        Execute signup use case

        Args:
            command: SignupCommand with name, email, password

        Returns:
            Result[UserInfo] with id, name and email
            or Error(VALIDATION_ERROR) if a field is missing
            or Error(EMAIL_ALREADY_EXISTS) if email exists
            or Error(INTERNAL_ERROR) if storage or hashing failed
        """
        try:
            return await self._signup(command)
        except Exception:
            logger.exception("Signup failed")
            return Return.err(Error("INTERNAL_ERROR", messages.INTERNAL_ERROR))

    async def _signup(self, command: SignupCommand) -> Result[UserInfo]:
        if not command.name or not command.email or not command.password:
            return Return.err(Error("VALIDATION_ERROR", messages.SIGNUP_FIELDS_REQUIRED))

        if password_too_long(command.password):
            return Return.err(Error("VALIDATION_ERROR", messages.PASSWORD_TOO_LONG))

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(command.email)
            if existing_user:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", messages.EMAIL_ALREADY_EXISTS)
                )

            user = User(
                name=command.name,
                email=command.email,
                password_hash=self.hasher.hash(command.password),
            )
            try:
                user = await self.uow.users.create(user)
            except DuplicateEmailError:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", messages.EMAIL_ALREADY_EXISTS)
                )

            await self.uow.commit()

            logger.info(f"User registered: {user.id}")
            return Return.ok(UserInfo(id=str(user.id), name=user.name, email=user.email))
