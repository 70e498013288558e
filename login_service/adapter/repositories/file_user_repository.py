import hmac
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional
from uuid import NAMESPACE_URL, UUID, uuid5

from login_service.app.repositories.user_repository import (
    DuplicateEmailError,
    IUserRepository,
)
from login_service.domain.entities import User

Record = Dict[str, Any]


def to_millis(value: Optional[datetime]) -> Optional[int]:
    """Naive UTC datetime -> epoch milliseconds"""
    if value is None:
        return None
    return int(value.replace(tzinfo=UTC).timestamp() * 1000)


def from_millis(value: Optional[int]) -> Optional[datetime]:
    """Epoch milliseconds -> naive UTC datetime"""
    if value is None:
        return None
    return datetime.fromtimestamp(value / 1000, UTC).replace(tzinfo=None)


def record_to_user(record: Record) -> User:
    # Records written before ids were stored get a stable id derived from the email
    user_id = record.get("id") or str(uuid5(NAMESPACE_URL, f"mailto:{record['email']}"))
    user = User(
        id=UUID(user_id),
        name=record.get("name", ""),
        email=record["email"],
        password_hash=record["password"],
        reset_token=record.get("resetToken"),
        reset_token_expires_at=from_millis(record.get("resetTokenExpiry")),
    )
    if record.get("createdAt"):
        user.created_at = datetime.fromisoformat(record["createdAt"])
    return user


def user_to_record(user: User) -> Record:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "password": user.password_hash,
        "resetToken": user.reset_token,
        "resetTokenExpiry": to_millis(user.reset_token_expires_at),
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


class FileUserRepository(IUserRepository):
    """
    User repository over an in-memory list of JSON records.

    The list is loaded and persisted by FileUnitOfWork; this class only
    reads and mutates it.
    """

    def __init__(self, records: List[Record]):
        self.records = records

    def _find_by_id(self, user_id: UUID) -> Optional[Record]:
        for record in self.records:
            if record_to_user(record).id == user_id:
                return record
        return None

    async def get_by_email(self, email: str) -> Optional[User]:
        for record in self.records:
            if record["email"] == email:
                return record_to_user(record)
        return None

    async def get_by_reset_token(self, token_hash: str) -> Optional[User]:
        for record in self.records:
            stored = record.get("resetToken")
            if stored and hmac.compare_digest(stored, token_hash):
                return record_to_user(record)
        return None

    async def create(self, user: User) -> User:
        if any(record["email"] == user.email for record in self.records):
            raise DuplicateEmailError(user.email)
        self.records.append(user_to_record(user))
        return user

    async def update_credentials(
        self,
        user_id: UUID,
        password_hash: str,
        expected_reset_token: str,
        now: datetime,
    ) -> bool:
        record = self._find_by_id(user_id)
        if record is None or expected_reset_token is None:
            return False

        expires_at = from_millis(record.get("resetTokenExpiry"))
        if (
            record.get("resetToken") != expected_reset_token
            or expires_at is None
            or expires_at < now
        ):
            return False

        record["password"] = password_hash
        record["resetToken"] = None
        record["resetTokenExpiry"] = None
        return True

    async def update_reset_token(
        self, user_id: UUID, token_hash: str, expires_at: datetime
    ) -> None:
        record = self._find_by_id(user_id)
        if record is None:
            raise LookupError(f"User {user_id} not found")
        record["resetToken"] = token_hash
        record["resetTokenExpiry"] = to_millis(expires_at)
