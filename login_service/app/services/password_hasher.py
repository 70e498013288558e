from abc import ABC, abstractmethod

# bcrypt ignores everything past 72 bytes
MAX_PASSWORD_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


class IPasswordHasher(ABC):
    """One-way salted password hashing with constant-time verification"""

    @abstractmethod
    def hash(self, password: str) -> str:
        pass

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        pass

    @abstractmethod
    def verify_dummy(self, password: str) -> None:
        """Spend the same time as verify() when there is no stored hash"""
        pass
