import bcrypt

from login_service.app.services.password_hasher import IPasswordHasher

DEFAULT_ROUNDS = 10


class BcryptPasswordHasher(IPasswordHasher):
    """bcrypt implementation of IPasswordHasher"""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        # Hashed up front so every unknown-email login costs one checkpw
        self._dummy_hash = self.hash("dummy_password")

    def hash(self, password: str) -> str:
        password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return password_hash.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        # checkpw compares in constant time
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))

    def verify_dummy(self, password: str) -> None:
        self.verify(password, self._dummy_hash)
