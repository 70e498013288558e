import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List

from login_service.adapter.repositories.file_user_repository import Record
from login_service.adapter.services.file_unit_of_work import FileUnitOfWork
from login_service.app.services.credential_store import CredentialStore
from login_service.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class FileCredentialStore(CredentialStore):
    """
    Credential store kept in a single JSON file.

    Layout: a JSON array of user records with keys id, name, email,
    password, resetToken, resetTokenExpiry (epoch ms) and createdAt.

    A missing file is an empty store. A file that cannot be parsed is an
    error rather than an empty store, so a later write cannot wipe it.
    Writes go to a temporary file that replaces the original, so a failed
    write leaves the previous contents intact.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        self.lock = asyncio.Lock()

    async def init(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        logger.info(f"File credential store ready ({self.path})")

    async def close(self) -> None:
        pass

    def unit_of_work(self) -> UnitOfWork:
        return FileUnitOfWork(self)

    async def load(self) -> List[Record]:
        return await asyncio.to_thread(self._read)

    async def save(self, records: List[Record]) -> None:
        await asyncio.to_thread(self._write, records)

    def _read(self) -> List[Record]:
        if not self.path.exists():
            return []
        with open(self.path, "r", encoding="utf-8") as r_file:
            data = json.load(r_file)
        if not isinstance(data, list):
            raise ValueError(f"{self.path} does not contain a list of users")
        return data

    def _write(self, records: List[Record]) -> None:
        fd, tmp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as w_file:
                json.dump(records, w_file, indent=2)
                w_file.flush()
                os.fsync(w_file.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
