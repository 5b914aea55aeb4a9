"""
Logged-in administrator persistence.

Two slots hold a JSON-serialized administrator: a durable file that survives
restarts ("remember me") and an in-memory slot that lives as long as the
process. At most one slot holds a session at any time.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from ..models import Administrator

logger = logging.getLogger(__name__)


class MemorySlot:
    """Process-scoped slot"""

    def __init__(self) -> None:
        self._data: Optional[str] = None

    def read(self) -> Optional[str]:
        return self._data

    def write(self, data: str) -> None:
        self._data = data

    def clear(self) -> None:
        self._data = None


class FileSlot:
    """Durable slot stored as a small JSON file"""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Optional[str]:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def write(self, data: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(data, encoding="utf-8")

    def clear(self) -> None:
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass


class SessionStore:
    def __init__(self, durable: FileSlot, scoped: Optional[MemorySlot] = None) -> None:
        self.durable = durable
        self.scoped = scoped or MemorySlot()

    def save(self, admin: Administrator, remember: bool) -> None:
        data = admin.model_dump_json()
        if remember:
            self.scoped.clear()
            self.durable.write(data)
        else:
            self.durable.clear()
            self.scoped.write(data)

    def load(self) -> Optional[Administrator]:
        """Durable copy first, then the in-memory copy"""
        for slot in (self.durable, self.scoped):
            admin = self._decode(slot.read())
            if admin is not None:
                return admin
        return None

    def is_durable(self) -> bool:
        return self._decode(self.durable.read()) is not None

    def clear(self) -> None:
        self.durable.clear()
        self.scoped.clear()

    @staticmethod
    def _decode(data: Optional[str]) -> Optional[Administrator]:
        if not data:
            return None
        try:
            return Administrator.model_validate_json(data)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring unreadable session data: {e}")
            return None


class SessionContext:
    """The process-wide owner of the logged-in administrator"""

    def __init__(self, store: SessionStore) -> None:
        self.store = store
        self._admin: Optional[Administrator] = None
        self._remember = False
        self._initialized = False

    def init(self) -> Optional[Administrator]:
        """Restore a saved session. Only the first call reads the store."""
        if not self._initialized:
            self._admin = self.store.load()
            self._remember = self._admin is not None and self.store.is_durable()
            self._initialized = True
            if self._admin is not None:
                logger.info(f"Restored session for administrator {self._admin.id}")
        return self._admin

    def current(self) -> Optional[Administrator]:
        return self._admin

    @property
    def remember(self) -> bool:
        return self._remember

    def set(self, admin: Administrator, remember: bool) -> None:
        self.store.save(admin, remember)
        self._admin = admin
        self._remember = remember
        self._initialized = True

    def refresh(self, admin: Administrator) -> None:
        """Replace the live administrator, keeping the current remember-me mode"""
        self.set(admin, self._remember)

    def clear(self) -> None:
        self.store.clear()
        self._admin = None
        self._remember = False
