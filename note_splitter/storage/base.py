"""
Vault Storage Interface

The split pipeline only talks to storage through `VaultStorage`. Paths are
vault-relative, use forward slashes, and the vault root is "".
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class WriteStatus(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    FAILED = "failed"


@dataclass(frozen=True)
class WriteOutcome:
    """Result of a create-if-absent write."""

    status: WriteStatus
    path: str
    reason: Optional[str] = None

    @property
    def created(self) -> bool:
        return self.status == WriteStatus.CREATED

    @classmethod
    def ok(cls, path: str) -> 'WriteOutcome':
        return cls(WriteStatus.CREATED, path)

    @classmethod
    def exists(cls, path: str) -> 'WriteOutcome':
        return cls(WriteStatus.ALREADY_EXISTS, path, reason=f"File already exists: {path}")

    @classmethod
    def failed(cls, path: str, reason: str) -> 'WriteOutcome':
        return cls(WriteStatus.FAILED, path, reason=reason)


class VaultStorage(ABC):
    """
    Abstract base class for vault backends.

    `create_if_absent` reports its outcome instead of raising, so callers
    can tell a name collision from any other failure. The remaining
    operations raise `StorageError` (or `ItemNotFoundError`).
    """

    @abstractmethod
    async def create_if_absent(self, path: str, content: str) -> WriteOutcome:
        """Create a new note at `path`; never overwrite an existing one."""
        pass

    @abstractmethod
    async def ensure_folder(self, path: str) -> None:
        """Create a folder, succeeding if it already exists."""
        pass

    @abstractmethod
    async def delete(self, path: str) -> None:
        """Delete a note."""
        pass

    @abstractmethod
    async def read(self, path: str) -> str:
        """Return the current content of a note."""
        pass

    @abstractmethod
    async def exists(self, path: str) -> bool:
        """Whether a note exists at `path`."""
        pass

    async def aclose(self) -> None:
        """Release backend resources."""
        return None
