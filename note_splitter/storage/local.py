"""Vault storage backed by a directory on the local file system."""

import asyncio
import logging
import os
from pathlib import Path

from ..exceptions import ItemNotFoundError, StorageError
from ..naming import normalize_path
from .base import VaultStorage, WriteOutcome

logger = logging.getLogger(__name__)


class LocalVaultStorage(VaultStorage):
    """Vault rooted at a local directory. Blocking calls run in a worker thread."""

    def __init__(self, root: str):
        self.root = Path(root).resolve()

    def _resolve(self, path: str) -> Path:
        target = (self.root / normalize_path(path)).resolve()
        if target != self.root and self.root not in target.parents:
            raise StorageError(f"Path escapes the vault: {path}")
        return target

    def relative(self, target: Path) -> str:
        """Vault-relative form of an absolute path inside the vault."""
        return normalize_path(Path(target).resolve().relative_to(self.root).as_posix())

    async def create_if_absent(self, path: str, content: str) -> WriteOutcome:
        try:
            target = self._resolve(path)
        except StorageError as e:
            return WriteOutcome.failed(path, str(e))

        def _write() -> None:
            # Exclusive create: fails atomically if the file appeared meanwhile
            with open(target, "x", encoding="utf-8", newline="") as f:
                f.write(content)

        try:
            await asyncio.to_thread(_write)
        except FileExistsError:
            return WriteOutcome.exists(path)
        except OSError as e:
            logger.warning(f"Failed to write {path}: {e}")
            return WriteOutcome.failed(path, e.strerror or str(e))

        logger.debug(f"Created {path} ({len(content)} chars)")
        return WriteOutcome.ok(path)

    async def ensure_folder(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except FileExistsError as e:
            # exist_ok only covers directories; a file with that name is an error
            raise StorageError(f"{path} exists and is not a folder") from e
        except OSError as e:
            raise StorageError(e.strerror or str(e)) from e

    async def delete(self, path: str) -> None:
        target = self._resolve(path)
        try:
            await asyncio.to_thread(os.remove, target)
        except FileNotFoundError as e:
            raise ItemNotFoundError(path) from e
        except OSError as e:
            raise StorageError(f"Failed to delete {path}: {e.strerror or e}") from e
        logger.info(f"Deleted {path}")

    async def read(self, path: str) -> str:
        target = self._resolve(path)
        try:
            return await asyncio.to_thread(target.read_text, encoding="utf-8")
        except FileNotFoundError as e:
            raise ItemNotFoundError(path) from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e.strerror or e}") from e

    async def exists(self, path: str) -> bool:
        target = self._resolve(path)
        return await asyncio.to_thread(target.is_file)
