"""Shared fixtures for note-splitter tests."""

from __future__ import annotations

from typing import Optional

import pytest

from note_splitter.exceptions import ItemNotFoundError, StorageError
from note_splitter.main import command_status
from note_splitter.naming import normalize_path
from note_splitter.notifier import CollectingNotifier
from note_splitter.storage.base import VaultStorage, WriteOutcome


class MemoryStorage(VaultStorage):
    """In-memory vault with switches for failure scenarios."""

    def __init__(self, files: Optional[dict[str, str]] = None):
        self.files: dict[str, str] = {normalize_path(k): v for k, v in (files or {}).items()}
        self.folders: set[str] = {""}
        self.writes: list[str] = []
        self.deleted: list[str] = []
        self.reads: list[str] = []
        # ordered ("write" | "delete", path) pairs
        self.events: list[tuple[str, str]] = []
        # path prefix -> failure reason for create_if_absent
        self.fail_writes: dict[str, str] = {}
        self.fail_folder: Optional[str] = None
        self.fail_delete: Optional[str] = None
        self.collide_all = False

    async def create_if_absent(self, path: str, content: str) -> WriteOutcome:
        path = normalize_path(path)
        self.writes.append(path)
        self.events.append(("write", path))
        for prefix, reason in self.fail_writes.items():
            if path.startswith(prefix):
                return WriteOutcome.failed(path, reason)
        if path in self.files or self.collide_all:
            return WriteOutcome.exists(path)
        self.files[path] = content
        return WriteOutcome.ok(path)

    async def ensure_folder(self, path: str) -> None:
        if self.fail_folder:
            raise StorageError(self.fail_folder)
        self.folders.add(normalize_path(path))

    async def delete(self, path: str) -> None:
        path = normalize_path(path)
        if self.fail_delete:
            raise StorageError(self.fail_delete)
        if path not in self.files:
            raise ItemNotFoundError(path)
        del self.files[path]
        self.deleted.append(path)
        self.events.append(("delete", path))

    async def read(self, path: str) -> str:
        path = normalize_path(path)
        self.reads.append(path)
        if path not in self.files:
            raise ItemNotFoundError(path)
        return self.files[path]

    async def exists(self, path: str) -> bool:
        return normalize_path(path) in self.files

    def in_folder(self, folder: str) -> dict[str, str]:
        prefix = f"{folder}/" if folder else ""
        return {
            k: v for k, v in self.files.items()
            if k.startswith(prefix) and "/" not in k[len(prefix):]
        }


@pytest.fixture
def storage_factory():
    return MemoryStorage


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()


@pytest.fixture(autouse=True)
def reset_command_status():
    saved = dict(command_status)
    yield
    command_status.clear()
    command_status.update(saved)
