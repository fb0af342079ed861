"""
Fragment Materializer

Writes the sections of a split note into the destination folder and decides
whether the original note may be removed.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from . import notifier as notices
from .exceptions import DestinationError, StorageError
from .naming import conflict_name, derive_name, normalize_path, note_path
from .notifier import Notifier
from .settings import SplitSettings
from .splitters.base import ContentFragment
from .storage.base import VaultStorage, WriteOutcome, WriteStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceDocument:
    """The note being split, identified by its vault path."""

    path: str

    @property
    def parent(self) -> Optional[str]:
        """Containing folder ("" for the vault root), None without a path."""
        normalized = normalize_path(self.path)
        if not normalized:
            return None
        return normalized.rpartition("/")[0]


@dataclass(frozen=True)
class FragmentFailure:
    index: int
    path: str
    reason: str


@dataclass
class OperationResult:
    """Outcome of writing all fragments of one note."""

    fragments_total: int
    fragments_written: int = 0
    created_paths: list[str] = field(default_factory=list)
    failures: list[FragmentFailure] = field(default_factory=list)
    source_deleted: bool = False

    @property
    def complete(self) -> bool:
        return self.fragments_written == self.fragments_total

    def to_dict(self) -> dict:
        return {
            'fragments_total': self.fragments_total,
            'fragments_written': self.fragments_written,
            'created_paths': list(self.created_paths),
            'failures': [
                {'index': f.index, 'path': f.path, 'reason': f.reason} for f in self.failures
            ],
            'source_deleted': self.source_deleted,
        }


def resolve_destination(settings: SplitSettings, source: SourceDocument) -> str:
    """Configured folder, else the source's folder, else the vault root."""
    if settings.save_folder_path:
        return normalize_path(settings.save_folder_path)
    return source.parent or ""


def build_body(fragment: ContentFragment, settings: SplitSettings) -> str:
    body = fragment.raw_text
    if settings.append_to_split_content:
        body += settings.append_to_split_content
    return body


async def write_fragment(storage: VaultStorage, folder: str, name: str, body: str) -> WriteOutcome:
    """
    Create one note, retrying once under a conflict name on collision.

    The retry goes to the same folder with the same body.
    """
    outcome = await storage.create_if_absent(note_path(folder, name), body)
    if outcome.status != WriteStatus.ALREADY_EXISTS:
        return outcome

    retry_path = note_path(folder, conflict_name())
    logger.info(f"{outcome.path} already exists, writing {retry_path} instead")
    return await storage.create_if_absent(retry_path, body)


async def materialize(
    fragments: list[ContentFragment],
    settings: SplitSettings,
    source: SourceDocument,
    storage: VaultStorage,
    notifier: Notifier,
    seed: int,
) -> OperationResult:
    """
    Write every fragment and delete the source when all of them succeeded.

    Args:
        fragments: Sections in note order
        settings: Split settings
        source: The note being split
        storage: Vault backend
        notifier: Receives one notice per fragment that could not be written
        seed: Naming seed captured once for this operation

    Returns:
        OperationResult with written/total counts

    Raises:
        DestinationError: If the destination folder cannot be created
    """
    folder = resolve_destination(settings, source)

    try:
        await storage.ensure_folder(folder)
    except StorageError as e:
        raise DestinationError(folder, str(e)) from e

    result = OperationResult(fragments_total=len(fragments))

    for i, fragment in enumerate(fragments):
        body = build_body(fragment, settings)
        name = derive_name(fragment, i, settings, seed)

        outcome = await write_fragment(storage, folder, name, body)

        if outcome.created:
            result.fragments_written += 1
            result.created_paths.append(outcome.path)
            continue

        reason = outcome.reason or outcome.status.value
        logger.error(f"Failed to create section {i + 1} of {source.path} at {outcome.path}: {reason}")
        result.failures.append(FragmentFailure(index=i, path=outcome.path, reason=reason))
        notifier.notify(notices.create_error(reason))

    if result.complete and settings.delete_original_note:
        try:
            await storage.delete(source.path)
            result.source_deleted = True
        except StorageError as e:
            logger.error(f"Failed to delete original note {source.path}: {e}")
            notifier.notify(notices.delete_error(str(e)))

    logger.info(
        f"Wrote {result.fragments_written}/{result.fragments_total} sections of {source.path} to "
        f"{folder or '/'}"
    )
    return result
