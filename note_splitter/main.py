"""
Note Splitter

Splits the active Markdown note into separate notes:
1. Checks that a note is open, in editing mode and backed by a file
2. Reads the note once and splits it on the configured delimiter
3. Writes each section as a new note in the destination folder
4. Deletes the original when requested and every section was written
5. Reports the outcome through a notifier

Also provides a small HTTP server exposing the split command.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from aiohttp import web

from . import notifier as notices
from .config import CONFIG
from .exceptions import DestinationError, StorageError
from .materializer import OperationResult, SourceDocument, materialize
from .naming import new_seed, normalize_path
from .notifier import CollectingNotifier, Notifier
from .settings import SplitSettings
from .splitters import DelimiterSplitter
from .storage.base import VaultStorage

logger = logging.getLogger(__name__)

STORAGE_KEY = web.AppKey("storage", VaultStorage)
SETTINGS_KEY = web.AppKey("settings_provider", Callable[[], SplitSettings])

COMMAND_ID = "split-by-delimiter"
COMMAND_NAME = "Split by delimiter"

EDITING_MODE = "source"
PREVIEW_MODE = "preview"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for an entry point."""
    log_level = (level or CONFIG.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@dataclass(frozen=True)
class ActiveView:
    """The focused note as seen by the host."""

    file: Optional[SourceDocument]
    mode: str = EDITING_MODE

    @property
    def editable(self) -> bool:
        return self.mode == EDITING_MODE


# Host callback returning the focused view, or None when nothing is focused
ActiveViewProvider = Callable[[], Optional[ActiveView]]


# Track command status for health checks
command_status = {
    "healthy": True,
    "last_split": None,
    "notes_split": 0,
    "notes_created": 0,
    "errors": 0
}


async def split_note_by_delimiter(
    source: SourceDocument,
    settings: SplitSettings,
    storage: VaultStorage,
    notifier: Notifier,
    seed: Optional[int] = None,
) -> Optional[OperationResult]:
    """
    Split one note and write its sections.

    Returns None when nothing was written: empty delimiter, nothing to split,
    or a destination folder that could not be created.
    """
    splitter = DelimiterSplitter(settings.delimiter)

    if not splitter.has_delimiter:
        notifier.notify(notices.NO_DELIMITER)
        return None

    data = await storage.read(source.path)
    split_result = splitter.split(data)

    if split_result.reason == "no_content":
        notifier.notify(notices.NO_CONTENT)
        return None

    if split_result.reason == "single_section":
        notifier.notify(notices.SINGLE_SECTION)
        return None

    if seed is None:
        seed = new_seed()

    try:
        result = await materialize(
            split_result.fragments, settings, source, storage, notifier, seed
        )
    except DestinationError as e:
        logger.error(f"Aborting split of {source.path}: {e}")
        command_status["errors"] += 1
        notifier.notify(str(e))
        return None

    command_status["last_split"] = datetime.now(timezone.utc).isoformat()
    command_status["notes_split"] += 1
    command_status["notes_created"] += result.fragments_written
    command_status["errors"] += len(result.failures)

    notifier.notify(notices.split_summary(result.fragments_written))
    return result


async def run_split_command(
    get_active_view: ActiveViewProvider,
    settings: SplitSettings,
    storage: VaultStorage,
    notifier: Notifier,
) -> Optional[OperationResult]:
    """
    Entry point for the "Split by delimiter" command.

    Preconditions are checked in order and each failure is reported with
    its own notice.
    """
    view = get_active_view()
    if view is None:
        notifier.notify(notices.NO_ACTIVE_NOTE)
        return None

    if not view.editable:
        notifier.notify(notices.NOT_EDITING)
        return None

    if view.file is None or not normalize_path(view.file.path):
        notifier.notify(notices.NO_FILE)
        return None

    return await split_note_by_delimiter(view.file, settings, storage, notifier)


async def file_view(storage: VaultStorage, path: Optional[str], mode: str = EDITING_MODE) -> Optional[ActiveView]:
    """
    Build the active view for a vault path.

    No path means nothing is focused; a path that does not exist yields a
    view without a file.
    """
    if path is None:
        return None
    normalized = normalize_path(path)
    if not normalized or not await storage.exists(normalized):
        return ActiveView(file=None, mode=mode)
    return ActiveView(file=SourceDocument(path=normalized), mode=mode)


# HTTP command handlers
async def health_handler(request):
    """Health check endpoint."""
    return web.json_response({
        "status": "healthy" if command_status["healthy"] else "unhealthy",
        "last_split": command_status["last_split"],
        "notes_split": command_status["notes_split"],
        "notes_created": command_status["notes_created"],
        "errors": command_status["errors"]
    })


async def root_handler(request):
    """Root endpoint."""
    return web.Response(text="Note Splitter")


async def split_handler(request):
    """
    Run the split command for the note named in the request.

    Body: {"path": "folder/note.md", "mode": "source"}
    """
    try:
        payload = await request.json()
    except ValueError:
        return web.json_response({"error": "Request body must be JSON"}, status=400)
    if not isinstance(payload, dict):
        return web.json_response({"error": "Request body must be a JSON object"}, status=400)

    path = payload.get("path")
    mode = payload.get("mode", EDITING_MODE)
    if path is not None and not isinstance(path, str):
        return web.json_response({"error": "'path' must be a string"}, status=400)
    if not isinstance(mode, str):
        return web.json_response({"error": "'mode' must be a string"}, status=400)

    storage: VaultStorage = request.app[STORAGE_KEY]
    settings: SplitSettings = request.app[SETTINGS_KEY]()
    collector = CollectingNotifier()

    try:
        view = await file_view(storage, path, mode)
        result = await run_split_command(lambda: view, settings, storage, collector)
    except StorageError as e:
        logger.error(f"Split command failed: {e}", exc_info=True)
        command_status["errors"] += 1
        return web.json_response({"error": str(e), "notices": collector.messages}, status=502)

    return web.json_response({
        "notices": collector.messages,
        "result": result.to_dict() if result else None
    })


def create_app(storage: VaultStorage, settings_provider: Callable[[], SplitSettings]) -> web.Application:
    """Build the command server application."""
    app = web.Application()
    app[STORAGE_KEY] = storage
    app[SETTINGS_KEY] = settings_provider
    app.router.add_get("/", root_handler)
    app.router.add_get("/health", health_handler)
    app.router.add_post(f"/commands/{COMMAND_ID}", split_handler)

    async def close_storage(app):
        await app[STORAGE_KEY].aclose()

    app.on_cleanup.append(close_storage)
    return app


def serve(storage: VaultStorage, settings_provider: Callable[[], SplitSettings], port: Optional[int] = None) -> None:
    """Run the command server until interrupted."""
    port = port or CONFIG.PORT
    logger.info("="*60)
    logger.info("Note Splitter command server")
    logger.info(f"Command: {COMMAND_NAME} (POST /commands/{COMMAND_ID})")
    logger.info(f"Port: {port}")
    logger.info("="*60)
    web.run_app(create_app(storage, settings_provider), host="0.0.0.0", port=port, print=None)
