"""
File Naming Module for Note Splitter
Generates file names for split notes.

Key principles:
- Title mode uses the first line of each section, made safe for file systems
- Otherwise names are synthesized from a per-operation seed plus the index
- Names that collide at write time are replaced by a random conflict name
"""

import re
import time
import uuid

from .splitters.base import ContentFragment
from .settings import SplitSettings


# ============================================================================
# CONSTANTS
# ============================================================================

NOTE_EXTENSION = ".md"

# Common file system limit for a single path component, in bytes
MAX_FILE_NAME_BYTES = 255

SYNTHESIZED_PREFIX = "split-note-"
CONFLICT_PREFIX = "Split conflict "

_INVALID_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')
_WHITESPACE = re.compile(r'\s+')


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def new_seed() -> int:
    """Capture a naming seed for one split operation (epoch milliseconds)."""
    return int(time.time() * 1000)


def escape_invalid_filename_chars(name: str) -> str:
    """Remove characters that are not allowed in file names and tidy whitespace."""
    if not name:
        return ""
    cleaned = _INVALID_CHARS.sub('', name)
    cleaned = _WHITESPACE.sub(' ', cleaned).strip()
    # Trailing dots and spaces are dropped by some file systems
    return cleaned.rstrip('. ')


def trim_for_filename(name: str, extension: str = NOTE_EXTENSION) -> str:
    """
    Truncate a name so that name + extension fits in one path component.

    The limit is counted in UTF-8 bytes and never splits a character.
    """
    budget = MAX_FILE_NAME_BYTES - len(extension.encode("utf-8"))
    encoded = name.encode("utf-8")
    if len(encoded) <= budget:
        return name
    trimmed = encoded[:budget].decode("utf-8", errors="ignore")
    return trimmed.rstrip('. ')


def synthesized_name(seed: int, index: int) -> str:
    """Name for the fragment at `index` when titles are not derived from content."""
    return f"{SYNTHESIZED_PREFIX}{seed + index}"


def conflict_name() -> str:
    """Fresh name used once when the first-choice name already exists."""
    return f"{CONFLICT_PREFIX}{uuid.uuid4()}"


def normalize_path(path: str) -> str:
    """
    Normalize a vault-relative path.

    Backslashes become forward slashes, repeated slashes collapse, and
    leading/trailing slashes are removed. The vault root is "".
    """
    if not path:
        return ""
    normalized = re.sub(r'/+', '/', path.replace('\\', '/'))
    return normalized.strip('/')


def join_path(folder: str, name: str) -> str:
    return normalize_path(f"{folder}/{name}")


# ============================================================================
# NAME DERIVATION
# ============================================================================

def derive_name(fragment: ContentFragment, index: int, settings: SplitSettings, seed: int) -> str:
    """
    Derive the file name (without extension) for a fragment.

    Args:
        fragment: The section being written
        index: Zero-based position of the section in the note
        settings: Split settings, consulted for title mode
        seed: Value captured once per operation

    Returns:
        A file-system safe name
    """
    if settings.use_content_as_title:
        title = escape_invalid_filename_chars(fragment.first_line)
        title = trim_for_filename(title, NOTE_EXTENSION)
        if title:
            return title
    return synthesized_name(seed, index)


def note_path(folder: str, name: str) -> str:
    """Vault path of a note named `name` inside `folder`."""
    return join_path(folder, f"{name}{NOTE_EXTENSION}")
