"""
Delimiter Splitter

Deterministic splitting of a Markdown note on a literal delimiter:
- The delimiter setting may contain the escape sequence \\n for a newline
- A leading frontmatter block is removed before splitting
- Sections are trimmed and empty sections are dropped
"""

import re
import logging

from .base import BaseSplitter, ContentFragment, SplitResult

logger = logging.getLogger(__name__)

# Marker line that opens and closes a frontmatter block
FRONTMATTER_MARKER = "---"

_MARKER_LINE = re.compile(rf'^{re.escape(FRONTMATTER_MARKER)}[ \t]*$')


def normalize_delimiter(raw: str) -> str:
    """
    Replace each literal backslash-n pair with a newline.

    Applied once and not recursively, so "\\\\n" becomes a backslash
    followed by a newline.
    """
    return raw.replace("\\n", "\n")


def strip_frontmatter(text: str) -> str:
    """
    Remove a frontmatter block from the start of a note.

    The block opens with a `---` line on the very first line and closes at
    the next `---` line. Without a closing marker the note is returned
    unchanged.
    """
    lines = text.split("\n")
    if not lines or not _MARKER_LINE.match(lines[0].rstrip("\r")):
        return text

    for i in range(1, len(lines)):
        if _MARKER_LINE.match(lines[i].rstrip("\r")):
            return "\n".join(lines[i + 1:])

    return text


def partition(text: str, delimiter: str) -> list[ContentFragment]:
    """
    Split text on every occurrence of a literal delimiter.

    Each section is trimmed and sections that end up empty are dropped.
    Order follows the source text.
    """
    if not delimiter:
        raise ValueError("delimiter must not be empty")

    fragments = []
    for section in text.split(delimiter):
        section = section.strip()
        if section:
            fragments.append(ContentFragment(raw_text=section))
    return fragments


class DelimiterSplitter(BaseSplitter):
    """
    Splitter for notes separated by a user-defined delimiter.

    The delimiter is taken in its stored (escaped) form and normalized once
    at construction.
    """

    def __init__(self, delimiter: str):
        super().__init__()
        self.raw_delimiter = delimiter
        self.delimiter = normalize_delimiter(delimiter)

    @property
    def has_delimiter(self) -> bool:
        return self.delimiter != ""

    def split(self, text: str) -> SplitResult:
        """
        Split a note into fragments.

        Strategy:
        1. Reject an empty delimiter
        2. Strip the frontmatter block
        3. Partition on the delimiter and classify the outcome
        """
        if not self.has_delimiter:
            return SplitResult.no_delimiter()

        body = strip_frontmatter(text)
        if body.strip() == "":
            self.logger.debug("Note is empty after removing frontmatter")
            return SplitResult.no_content()

        fragments = partition(body, self.delimiter)

        if not fragments:
            return SplitResult.no_content()

        if len(fragments) == 1:
            return SplitResult.single_section(fragments)

        self.logger.info(f"Found {len(fragments)} sections using delimiter {self.raw_delimiter!r}")
        return SplitResult.split(fragments)
