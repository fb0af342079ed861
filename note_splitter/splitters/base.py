"""
Base Splitter Class

Provides the result type and common interface for all note splitters.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ContentFragment:
    """One trimmed, non-empty section of a note."""

    raw_text: str

    @property
    def first_line(self) -> str:
        return self.raw_text.split("\n")[0]


@dataclass
class SplitResult:
    """Result of a note split operation."""

    # Fragments in source order
    fragments: list[ContentFragment] = field(default_factory=list)

    # Whether the note can be materialized (two or more fragments)
    success: bool = False

    # Reason if splitting was skipped
    reason: Optional[str] = None

    @property
    def fragment_count(self) -> int:
        return len(self.fragments)

    @classmethod
    def split(cls, fragments: list[ContentFragment]) -> 'SplitResult':
        """Return a result holding multiple fragments."""
        return cls(fragments=fragments, success=True)

    @classmethod
    def no_delimiter(cls) -> 'SplitResult':
        """Return a result indicating the delimiter is empty."""
        return cls(reason="no_delimiter")

    @classmethod
    def no_content(cls) -> 'SplitResult':
        """Return a result indicating there was nothing to split."""
        return cls(reason="no_content")

    @classmethod
    def single_section(cls, fragments: list[ContentFragment]) -> 'SplitResult':
        """Return a result indicating the note holds one section only."""
        return cls(fragments=fragments, reason="single_section")


class BaseSplitter(ABC):
    """
    Abstract base class for note splitters.

    Subclasses turn a note body into an ordered list of fragments and
    report why a note was not split when there is nothing to do.
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def split(self, text: str) -> SplitResult:
        """
        Split a note body into fragments.

        Args:
            text: The full note content, frontmatter included

        Returns:
            SplitResult with the fragments or the reason nothing was split
        """
        pass
