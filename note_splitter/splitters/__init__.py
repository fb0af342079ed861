"""
Note Splitters Module

Provides deterministic splitting of a note into independent sections.
"""

from .base import BaseSplitter, ContentFragment, SplitResult
from .delimiter import DelimiterSplitter, normalize_delimiter, partition, strip_frontmatter

__all__ = [
    'BaseSplitter',
    'ContentFragment',
    'SplitResult',
    'DelimiterSplitter',
    'normalize_delimiter',
    'partition',
    'strip_frontmatter',
]
