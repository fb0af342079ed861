"""Split a Markdown note into separate notes using a delimiter."""

__version__ = "1.0.0"
