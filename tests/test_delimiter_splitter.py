"""Tests for delimiter normalization, frontmatter stripping and partitioning."""

from __future__ import annotations

import pytest

from note_splitter.splitters import (
    ContentFragment,
    DelimiterSplitter,
    normalize_delimiter,
    partition,
    strip_frontmatter,
)
from note_splitter.splitters.delimiter import FRONTMATTER_MARKER


def _texts(fragments):
    return [f.raw_text for f in fragments]


# ---------------------------------------------------------------------------
# normalize_delimiter
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("\\n", "\n"),
        ("\\n\\n", "\n\n"),
        ("---", "---"),
        ("a\\nb", "a\nb"),
        ("", ""),
    ],
)
def test_normalize_delimiter_replaces_escaped_newlines(raw, expected):
    assert normalize_delimiter(raw) == expected


def test_normalize_delimiter_is_not_recursive():
    # Backslash, backslash, n: only the last pair is an escape
    assert normalize_delimiter("\\\\n") == "\\\n"


def test_normalize_delimiter_leaves_real_newlines_alone():
    assert normalize_delimiter("\n***\n") == "\n***\n"


# ---------------------------------------------------------------------------
# strip_frontmatter
# ---------------------------------------------------------------------------


def test_strip_frontmatter_removes_leading_block():
    text = "---\ntags: [a]\ntitle: x\n---\nBody"
    assert strip_frontmatter(text) == "Body"


def test_strip_frontmatter_without_block_returns_input():
    text = "Body\n---\nMore"
    assert strip_frontmatter(text) == text


def test_strip_frontmatter_unclosed_block_returns_input():
    text = "---\ntitle: x\nBody"
    assert strip_frontmatter(text) == text


def test_strip_frontmatter_stops_at_first_closing_marker():
    text = "---\na: 1\n---\nFirst\n---\nSecond"
    assert strip_frontmatter(text) == "First\n---\nSecond"


def test_strip_frontmatter_only_block_leaves_empty_body():
    assert strip_frontmatter("---\na: 1\n---") == ""


def test_strip_frontmatter_handles_crlf_markers():
    assert strip_frontmatter("---\r\na: 1\r\n---\r\nBody") == "Body"


def test_strip_frontmatter_uses_marker_constant():
    text = f"{FRONTMATTER_MARKER}\nk: v\n{FRONTMATTER_MARKER}  \nBody"
    assert strip_frontmatter(text) == "Body"


# ---------------------------------------------------------------------------
# partition
# ---------------------------------------------------------------------------


def test_partition_splits_and_trims():
    assert _texts(partition("A\n---\nB\n---\nC", "---")) == ["A", "B", "C"]


def test_partition_drops_whitespace_only_sections():
    fragments = partition("A\n\n\n \n\nB\n\n", "\n")
    assert _texts(fragments) == ["A", "B"]
    assert all(f.raw_text.strip() for f in fragments)


def test_partition_treats_delimiter_literally():
    assert _texts(partition("a.*b.*c", ".*")) == ["a", "b", "c"]


def test_partition_without_delimiter_in_text_gives_one_fragment():
    assert _texts(partition("Only one part", "---")) == ["Only one part"]


def test_partition_rejects_empty_delimiter():
    with pytest.raises(ValueError):
        partition("text", "")


def test_partition_keeps_inner_lines():
    fragments = partition("# Title\nline two\n%%\nNext", "%%")
    assert fragments[0] == ContentFragment(raw_text="# Title\nline two")
    assert fragments[0].first_line == "# Title"


# ---------------------------------------------------------------------------
# DelimiterSplitter
# ---------------------------------------------------------------------------


def test_splitter_reports_empty_delimiter():
    result = DelimiterSplitter("").split("A\nB")
    assert result.reason == "no_delimiter"
    assert not result.success


def test_splitter_reports_no_content_for_empty_note():
    result = DelimiterSplitter("---").split("")
    assert result.reason == "no_content"
    assert result.fragment_count == 0


def test_splitter_reports_no_content_for_frontmatter_only_note():
    result = DelimiterSplitter("\\n").split("---\ntitle: x\n---\n")
    assert result.reason == "no_content"


def test_splitter_reports_no_content_when_only_delimiters():
    result = DelimiterSplitter("---").split("---\n\n---\n---")
    assert result.reason == "no_content"


def test_splitter_reports_single_section():
    result = DelimiterSplitter("---").split("Only one part")
    assert result.reason == "single_section"
    assert result.fragment_count == 1
    assert not result.success


def test_splitter_splits_default_newline_delimiter():
    result = DelimiterSplitter("\\n").split("one\ntwo\n\nthree")
    assert result.success
    assert _texts(result.fragments) == ["one", "two", "three"]


def test_splitter_strips_frontmatter_before_splitting():
    text = "---\ntags: [meeting]\n---\nFirst\n---\nSecond"
    result = DelimiterSplitter("---").split(text)
    assert _texts(result.fragments) == ["First", "Second"]


def test_splitter_is_deterministic_for_same_text():
    text = "A\n***\nB\n***\nC"
    first = DelimiterSplitter("***").split(text)
    second = DelimiterSplitter("***").split(text)
    assert first.fragments == second.fragments
