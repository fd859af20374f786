"""Line handling helpers for plain-text configuration documents."""

from __future__ import annotations

import re
from typing import Iterable, List

_LINE_BREAK = re.compile(r"\r\n|\n")


def split_lines(text: str) -> List[str]:
    """Split on CRLF or LF, keeping empty entries."""
    return _LINE_BREAK.split(text)


def trim_trailing_blank_lines(lines: Iterable[str]) -> List[str]:
    """Return a copy of ``lines`` without trailing empty or whitespace-only lines."""
    result = list(lines)
    while result and not result[-1].strip():
        result.pop()
    return result


def trim_end_text(text: str) -> str:
    return "\n".join(trim_trailing_blank_lines(split_lines(text)))


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(trim_trailing_blank_lines(lines))


def is_data_length_equal(first: str, second: str) -> bool:
    """Compare the encoded size of two documents.

    Mirrors the cheap change detection used by the updater: two documents of
    the same UTF-8 length are treated as having nothing to update.
    """
    return len(first.encode("utf-8")) == len(second.encode("utf-8"))


__all__ = [
    "is_data_length_equal",
    "join_lines",
    "split_lines",
    "trim_end_text",
    "trim_trailing_blank_lines",
]
