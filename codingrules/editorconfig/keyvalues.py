"""Extraction of ``key=value`` assignments from configuration text."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Union

from ..models import KeyValueItem
from .constants import COMMENT_PREFIX, SEVERITY_KEY_PATTERN
from .text import split_lines

_SEVERITY_KEY = re.compile(SEVERITY_KEY_PATTERN)


def extract_key_values(
    source: Union[str, Iterable[str]],
    *,
    pattern: Optional[re.Pattern[str]] = None,
) -> List[KeyValueItem]:
    """Collect assignments from ``source``, skipping blanks, comments and malformed lines.

    A line is accepted only when splitting on ``=`` leaves exactly two
    non-empty tokens. Keys and values are kept verbatim so they can be matched
    back against the original lines. When ``pattern`` is given, only keys that
    fully match it are returned.
    """
    lines = split_lines(source) if isinstance(source, str) else source
    items: List[KeyValueItem] = []
    for line in lines:
        if not line or line.startswith(COMMENT_PREFIX):
            continue
        tokens = [token for token in line.split("=") if token]
        if len(tokens) != 2:
            continue
        key, value = tokens
        if pattern is not None and not pattern.fullmatch(key.strip()):
            continue
        items.append(KeyValueItem(key=key, value=value))
    return items


def extract_severity_key_values(source: Union[str, Iterable[str]]) -> List[KeyValueItem]:
    """Collect ``dotnet_diagnostic.<ID>.severity`` assignments only."""
    return extract_key_values(source, pattern=_SEVERITY_KEY)


def is_severity_key(key: str) -> bool:
    return _SEVERITY_KEY.fullmatch(key.strip()) is not None


__all__ = ["extract_key_values", "extract_severity_key_values", "is_severity_key"]
