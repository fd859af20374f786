"""Severity diff reporting between canonical and local custom rules."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from ..logging import get_logger
from ..models import NOTICE_DUPLICATE, NOTICE_NEW, KeyValueItem, SeverityNotice
from .keyvalues import is_severity_key
from .text import split_lines

NOT_FOUND = -1


class SeverityDiffReporter:
    """Classifies canonical suppression keys against a local document.

    A canonical key that is redefined in the local custom rules is a
    *duplicate* and is reported as a warning with the line numbers of both
    definitions. A canonical key missing from the local document entirely is
    *new* and is reported at debug level. Keys defined only in the local base
    content are already covered by the merge and produce no notice.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("report")

    def classify(
        self,
        canonical_kvs: Iterable[KeyValueItem],
        local_all_kvs: Sequence[KeyValueItem],
        local_custom_kvs: Sequence[KeyValueItem],
        canonical_text: str,
        local_text: str,
    ) -> List[SeverityNotice]:
        canonical_lines = split_lines(canonical_text)
        local_lines = split_lines(local_text)
        custom_by_key = _first_by_key(local_custom_kvs)
        local_keys = {item.key for item in local_all_kvs}

        notices: List[SeverityNotice] = []
        for canonical in canonical_kvs:
            key = canonical.key
            if not is_severity_key(key):
                continue
            custom = custom_by_key.get(key)
            if custom is not None:
                notices.append(
                    SeverityNotice(
                        kind=NOTICE_DUPLICATE,
                        key=key,
                        canonical_value=canonical.value,
                        local_value=custom.value,
                        canonical_line=find_line_forward(canonical_lines, key),
                        local_line=find_line_reverse(local_lines, custom),
                    )
                )
            elif key not in local_keys:
                notices.append(
                    SeverityNotice(kind=NOTICE_NEW, key=key, canonical_value=canonical.value)
                )
        return notices

    def emit(self, notices: Iterable[SeverityNotice]) -> None:
        for notice in notices:
            if notice.kind == NOTICE_DUPLICATE:
                self.logger.warning("Duplicate key: %s", notice.key)
                self.logger.warning(
                    "-- GitHub section (line %s): %s",
                    format_line_number(notice.canonical_line),
                    notice.canonical_value.strip(),
                )
                self.logger.warning(
                    "-- Custom section (line %s): %s",
                    format_line_number(notice.local_line),
                    (notice.local_value or "").strip(),
                )
            else:
                self.logger.debug("- New key/value - %s=%s", notice.key, notice.canonical_value)

    def report(
        self,
        canonical_kvs: Iterable[KeyValueItem],
        local_all_kvs: Sequence[KeyValueItem],
        local_custom_kvs: Sequence[KeyValueItem],
        canonical_text: str,
        local_text: str,
    ) -> None:
        """Classify the keys and log one notice per duplicate or new key."""
        self.emit(
            self.classify(canonical_kvs, local_all_kvs, local_custom_kvs, canonical_text, local_text)
        )


def find_line_forward(lines: Sequence[str], key: str) -> int:
    """Return the 1-based number of the first line starting with ``key``."""
    for index, line in enumerate(lines):
        if line.startswith(key):
            return index + 1
    return NOT_FOUND


def find_line_reverse(lines: Sequence[str], item: KeyValueItem) -> int:
    """Return the 1-based number of the last line equal to ``key=value``."""
    assignment = item.as_assignment()
    for index in range(len(lines) - 1, -1, -1):
        if lines[index] == assignment:
            return index + 1
    return NOT_FOUND


def format_line_number(number: int) -> str:
    """Zero-pad to four digits, keeping the sign outside the padding (``-0001``)."""
    if number < 0:
        return "-" + format(-number, "04d")
    return format(number, "04d")


def _first_by_key(items: Iterable[KeyValueItem]) -> Dict[str, KeyValueItem]:
    result: Dict[str, KeyValueItem] = {}
    for item in items:
        result.setdefault(item.key, item)
    return result


__all__ = [
    "NOT_FOUND",
    "SeverityDiffReporter",
    "find_line_forward",
    "find_line_reverse",
    "format_line_number",
]
