"""Maintain the autogenerated temporary-suppressions block of the root .editorconfig."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable, List, Sequence, Tuple

from ..files import read_local_text, write_local_text
from ..logging import get_logger
from .constants import (
    AUTOGENERATED_FILE_PATTERN,
    AUTOGENERATED_HEADER,
    AUTOGENERATED_INSTRUCTIONS,
    FILE_NAME,
    SECTION_DIVIDER,
)
from .text import join_lines, split_lines

Clock = Callable[[], datetime]
AnalyzerSuppressions = Tuple[str, Sequence[str]]

TIMESTAMP_FORMAT = "%A, %d %B %Y %H:%M:%S"

logger = get_logger("suppressions")


def has_autogenerated_block(text: str) -> bool:
    return AUTOGENERATED_HEADER in split_lines(text)


def remove_autogenerated_block(text: str) -> str:
    """Return ``text`` without its autogenerated suppressions block.

    Content following the block resumes at the next divider after the block's
    closing divider. Text without the header is returned unchanged.
    """
    lines = split_lines(text)
    if AUTOGENERATED_HEADER not in lines:
        return text
    return join_lines(_lines_before_block(lines) + _lines_after_block(lines))


def add_autogenerated_block(
    text: str,
    suppressions: Iterable[AnalyzerSuppressions],
    *,
    clock: Clock = datetime.now,
) -> str:
    """Append a freshly generated suppressions block to ``text``."""
    lines = split_lines(text)
    lines.extend(["", "", SECTION_DIVIDER, AUTOGENERATED_HEADER])
    lines.append(f"# generated @ {clock().strftime(TIMESTAMP_FORMAT)}")
    lines.extend(AUTOGENERATED_INSTRUCTIONS)
    lines.append(SECTION_DIVIDER)
    lines.append(AUTOGENERATED_FILE_PATTERN)
    for analyzer_name, suppression_lines in suppressions:
        lines.append("")
        lines.append(f"# {analyzer_name}")
        lines.extend(suppression_lines)
    return join_lines(lines)


def remove_root_suppressions(root: Path) -> bool:
    """Strip the autogenerated block from ``root/.editorconfig``.

    Returns True when the file was rewritten.
    """
    path = root / FILE_NAME
    text = read_local_text(path)
    if not has_autogenerated_block(text):
        logger.debug("No autogenerated suppressions found in %s", path)
        return False
    write_local_text(path, remove_autogenerated_block(text))
    logger.info("Removed autogenerated suppressions from %s", path)
    return True


def add_root_suppressions(
    root: Path,
    suppressions: Iterable[AnalyzerSuppressions],
    *,
    clock: Clock = datetime.now,
) -> None:
    """Append an autogenerated block to ``root/.editorconfig``."""
    path = root / FILE_NAME
    suppressions = list(suppressions)
    text = read_local_text(path)
    write_local_text(path, add_autogenerated_block(text, suppressions, clock=clock))
    logger.info(
        "Added autogenerated suppressions for %d analyzer(s) to %s",
        len(suppressions),
        path,
    )


def _lines_before_block(lines: Sequence[str]) -> List[str]:
    result: List[str] = []
    for line in lines:
        if line == AUTOGENERATED_HEADER:
            break
        result.append(line)
    if result and result[-1] == SECTION_DIVIDER:
        result.pop()
    return result


def _lines_after_block(lines: Sequence[str]) -> List[str]:
    result: List[str] = []
    found_header = False
    found_opening_divider = False
    found_closing_divider = False
    for line in lines:
        if not found_header:
            found_header = line == AUTOGENERATED_HEADER
            continue
        if line == SECTION_DIVIDER:
            if not found_opening_divider:
                found_opening_divider = True
                continue
            found_closing_divider = True
        if found_closing_divider:
            result.append(line)
    return result


__all__ = [
    "TIMESTAMP_FORMAT",
    "add_autogenerated_block",
    "add_root_suppressions",
    "has_autogenerated_block",
    "remove_autogenerated_block",
    "remove_root_suppressions",
]
