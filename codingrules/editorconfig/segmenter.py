"""Split .editorconfig documents into a base part and custom parts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from ..models import SegmentedDocument
from .constants import CUSTOM_SECTION_HEADER_PREFIX, SECTION_DIVIDER
from .text import split_lines, trim_end_text, trim_trailing_blank_lines


@dataclass(frozen=True)
class _InBase:
    pass


@dataclass(frozen=True)
class _InCustomPart:
    label: str


_State = Union[_InBase, _InCustomPart]


class SectionSegmenter:
    """Scans a document line by line and groups it into labeled sections.

    A divider line immediately followed by a ``# Custom - <label>`` line ends
    whatever came before it and opens a new custom part. Everything ahead of the
    first such pair is the base part. When a label repeats, the first part
    recorded under it is kept and later ones are dropped.
    """

    def segment(self, document: str) -> SegmentedDocument:
        lines = split_lines(document)
        base_lines: List[str] = []
        parts: Dict[str, List[str]] = {}
        buffer: List[str] = []
        state: _State = _InBase()

        for index, line in enumerate(lines):
            label = _opening_label(lines, index)
            if label is not None:
                if isinstance(state, _InCustomPart):
                    _close_part(parts, state.label, buffer)
                state = _InCustomPart(label)
                buffer = []
                continue

            if isinstance(state, _InBase):
                base_lines.append(line)
            elif not _is_structural_line(line):
                buffer.append(line)

        if isinstance(state, _InCustomPart):
            _close_part(parts, state.label, buffer)

        return SegmentedDocument(base=trim_end_text("\n".join(base_lines)), parts=parts)


def _opening_label(lines: Sequence[str], index: int) -> Optional[str]:
    if lines[index] != SECTION_DIVIDER or index + 1 >= len(lines):
        return None
    next_line = lines[index + 1]
    if not next_line.startswith(CUSTOM_SECTION_HEADER_PREFIX):
        return None
    return next_line[len(CUSTOM_SECTION_HEADER_PREFIX):].strip()


def _is_structural_line(line: str) -> bool:
    return line == SECTION_DIVIDER or line.startswith(CUSTOM_SECTION_HEADER_PREFIX)


def _close_part(parts: Dict[str, List[str]], label: str, buffer: List[str]) -> None:
    # An empty label never names a part; its lines are dropped.
    if not label or label in parts:
        return
    parts[label] = trim_trailing_blank_lines(buffer)


def segment(document: str) -> SegmentedDocument:
    return SectionSegmenter().segment(document)


__all__ = ["SectionSegmenter", "segment"]
