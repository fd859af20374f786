"""Merge canonical .editorconfig content into a locally customised copy."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..models import (
    STATUS_CREATED,
    STATUS_MERGED,
    STATUS_UNCHANGED,
    CustomPart,
    MergeResult,
    SeverityNotice,
)
from .constants import (
    CODE_ANALYZERS_RULES_LABEL,
    CUSTOM_SECTION_FIRST_LINE,
    CUSTOM_SECTION_HEADER_PREFIX,
    ROOT_MARKER,
    SECTION_DIVIDER,
)
from .keyvalues import extract_severity_key_values
from .report import SeverityDiffReporter
from .segmenter import SectionSegmenter
from .text import is_data_length_equal, trim_end_text


class MergeEngine:
    """Reconciles canonical content with a local document.

    The base part always comes from the canonical side. Custom parts come from
    the local side; canonical parts whose label the local document lacks are
    added. Local content wins for labels present on both sides.
    """

    def __init__(
        self,
        segmenter: SectionSegmenter | None = None,
        reporter: SeverityDiffReporter | None = None,
    ) -> None:
        self.segmenter = segmenter or SectionSegmenter()
        self.reporter = reporter or SeverityDiffReporter()

    def merge(self, canonical: str, local: str) -> MergeResult:
        if is_data_length_equal(canonical, local):
            return MergeResult(status=STATUS_UNCHANGED, content=local)

        if not local:
            return MergeResult(status=STATUS_CREATED, content=canonical)

        canonical_doc = self.segmenter.segment(canonical)
        local_doc = self.segmenter.segment(local)

        # Only base parts are compared; custom-part edits alone never trigger a rewrite.
        if is_data_length_equal(canonical_doc.base, local_doc.base):
            return MergeResult(status=STATUS_UNCHANGED, content=local)

        parts = local_doc.custom_parts()
        insert_canonical_only_parts(canonical_doc.custom_parts(), parts)
        if ROOT_MARKER in canonical:
            seed_code_analyzers_rules(parts)

        content = render_document(canonical_doc.base, parts)
        notices = self._classify(canonical, local, content, parts)
        return MergeResult(status=STATUS_MERGED, content=content, notices=notices)

    def _classify(
        self,
        canonical: str,
        local: str,
        merged: str,
        parts: List[CustomPart],
    ) -> List[SeverityNotice]:
        rules = find_part(parts, CODE_ANALYZERS_RULES_LABEL)
        if rules is None:
            return []
        return self.reporter.classify(
            extract_severity_key_values(canonical),
            extract_severity_key_values(local),
            extract_severity_key_values(rules.lines),
            canonical,
            merged,
        )


def insert_canonical_only_parts(canonical_parts: Iterable[CustomPart], local_parts: List[CustomPart]) -> None:
    """Add canonical parts missing from ``local_parts`` in place.

    Each missing part goes to the front when a Code Analyzers Rules part is
    already present, otherwise to the end.
    """
    for part in canonical_parts:
        if find_part(local_parts, part.header) is not None:
            continue
        if find_part(local_parts, CODE_ANALYZERS_RULES_LABEL) is not None:
            local_parts.insert(0, part)
        else:
            local_parts.append(part)


def seed_code_analyzers_rules(parts: Iterable[CustomPart]) -> None:
    """Give an empty Code Analyzers Rules part its file-pattern header line."""
    for part in parts:
        if part.header == CODE_ANALYZERS_RULES_LABEL and not part.lines:
            part.lines.insert(0, CUSTOM_SECTION_FIRST_LINE)


def find_part(parts: Iterable[CustomPart], header: str) -> Optional[CustomPart]:
    for part in parts:
        if part.header == header:
            return part
    return None


def render_document(base: str, parts: Iterable[CustomPart]) -> str:
    """Serialize a base part followed by framed custom parts."""
    parts = list(parts)
    chunks: List[str] = [base]
    if parts:
        chunks.append("\n")
    for part in parts:
        chunks.append("\n\n")
        chunks.append(f"{SECTION_DIVIDER}\n")
        chunks.append(f"{CUSTOM_SECTION_HEADER_PREFIX}{part.header}\n")
        chunks.append(f"{SECTION_DIVIDER}\n")
        for line in part.lines:
            chunks.append(f"{line}\n")
    return trim_end_text("".join(chunks))


def merge_documents(canonical: str, local: str) -> MergeResult:
    return MergeEngine().merge(canonical, local)


__all__ = [
    "MergeEngine",
    "find_part",
    "insert_canonical_only_parts",
    "merge_documents",
    "render_document",
    "seed_code_analyzers_rules",
]
