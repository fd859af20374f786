"""Segmenting, merging and reporting for distributed .editorconfig files."""

from .keyvalues import extract_key_values, extract_severity_key_values
from .merge import MergeEngine, merge_documents, render_document
from .report import SeverityDiffReporter
from .segmenter import SectionSegmenter, segment
from .suppressions import add_autogenerated_block, remove_autogenerated_block

__all__ = [
    "MergeEngine",
    "SectionSegmenter",
    "SeverityDiffReporter",
    "add_autogenerated_block",
    "extract_key_values",
    "extract_severity_key_values",
    "merge_documents",
    "remove_autogenerated_block",
    "render_document",
    "segment",
]
