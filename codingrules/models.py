"""Core data models shared across codingrules components."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

STATUS_UNCHANGED = "unchanged"
STATUS_CREATED = "created"
STATUS_MERGED = "merged"

NOTICE_DUPLICATE = "duplicate"
NOTICE_NEW = "new"


@dataclass(frozen=True)
class KeyValueItem:
    """Single ``key=value`` assignment parsed from a configuration line."""

    key: str
    value: str

    def as_assignment(self) -> str:
        return f"{self.key}={self.value}"


@dataclass
class CustomPart:
    """User-owned section that follows the base part of a document."""

    header: str
    lines: List[str] = field(default_factory=list)


@dataclass
class SegmentedDocument:
    """A document split into its base part and labeled custom parts.

    ``parts`` preserves first-seen order; iteration order is serialization order.
    """

    base: str
    parts: Dict[str, List[str]] = field(default_factory=dict)

    def custom_parts(self) -> List[CustomPart]:
        return [CustomPart(header=header, lines=list(lines)) for header, lines in self.parts.items()]


@dataclass(frozen=True)
class SeverityNotice:
    """Classification of a canonical suppression key against local content."""

    kind: str
    key: str
    canonical_value: str
    local_value: Optional[str] = None
    canonical_line: int = -1
    local_line: int = -1


@dataclass
class MergeResult:
    """Outcome of reconciling canonical content with a local document."""

    status: str
    content: str
    notices: List[SeverityNotice] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return self.status != STATUS_UNCHANGED


@dataclass
class FileOutcome:
    """Result of handling one .editorconfig file on disk."""

    path: Path
    description: str
    status: str
    notices: List[SeverityNotice] = field(default_factory=list)
    diff: str = ""
    dry_run: bool = False
