"""Local file access for .editorconfig documents."""

from __future__ import annotations

import os
from pathlib import Path


def read_local_text(path: Path) -> str:
    """Return the file's text, or an empty string when it does not exist."""
    if not path.exists():
        return ""
    return path.read_text(encoding="utf-8")


def write_local_text(path: Path, text: str) -> None:
    """Write ``text`` through a sibling temp file so the target is never half written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        tmp_path.write_text(text, encoding="utf-8")
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


__all__ = ["read_local_text", "write_local_text"]
