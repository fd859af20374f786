"""Pipeline orchestration for coding-rule updates across a project."""

from __future__ import annotations

import difflib
import threading
from pathlib import Path
from typing import List, Optional, Tuple

from .config import PROJECT_AREAS, CodingRulesConfig, load_config
from .editorconfig.constants import FILE_NAME
from .editorconfig.merge import MergeEngine
from .editorconfig.text import trim_end_text
from .fetch import RemoteFetcher
from .files import read_local_text, write_local_text
from .logging import area_logger, get_logger
from .models import STATUS_CREATED, STATUS_UNCHANGED, FileOutcome


class Updater:
    """Coordinates fetching, merging and writing of .editorconfig files."""

    def __init__(
        self,
        fetcher: RemoteFetcher | None = None,
        engine: MergeEngine | None = None,
    ) -> None:
        self.fetcher = fetcher or RemoteFetcher()
        self.engine = engine or MergeEngine()
        self.logger = get_logger("orchestrator")

    def run(
        self,
        project_path: str | Path,
        config: CodingRulesConfig | None = None,
        *,
        dry_run: bool = False,
        cancel: Optional[threading.Event] = None,
    ) -> List[FileOutcome]:
        """Update the root .editorconfig and one per mapped project directory.

        Mapped directories that do not exist are skipped, except on the first
        run for a project (no root .editorconfig yet), when they are created.
        """
        project = Path(project_path).expanduser().resolve()
        if config is None:
            config = load_config(project)
        if config.fetch.timeout is not None:
            self.fetcher.timeout = config.fetch.timeout

        self.logger.info("Updating coding rules for %s", project)
        first_run = not (project / FILE_NAME).exists()
        targets = self._targets(project, config)
        outcomes: List[FileOutcome] = []
        for index, (area, directory, url_part) in enumerate(targets):
            if cancel is not None and cancel.is_set():
                self.logger.warning(
                    "Update cancelled; %d file(s) left unprocessed", len(targets) - index
                )
                break
            if url_part and not first_run and not directory.is_dir():
                self.logger.debug("%s/%s skipped, %s does not exist", url_part, FILE_NAME, directory)
                continue
            outcomes.append(
                self.handle_file(area, config.distribution_url, directory, url_part, dry_run=dry_run)
            )
        return outcomes

    def handle_file(
        self,
        area: str,
        distribution_url: str,
        directory: Path,
        url_part: str,
        *,
        dry_run: bool = False,
    ) -> FileOutcome:
        """Fetch the canonical file for ``url_part`` and reconcile ``directory/.editorconfig``."""
        description = f"{url_part}: {FILE_NAME}" if url_part else f"root: {FILE_NAME}"
        path = directory / FILE_NAME
        url = (
            f"{distribution_url}/{url_part}/{FILE_NAME}"
            if url_part
            else f"{distribution_url}/{FILE_NAME}"
        )

        try:
            canonical = trim_end_text(self.fetcher.fetch(url))
            local = read_local_text(path)
            return self.handle_content(canonical, local, description, path, dry_run=dry_run)
        except Exception as exc:
            area_logger(area, "orchestrator").failure(exc)
            raise

    def handle_content(
        self,
        canonical: str,
        local: str,
        description: str,
        path: Path,
        *,
        dry_run: bool = False,
    ) -> FileOutcome:
        """Merge already-loaded texts and persist the result unless nothing changed."""
        result = self.engine.merge(canonical, local)
        if result.status == STATUS_UNCHANGED:
            self.logger.info("%s nothing to update", description)
            return FileOutcome(path=path, description=description, status=result.status, dry_run=dry_run)

        created = result.status == STATUS_CREATED
        diff = ""
        if dry_run:
            diff = self._render_diff(local, result.content, path)
            self.logger.info(
                "%s would be %s (dry-run)", description, "created" if created else "merged"
            )
        else:
            write_local_text(path, result.content)
            self.logger.info("%s %s", description, "created" if created else "files merged")

        self.engine.reporter.emit(result.notices)
        return FileOutcome(
            path=path,
            description=description,
            status=result.status,
            notices=result.notices,
            diff=diff,
            dry_run=dry_run,
        )

    @staticmethod
    def _targets(project: Path, config: CodingRulesConfig) -> List[Tuple[str, Path, str]]:
        targets: List[Tuple[str, Path, str]] = [("root", project, "")]
        for area in PROJECT_AREAS:
            for relative in config.mappings.paths_for(area):
                targets.append((area, project / relative, area))
        return targets

    @staticmethod
    def _render_diff(original: str, updated: str, path: Path) -> str:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{path.name} (original)",
            tofile=f"{path.name} (updated)",
        )
        return "".join(diff)


__all__ = ["Updater"]
