"""CLI entrypoints for codingrules commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, NoReturn, Tuple

import yaml

from .config import ConfigError, load_config
from .editorconfig.suppressions import add_root_suppressions, remove_root_suppressions
from .fetch import FetchError, RemoteFetcher
from .logging import configure_logging
from .models import STATUS_UNCHANGED
from .orchestrator import Updater


def _add_verbose_option(parser: argparse.ArgumentParser, *, inherit: bool = False) -> None:
    # Subcommands inherit the top-level value unless -v is repeated after them.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if inherit else False,
        help="Log new canonical keys and full tracebacks of failed files.",
    )


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codingrules",
        description="Keep .editorconfig files in sync with a shared coding-rules distribution.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    update_parser = subparsers.add_parser(
        "update",
        help="Merge the distributed .editorconfig files into the project.",
    )
    _add_verbose_option(update_parser, inherit=True)
    _add_path_argument(update_parser)
    update_parser.add_argument(
        "--distribution-url",
        default=None,
        help="Base URL of the coding-rules distribution (overrides .codingrules.yml).",
    )
    update_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview .editorconfig changes without writing them.",
    )

    suppressions_parser = subparsers.add_parser(
        "suppressions",
        help="Manage the autogenerated temporary suppressions in the root .editorconfig.",
    )
    _add_verbose_option(suppressions_parser, inherit=True)
    suppressions_sub = suppressions_parser.add_subparsers(dest="action", required=True)

    remove_parser = suppressions_sub.add_parser(
        "remove",
        help="Remove the autogenerated suppressions block.",
    )
    _add_verbose_option(remove_parser, inherit=True)
    _add_path_argument(remove_parser)

    add_parser = suppressions_sub.add_parser(
        "add",
        help="Replace the autogenerated suppressions block with new suppressions.",
    )
    _add_verbose_option(add_parser, inherit=True)
    _add_path_argument(add_parser)
    add_parser.add_argument(
        "--input",
        required=True,
        help="YAML file mapping analyzer names to lists of suppression lines.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for codingrules commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    project = Path(args.path).expanduser().resolve()

    try:
        config = load_config(project)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

    if args.command == "update":
        if args.distribution_url:
            config.distribution_url = args.distribution_url.rstrip("/")
        dry_run = bool(getattr(args, "dry_run", False))
        updater = Updater(fetcher=RemoteFetcher(timeout=config.fetch.timeout))
        try:
            outcomes = updater.run(project, config, dry_run=dry_run)
        except FetchError as exc:
            parser.exit(1, f"codingrules update failed: {exc}\n")
        except Exception as exc:
            _fail(parser, "update", exc)
        changed = [outcome for outcome in outcomes if outcome.status != STATUS_UNCHANGED]
        if not changed:
            message = "All .editorconfig files already up to date"
            if dry_run:
                message += " (dry-run)"
            print(message)
        elif dry_run:
            print(".editorconfig changes (dry-run):")
            for outcome in changed:
                print(outcome.diff or "(no diff)")
        else:
            for outcome in changed:
                print(f"{outcome.description} {outcome.status} at {_project_relative(outcome.path, project)}")
    elif args.command == "suppressions":
        if args.action == "remove":
            try:
                removed = remove_root_suppressions(project)
            except Exception as exc:
                _fail(parser, "suppressions remove", exc)
            print("Removed autogenerated suppressions" if removed else "No autogenerated suppressions found")
        else:
            try:
                suppressions = _load_suppressions(Path(args.input))
            except (OSError, ValueError) as exc:
                parser.exit(1, f"Unable to read suppressions: {exc}\n")
            try:
                remove_root_suppressions(project)
                add_root_suppressions(project, suppressions)
            except Exception as exc:
                _fail(parser, "suppressions add", exc)
            print(f"Added autogenerated suppressions for {len(suppressions)} analyzer(s)")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _fail(parser: argparse.ArgumentParser, command: str, exc: Exception) -> NoReturn:
    parser.exit(1, f"codingrules {command} failed: {exc}\nRun with --verbose for more details.\n")


def _load_suppressions(path: Path) -> List[Tuple[str, List[str]]]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"{path.name} is not valid YAML: {exc}") from exc
    if not data:
        return []
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must map analyzer names to suppression lines")
    result: List[Tuple[str, List[str]]] = []
    for analyzer, lines in data.items():
        if isinstance(lines, str):
            lines = [lines]
        if not isinstance(lines, list):
            raise ValueError(f"Suppressions for '{analyzer}' must be a list of lines")
        result.append((str(analyzer), [str(line) for line in lines]))
    return result


def _project_relative(path: Path, project: Path) -> str:
    """Show written files relative to the project; mappings may point outside it."""
    try:
        return path.relative_to(project).as_posix()
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
