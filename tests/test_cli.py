"""CLI parser and command behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from codingrules import cli
from codingrules.cli import _build_parser, main
from codingrules.editorconfig.constants import AUTOGENERATED_HEADER
from codingrules.fetch import FetchRequest, RemoteFetcher


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "update"])
    assert args.verbose is True
    assert args.command == "update"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["update", "--verbose"])
    assert args.verbose is True
    assert args.command == "update"


def test_cli_accepts_update_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["update", "proj", "--dry-run", "--distribution-url", "https://x.test/d"])
    assert args.path == "proj"
    assert args.dry_run is True
    assert args.distribution_url == "https://x.test/d"


def test_cli_requires_input_for_suppressions_add() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["suppressions", "add"])


def test_update_command_writes_files(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".codingrules.yml").write_text(
        "mappings:\n  src: []\n  test: []\n  sample: []\n", encoding="utf-8"
    )

    def transport(request: FetchRequest) -> str:
        assert request.url == "https://x.test/d/.editorconfig"
        return "root = true\n[*.cs]\nindent_size = 4"

    monkeypatch.setattr(
        cli, "RemoteFetcher", lambda timeout=None: RemoteFetcher(timeout=timeout, transport=transport)
    )

    main(["update", str(tmp_path), "--distribution-url", "https://x.test/d/"])

    assert (tmp_path / ".editorconfig").read_text(encoding="utf-8") == "root = true\n[*.cs]\nindent_size = 4"
    assert "root: .editorconfig created at .editorconfig" in capsys.readouterr().out


def test_suppressions_commands_round_trip(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    editorconfig = tmp_path / ".editorconfig"
    editorconfig.write_text("root = true\n[*.cs]\nindent_size = 4", encoding="utf-8")
    input_file = tmp_path / "suppressions.yml"
    input_file.write_text(
        "StyleCop.Analyzers:\n  - dotnet_diagnostic.SA1600.severity = none\n",
        encoding="utf-8",
    )

    main(["suppressions", "add", str(tmp_path), "--input", str(input_file)])
    assert AUTOGENERATED_HEADER in editorconfig.read_text(encoding="utf-8")
    assert "Added autogenerated suppressions for 1 analyzer(s)" in capsys.readouterr().out

    main(["suppressions", "add", str(tmp_path), "--input", str(input_file)])
    assert editorconfig.read_text(encoding="utf-8").count(AUTOGENERATED_HEADER) == 1

    main(["suppressions", "remove", str(tmp_path)])
    assert editorconfig.read_text(encoding="utf-8") == "root = true\n[*.cs]\nindent_size = 4"


def test_suppressions_add_rejects_invalid_input(tmp_path: Path) -> None:
    input_file = tmp_path / "suppressions.yml"
    input_file.write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["suppressions", "add", str(tmp_path), "--input", str(input_file)])

    assert excinfo.value.code == 1


@pytest.mark.parametrize(
    ("argv", "command"),
    [
        (["suppressions", "remove"], "suppressions remove"),
        (["suppressions", "add", "--input", "suppressions.yml"], "suppressions add"),
    ],
)
def test_suppressions_commands_exit_on_undecodable_editorconfig(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    argv: list[str],
    command: str,
) -> None:
    (tmp_path / ".editorconfig").write_bytes(b"root = true\n# caf\xe9\n")
    (tmp_path / "suppressions.yml").write_text("Analyzer:\n  - a=b\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as excinfo:
        main([*argv[:2], str(tmp_path), *argv[2:]])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert f"codingrules {command} failed:" in err
    assert "Run with --verbose for more details." in err


def test_update_exits_on_undecodable_editorconfig(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / ".editorconfig").write_bytes(b"root = true\n# caf\xe9\n")
    monkeypatch.setattr(
        cli,
        "RemoteFetcher",
        lambda timeout=None: RemoteFetcher(timeout=timeout, transport=lambda request: "root = true"),
    )

    with pytest.raises(SystemExit) as excinfo:
        main(["update", str(tmp_path), "--distribution-url", "https://x.test/d"])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "codingrules update failed:" in err
    assert "root - " in err
