"""Tests for the severity diff reporter."""

from __future__ import annotations

import logging
from typing import List

import pytest

from codingrules.editorconfig.keyvalues import extract_severity_key_values
from codingrules.editorconfig.report import (
    NOT_FOUND,
    SeverityDiffReporter,
    find_line_forward,
    find_line_reverse,
    format_line_number,
)
from codingrules.models import NOTICE_DUPLICATE, NOTICE_NEW, KeyValueItem, SeverityNotice

CANONICAL = "\n".join(
    [
        "root = true",
        "[*.cs]",
        "dotnet_diagnostic.CA1001.severity=error",
        "dotnet_diagnostic.CA1002.severity=warning",
        "dotnet_diagnostic.CA1003.severity=none",
        "indent_size=4",
    ]
)

LOCAL = "\n".join(
    [
        "root = true",
        "[*.cs]",
        "dotnet_diagnostic.CA1003.severity=suggestion",
        "##########################################",
        "# Custom - Code Analyzers Rules",
        "##########################################",
        "dotnet_diagnostic.CA1001.severity=warning",
    ]
)


def _classify(reporter: SeverityDiffReporter) -> List[SeverityNotice]:
    custom = extract_severity_key_values(["dotnet_diagnostic.CA1001.severity=warning"])
    return reporter.classify(
        extract_severity_key_values(CANONICAL),
        extract_severity_key_values(LOCAL),
        custom,
        CANONICAL,
        LOCAL,
    )


def test_classify_marks_duplicates_and_new_keys() -> None:
    notices = _classify(SeverityDiffReporter())

    assert [(notice.kind, notice.key) for notice in notices] == [
        (NOTICE_DUPLICATE, "dotnet_diagnostic.CA1001.severity"),
        (NOTICE_NEW, "dotnet_diagnostic.CA1002.severity"),
    ]
    duplicate = notices[0]
    assert duplicate.canonical_value == "error"
    assert duplicate.local_value == "warning"
    assert duplicate.canonical_line == 3
    assert duplicate.local_line == 7


def test_report_logs_duplicate_as_warning_and_new_as_debug(caplog: pytest.LogCaptureFixture) -> None:
    reporter = SeverityDiffReporter()
    custom = extract_severity_key_values(["dotnet_diagnostic.CA1001.severity=warning"])

    with caplog.at_level(logging.DEBUG, logger="codingrules"):
        result = reporter.report(
            extract_severity_key_values(CANONICAL),
            extract_severity_key_values(LOCAL),
            custom,
            CANONICAL,
            LOCAL,
        )

    assert result is None
    warnings = [record.getMessage() for record in caplog.records if record.levelno == logging.WARNING]
    assert warnings == [
        "Duplicate key: dotnet_diagnostic.CA1001.severity",
        "-- GitHub section (line 0003): error",
        "-- Custom section (line 0007): warning",
    ]
    debug = [record.getMessage() for record in caplog.records if record.levelno == logging.DEBUG]
    assert debug == ["- New key/value - dotnet_diagnostic.CA1002.severity=warning"]


def test_classify_ignores_non_severity_canonical_keys() -> None:
    reporter = SeverityDiffReporter()
    notices = reporter.classify(
        [KeyValueItem("indent_size", "4")],
        [],
        [KeyValueItem("indent_size", "2")],
        "indent_size=4",
        "indent_size=2",
    )

    assert notices == []


def test_classify_uses_sentinel_when_lines_are_missing() -> None:
    reporter = SeverityDiffReporter()
    item = KeyValueItem("dotnet_diagnostic.CA2000.severity", "error")
    notices = reporter.classify([item], [item], [item], "", "")

    assert notices[0].canonical_line == NOT_FOUND
    assert notices[0].local_line == NOT_FOUND


def test_find_line_forward_matches_prefix() -> None:
    lines = ["a", "dotnet_diagnostic.CA1.severity = none", "dotnet_diagnostic.CA1.severity=error"]

    assert find_line_forward(lines, "dotnet_diagnostic.CA1.severity") == 2
    assert find_line_forward(lines, "missing") == NOT_FOUND


def test_find_line_reverse_returns_last_exact_match() -> None:
    lines = ["k=v", "other", "k=v", "k = v"]

    assert find_line_reverse(lines, KeyValueItem("k", "v")) == 3
    assert find_line_reverse(lines, KeyValueItem("k", "x")) == NOT_FOUND


def test_format_line_number_pads_sentinel_after_sign() -> None:
    assert format_line_number(3) == "0003"
    assert format_line_number(12345) == "12345"
    assert format_line_number(NOT_FOUND) == "-0001"


def test_emit_logs_sentinel_line_numbers(caplog: pytest.LogCaptureFixture) -> None:
    notice = SeverityNotice(
        kind=NOTICE_DUPLICATE,
        key="dotnet_diagnostic.CA2000.severity",
        canonical_value="error",
        local_value="none",
    )

    with caplog.at_level(logging.WARNING, logger="codingrules"):
        SeverityDiffReporter().emit([notice])

    assert caplog.messages[1:] == [
        "-- GitHub section (line -0001): error",
        "-- Custom section (line -0001): none",
    ]
