# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the lintstream command line."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from lintstream.cli import EXIT_LINT_FAILURE, EXIT_USAGE_FAILURE, app

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="fake executable is a POSIX shell script")

FAKE_ESLINT = r"""#!/bin/sh
source=$(cat)
case "$source" in
  *undefinedThing*)
    cat <<'JSON'
[{"filePath": "x.js", "messages": [{"ruleId": "no-undef", "severity": 2, "message": "'undefinedThing' is not defined.", "line": 1, "column": 1}], "errorCount": 1, "warningCount": 0}]
JSON
    exit 1
    ;;
esac
case "$*" in
  *--fix-dry-run*)
    cat <<'JSON'
[{"filePath": "x.js", "messages": [], "errorCount": 0, "warningCount": 0, "output": "let a = 1;\n"}]
JSON
    ;;
  *)
    cat <<'JSON'
[{"filePath": "x.js", "messages": [], "errorCount": 0, "warningCount": 0}]
JSON
    ;;
esac
exit 0
"""


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    script = tmp_path / "fake-eslint"
    script.write_text(FAKE_ESLINT, encoding="utf-8")
    script.chmod(0o755)
    (tmp_path / "pyproject.toml").write_text(
        f'[tool.lintstream]\nexecutable = "{script}"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_clean_file_exits_zero(project: Path) -> None:
    (project / "clean.js").write_text("var a = 1;\n", encoding="utf-8")

    outcome = CliRunner().invoke(app, ["clean.js", "--no-color"])

    assert outcome.exit_code == 0, outcome.output
    assert "Linted 1 file(s)" in outcome.output


def test_errors_fail_after_report(project: Path) -> None:
    (project / "broken.js").write_text("undefinedThing();\n", encoding="utf-8")
    (project / "clean.js").write_text("var a = 1;\n", encoding="utf-8")

    outcome = CliRunner().invoke(app, ["broken.js", "clean.js", "--no-color"])

    assert outcome.exit_code == EXIT_LINT_FAILURE
    assert "'undefinedThing' is not defined." in outcome.output
    assert "Failed with 1 error" in outcome.output


def test_fail_on_error_reports_location(project: Path) -> None:
    (project / "broken.js").write_text("undefinedThing();\n", encoding="utf-8")

    outcome = CliRunner().invoke(app, ["broken.js", "--fail-on-error", "--no-color"])

    assert outcome.exit_code == EXIT_LINT_FAILURE
    assert "ESLintError: 'undefinedThing' is not defined. (x.js:1)" in outcome.output


def test_report_is_written_to_output_file(project: Path) -> None:
    (project / "broken.js").write_text("undefinedThing();\n", encoding="utf-8")

    outcome = CliRunner().invoke(app, ["broken.js", "--format", "unix", "--output", "report.txt", "--no-color"])

    assert outcome.exit_code == EXIT_LINT_FAILURE
    report = (project / "report.txt").read_text(encoding="utf-8")
    assert "x.js:1:1: 'undefinedThing' is not defined. [Error/no-undef]" in report


def test_fix_writes_fixed_source_back(project: Path) -> None:
    target = project / "fixable.js"
    target.write_text("var a = 1\n", encoding="utf-8")

    outcome = CliRunner().invoke(app, ["fixable.js", "--fix", "--no-color"])

    assert outcome.exit_code == 0, outcome.output
    assert target.read_text(encoding="utf-8") == "let a = 1;\n"


def test_unknown_formatter_is_a_usage_failure(project: Path) -> None:
    (project / "broken.js").write_text("undefinedThing();\n", encoding="utf-8")

    outcome = CliRunner().invoke(app, ["broken.js", "--format", "no-such-formatter", "--no-color"])

    assert outcome.exit_code == EXIT_USAGE_FAILURE
    assert "There was a problem loading formatter" in outcome.output


def test_empty_directory_warns_and_exits_zero(project: Path) -> None:
    (project / "empty").mkdir()

    outcome = CliRunner().invoke(app, ["empty", "--no-color"])

    assert outcome.exit_code == 0, outcome.output
    assert "No files matched the given paths" in outcome.output
