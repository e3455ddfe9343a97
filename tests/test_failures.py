# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the stages that fail a run on lint errors."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from lintstream.errors import LintFailureError
from lintstream.files import FileRecord
from lintstream.plugin import fail_after_error, fail_on_error, format_each, lint, result
from lintstream.streams import run_pipeline
from tests.helpers.engines import FakeEngine, error, make_result, warning

NAMES = ["one.js", "two.js", "three.js", "four.js"]


def _engine_with_error_in(name: str) -> FakeEngine:
    return FakeEngine(
        {
            name: make_result(
                name,
                [warning("Missing semicolon.", 1), error("'x' is not defined.", 7), error("Unexpected var.", 9)],
            ),
        },
    )


@pytest.mark.asyncio
async def test_clean_files_never_fail(tmp_path: Path, make_record: Callable[..., FileRecord]) -> None:
    records = [make_record(name) for name in NAMES]

    emitted = await run_pipeline(
        records,
        lint({"base_dir": tmp_path}, engine=FakeEngine()),
        fail_on_error(),
        fail_after_error(),
    )

    assert len(emitted) == len(NAMES)


@pytest.mark.asyncio
async def test_warnings_alone_never_fail(tmp_path: Path, make_record: Callable[..., FileRecord]) -> None:
    engine = FakeEngine({"one.js": make_result("one.js", [warning("Missing semicolon.")])})

    emitted = await run_pipeline(
        [make_record("one.js")],
        lint({"base_dir": tmp_path}, engine=engine),
        fail_on_error(),
        fail_after_error(),
    )

    assert len(emitted) == 1


@pytest.mark.asyncio
async def test_fail_on_error_cites_first_error_of_offending_file(
    tmp_path: Path,
    make_record: Callable[..., FileRecord],
) -> None:
    with pytest.raises(LintFailureError) as excinfo:
        await run_pipeline(
            [make_record(name) for name in NAMES],
            lint({"base_dir": tmp_path}, engine=_engine_with_error_in("two.js")),
            fail_on_error(),
        )

    failure = excinfo.value
    assert failure.name == "ESLintError"
    assert failure.message == "'x' is not defined."
    assert failure.line_number == 7
    assert failure.file_name == "two.js"
    assert str(failure) == "ESLintError: 'x' is not defined. (two.js:7)"


@pytest.mark.asyncio
async def test_fail_on_error_stops_before_later_files(
    tmp_path: Path,
    make_record: Callable[..., FileRecord],
) -> None:
    observed: list[str] = []

    with pytest.raises(LintFailureError):
        await run_pipeline(
            [make_record(name) for name in NAMES],
            lint({"base_dir": tmp_path}, engine=_engine_with_error_in("two.js")),
            fail_on_error(),
            result(lambda lint_result: observed.append(lint_result.file_path)),
        )

    assert observed == ["one.js"]


@pytest.mark.asyncio
async def test_fail_after_error_processes_every_file_first(
    tmp_path: Path,
    make_record: Callable[..., FileRecord],
) -> None:
    written: list[str] = []
    engine = FakeEngine(
        {
            "two.js": make_result("two.js", [error("a", 1), error("b", 2)]),
            "four.js": make_result("four.js", [error("c", 3)]),
        },
    )

    with pytest.raises(LintFailureError) as excinfo:
        await run_pipeline(
            [make_record(name) for name in NAMES],
            lint({"base_dir": tmp_path}, engine=engine),
            format_each("unix", written.append),
            fail_after_error(),
        )

    assert excinfo.value.message == "Failed with 3 errors"
    assert excinfo.value.file_name is None
    assert len(written) == 2
    assert "two.js:1:1: a" in written[0]
    assert "four.js:3:1: c" in written[1]


@pytest.mark.asyncio
async def test_fail_after_error_uses_singular_for_one_error(
    tmp_path: Path,
    make_record: Callable[..., FileRecord],
) -> None:
    engine = FakeEngine({"one.js": make_result("one.js", [error("only")])})

    with pytest.raises(LintFailureError, match="Failed with 1 error$"):
        await run_pipeline(
            [make_record("one.js")],
            lint({"base_dir": tmp_path}, engine=engine),
            fail_after_error(),
        )


@pytest.mark.asyncio
async def test_fail_on_error_cancels_concurrent_lint_calls(
    tmp_path: Path,
    make_record: Callable[..., FileRecord],
) -> None:
    engine = FakeEngine(
        {"one.js": make_result("one.js", [error("'x' is not defined.")])},
        delays={"two.js": 0.5, "three.js": 0.5, "four.js": 0.5},
    )
    records = [make_record(name) for name in NAMES]

    with pytest.raises(LintFailureError):
        await run_pipeline(
            records,
            lint({"base_dir": tmp_path, "concurrency": 4}, engine=engine),
            fail_on_error(),
        )

    assert [task for task in asyncio.all_tasks() if task is not asyncio.current_task()] == []
    assert all(record.lint_result is None for record in records[1:])
