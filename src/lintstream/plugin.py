# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pipeline stages that lint file records and act on their results.

``lint`` attaches a :class:`~lintstream.models.LintResult` to each record.
``result`` and ``results`` observe those results per file or once at the end
of the stream; the failure and formatting stages are thin policies built on
top of them.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Mapping
from pathlib import Path
from typing import IO, Any

from .engine import EngineFactory, LintEngine, build_engine
from .errors import LintEngineError, LintFailureError, PluginError, UnsupportedInputError
from .files import FileRecord
from .models import (
    LintResult,
    ResultBatch,
    create_ignore_result,
    filter_result,
    first_result_message,
    is_error_message,
)
from .options import LintOptions, migrate_options
from .reporting.formatters import FormatFunction, Formatter, resolve_formatter
from .reporting.writers import Writable, resolve_writable, write_results
from .streams import Stage, call_action, ensure_callable, settle, transform

LOGGER = logging.getLogger(__name__)

ResultAction = Callable[[LintResult], object | Awaitable[object]]
BatchAction = Callable[[ResultBatch], object | Awaitable[object]]


def _relative_path(path: Path, base_dir: Path) -> str:
    try:
        return os.path.relpath(path, base_dir)
    except ValueError:
        # Different drives on Windows.
        return str(path)


def _coerce_result(entry: LintResult | Mapping[str, Any]) -> LintResult:
    if isinstance(entry, LintResult):
        return entry
    return LintResult.model_validate(entry)


def lint(
    options: LintOptions | Mapping[str, Any] | str | Path | None = None,
    *,
    engine: LintEngine | EngineFactory | None = None,
) -> Stage:
    """Return a stage attaching lint results to each record.

    Args:
        options: Stage options in any shape accepted by :func:`migrate_options`.
        engine: Engine or engine factory; defaults to the ESLint command engine.

    Returns:
        Stage: Stage emitting every record, with ``lint_result`` attached
        unless the record has no contents or is silently ignored.
    """

    opts = migrate_options(options)
    linter = build_engine(opts, engine)
    quiet = opts.quiet_predicate()

    async def _lint_record(record: FileRecord) -> FileRecord:
        if record.is_null():
            return record
        if record.is_stream():
            raise UnsupportedInputError(
                "lintstream doesn't support files with Stream contents.",
                file_name=str(record.path),
            )

        # The engine resolves ignore files against the base directory, not the
        # record's own cwd, so the path is re-derived here.
        file_path = _relative_path(record.path, opts.resolved_base_dir())
        try:
            ignored = await settle(linter.is_path_ignored(file_path))
        except Exception as exc:
            raise LintEngineError(str(exc) or type(exc).__name__, file_name=file_path, show_stack=True) from exc
        if ignored:
            LOGGER.debug("%s is ignored", file_path)
            if opts.warn_file_ignored:
                record.lint_result = create_ignore_result(record.path, file_path)
            return record

        try:
            entries = await settle(linter.lint_text(record.text(), file_path=file_path))
            lint_result = _coerce_result(entries[0])
        except PluginError:
            raise
        except Exception as exc:
            raise LintEngineError(str(exc) or type(exc).__name__, file_name=file_path, show_stack=True) from exc

        if quiet is not None:
            lint_result = filter_result(lint_result, quiet)
        if lint_result.output is not None:
            record.contents = lint_result.output.encode("utf-8")
            lint_result.fixed = True
        record.lint_result = lint_result
        return record

    return transform(_lint_record, concurrency=opts.concurrency)


def result(action: ResultAction) -> Stage:
    """Return a stage invoking ``action`` with each record's lint result.

    Records without a result pass through untouched. A failing action aborts
    the run with a :class:`PluginError`.

    Raises:
        PluginConfigurationError: When ``action`` is not callable.
    """

    ensure_callable(action)

    async def _on_record(record: FileRecord) -> FileRecord:
        if record.lint_result is not None:
            await call_action(action, record.lint_result)
        return record

    return transform(_on_record)


def results(action: BatchAction) -> Stage:
    """Return a stage invoking ``action`` once with every result of the run.

    Each run of the stage gets its own :class:`ResultBatch`; the action sees
    it only after the last record has been collected.

    Raises:
        PluginConfigurationError: When ``action`` is not callable.
    """

    ensure_callable(action)

    def stage(records: AsyncIterable[FileRecord]) -> AsyncIterator[FileRecord]:
        batch = ResultBatch()

        def _collect(record: FileRecord) -> FileRecord:
            if record.lint_result is not None:
                batch.add(record.lint_result)
            return record

        async def _finalize() -> None:
            await call_action(action, batch.finalize())

        return transform(_collect, _finalize)(records)

    return stage


def fail_on_error() -> Stage:
    """Return a stage failing at the first file that has an error message."""

    def _check(lint_result: LintResult) -> None:
        error = first_result_message(lint_result, is_error_message)
        if error is None:
            return
        raise LintFailureError(error.message, file_name=lint_result.file_path, line_number=error.line)

    return result(_check)


def fail_after_error() -> Stage:
    """Return a stage failing once the stream ends if any errors were reported."""

    def _check(batch: ResultBatch) -> None:
        count = batch.error_count
        if not count:
            return
        raise LintFailureError(f"Failed with {count} {'error' if count == 1 else 'errors'}")

    return results(_check)


def format_each(
    formatter: str | FormatFunction | Formatter | None = None,
    writable: Writable | IO[str] | None = None,
) -> Stage:
    """Return a stage writing each file's formatted result as it arrives."""

    sink = resolve_writable(writable)

    async def _write(lint_result: LintResult) -> None:
        resolved = await settle(resolve_formatter(formatter))
        await write_results([lint_result], resolved, sink)

    return result(_write)


def format(
    formatter: str | FormatFunction | Formatter | None = None,
    writable: Writable | IO[str] | None = None,
) -> Stage:
    """Return a stage writing all formatted results once the stream ends.

    Nothing is resolved or written when the run produced no results.
    """

    sink = resolve_writable(writable)

    async def _write(batch: ResultBatch) -> None:
        if not batch:
            return
        resolved = await settle(resolve_formatter(formatter))
        await write_results(batch, resolved, sink)

    return results(_write)


__all__ = [
    "BatchAction",
    "ResultAction",
    "fail_after_error",
    "fail_on_error",
    "format",
    "format_each",
    "lint",
    "result",
    "results",
]
