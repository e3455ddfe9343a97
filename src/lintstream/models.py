# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lint result models shared across the lintstream package."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Sequence
from pathlib import PurePath
from typing import Any, Final, overload

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .severity import Severity, coerce_severity

MessagePredicate = Callable[["LintMessage"], bool]

_HIDDEN_PATH: Final[re.Pattern[str]] = re.compile(r"(?:^|[/\\])\.(?![./\\])")
_NODE_MODULES_PATH: Final[re.Pattern[str]] = re.compile(r"(?:^|[/\\])node_modules[/\\]")

IGNORED_HIDDEN_MESSAGE: Final[str] = (
    "File ignored by default.  Use \"--ignore-pattern '!<relative/path/to/filename>'\" to override."
)
IGNORED_NODE_MODULES_MESSAGE: Final[str] = (
    "File ignored by default. Use a negated ignore pattern like \"--ignore-pattern '!node_modules/*'\" to override."
)
IGNORED_PATTERN_MESSAGE: Final[str] = (
    'File ignored because of a matching ignore pattern. Set "ignore" option to false to override.'
)


class LintMessage(BaseModel):
    """Single finding reported by the linting engine."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="ignore")

    severity: Severity
    message: str
    line: int | None = None
    column: int | None = None
    end_line: int | None = Field(default=None, alias="endLine")
    end_column: int | None = Field(default=None, alias="endColumn")
    rule_id: str | None = Field(default=None, alias="ruleId")
    fatal: bool = False
    fix: dict[str, Any] | None = None

    @field_validator("severity", mode="before")
    @classmethod
    def _coerce_severity(cls, value: object) -> Severity:
        return coerce_severity(value)

    @property
    def is_error(self) -> bool:
        """Return ``True`` for fatal messages and error-severity findings."""

        return self.fatal or self.severity is Severity.ERROR

    @property
    def is_fixable(self) -> bool:
        """Return ``True`` when the engine supplied an automatic fix."""

        return self.fix is not None


class LintResult(BaseModel):
    """Structured findings attached to exactly one file record."""

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True, extra="ignore")

    file_path: str = Field(alias="filePath")
    messages: list[LintMessage] = Field(default_factory=list)
    error_count: int = Field(default=0, alias="errorCount")
    warning_count: int = Field(default=0, alias="warningCount")
    fixable_error_count: int = Field(default=0, alias="fixableErrorCount")
    fixable_warning_count: int = Field(default=0, alias="fixableWarningCount")
    output: str | None = None
    source: str | None = None
    fixed: bool = False
    ignored: bool = False

    @property
    def has_output(self) -> bool:
        """Return ``True`` when the engine produced fixed source text."""

        return self.output is not None


def is_error_message(message: LintMessage) -> bool:
    """Return ``True`` when ``message`` counts as an error."""

    return message.is_error


def is_warning_message(message: LintMessage) -> bool:
    """Return ``True`` when ``message`` counts as a warning."""

    return not message.is_error and message.severity is Severity.WARNING


def first_result_message(result: LintResult, predicate: MessagePredicate) -> LintMessage | None:
    """Return the first message of ``result`` accepted by ``predicate`` in reported order."""

    return next((message for message in result.messages if predicate(message)), None)


def _count_messages(messages: Iterable[LintMessage]) -> dict[str, int]:
    counts = {
        "error_count": 0,
        "warning_count": 0,
        "fixable_error_count": 0,
        "fixable_warning_count": 0,
    }
    for message in messages:
        if is_error_message(message):
            counts["error_count"] += 1
            counts["fixable_error_count"] += int(message.is_fixable)
        elif is_warning_message(message):
            counts["warning_count"] += 1
            counts["fixable_warning_count"] += int(message.is_fixable)
    return counts


def filter_result(result: LintResult, predicate: MessagePredicate | None = None) -> LintResult:
    """Return a copy of ``result`` keeping only messages accepted by ``predicate``.

    Counters are recomputed from the retained messages; the engine's original
    counts no longer describe the filtered set.

    Args:
        result: Result produced by the linting engine.
        predicate: Message filter; defaults to :func:`is_error_message`.

    Returns:
        LintResult: Filtered result carrying ``output`` when the original had
        one, otherwise its ``source``.
    """

    accept = predicate if callable(predicate) else is_error_message
    messages = [message for message in result.messages if accept(message)]
    filtered = LintResult(
        file_path=result.file_path,
        messages=messages,
        ignored=result.ignored,
        **_count_messages(messages),
    )
    if result.output is not None:
        filtered.output = result.output
    else:
        filtered.source = result.source
    return filtered


def create_ignore_result(path: str | PurePath, relative: str | PurePath | None = None) -> LintResult:
    """Return the synthetic result attached to files skipped by ignore rules.

    Args:
        path: Path of the ignored file, reported as the result's ``file_path``.
            The lint stage passes the record's absolute path here, whereas
            engine results carry the base-relative path they were linted as.
        relative: Path checked for hidden or ``node_modules`` components;
            defaults to ``path``.

    Returns:
        LintResult: Result with a single warning explaining why the file was skipped.
    """

    file_path = str(path)
    checked = str(relative) if relative is not None else file_path
    if _HIDDEN_PATH.search(checked):
        text = IGNORED_HIDDEN_MESSAGE
    elif _NODE_MODULES_PATH.search(checked):
        text = IGNORED_NODE_MODULES_MESSAGE
    else:
        text = IGNORED_PATTERN_MESSAGE
    return LintResult(
        file_path=file_path,
        messages=[LintMessage(severity=Severity.WARNING, message=text, fatal=False)],
        error_count=0,
        warning_count=1,
        ignored=True,
    )


class ResultBatch(Sequence[LintResult]):
    """Accumulator of lint results gathered over one pipeline run.

    Results are appended in arrival order and the running counters only ever
    grow. Once :meth:`finalize` has been called the batch is read-only.
    """

    def __init__(self) -> None:
        self._results: list[LintResult] = []
        self.error_count = 0
        self.warning_count = 0
        self.fixable_error_count = 0
        self.fixable_warning_count = 0
        self._finalized = False

    def add(self, result: LintResult) -> None:
        """Append ``result`` and fold its counters into the running totals."""

        if self._finalized:
            raise RuntimeError("cannot add results to a finalized batch")
        self._results.append(result)
        self.error_count += result.error_count
        self.warning_count += result.warning_count
        self.fixable_error_count += result.fixable_error_count
        self.fixable_warning_count += result.fixable_warning_count

    def finalize(self) -> ResultBatch:
        """Freeze the batch and return it."""

        self._finalized = True
        return self

    @property
    def finalized(self) -> bool:
        return self._finalized

    @overload
    def __getitem__(self, index: int) -> LintResult: ...

    @overload
    def __getitem__(self, index: slice) -> list[LintResult]: ...

    def __getitem__(self, index: int | slice) -> LintResult | list[LintResult]:
        return self._results[index]

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[LintResult]:
        return iter(self._results)

    def __repr__(self) -> str:
        return (
            f"ResultBatch(results={len(self._results)}, errors={self.error_count}, "
            f"warnings={self.warning_count})"
        )


__all__ = [
    "LintMessage",
    "LintResult",
    "MessagePredicate",
    "ResultBatch",
    "create_ignore_result",
    "filter_result",
    "first_result_message",
    "is_error_message",
    "is_warning_message",
]
