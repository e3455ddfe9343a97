# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Fake engines and result builders shared by the tests."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence

from lintstream.models import LintMessage, LintResult
from lintstream.severity import Severity


def error(message: str, line: int | None = 1, *, rule: str | None = "no-undef", fixable: bool = False) -> LintMessage:
    return LintMessage(
        severity=Severity.ERROR,
        message=message,
        line=line,
        column=1,
        rule_id=rule,
        fix={"range": [0, 1], "text": ""} if fixable else None,
    )


def warning(message: str, line: int | None = 1, *, rule: str | None = "semi") -> LintMessage:
    return LintMessage(severity=Severity.WARNING, message=message, line=line, column=1, rule_id=rule)


def make_result(file_path: str, messages: Sequence[LintMessage] = (), **extra: object) -> LintResult:
    errors = sum(1 for message in messages if message.is_error)
    return LintResult(
        file_path=file_path,
        messages=list(messages),
        error_count=errors,
        warning_count=len(messages) - errors,
        **extra,
    )


class FakeEngine:
    """In-memory engine returning canned results keyed by relative path."""

    def __init__(
        self,
        results: Mapping[str, LintResult] | None = None,
        *,
        ignored: Iterable[str] = (),
        failures: Iterable[str] = (),
        ignore_failures: Iterable[str] = (),
        delays: Mapping[str, float] | None = None,
    ) -> None:
        self.results = dict(results or {})
        self.ignored = set(ignored)
        self.failures = set(failures)
        self.ignore_failures = set(ignore_failures)
        self.delays = dict(delays or {})
        self.lint_calls: list[tuple[str, str]] = []
        self.ignore_calls: list[str] = []

    async def is_path_ignored(self, path: str) -> bool:
        self.ignore_calls.append(path)
        if path in self.ignore_failures:
            raise OSError(f"cannot read ignore rules for {path}")
        return path in self.ignored

    async def lint_text(self, text: str, *, file_path: str) -> list[LintResult]:
        self.lint_calls.append((file_path, text))
        delay = self.delays.get(file_path)
        if delay:
            await asyncio.sleep(delay)
        if file_path in self.failures:
            raise RuntimeError(f"engine exploded on {file_path}")
        canned = self.results.get(file_path)
        if canned is None:
            return [LintResult(file_path=file_path, source=text)]
        return [canned.model_copy(deep=True)]


