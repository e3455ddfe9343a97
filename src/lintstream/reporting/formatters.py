# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Built-in result formatters and formatter resolution."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from importlib import metadata
from importlib.metadata import EntryPoint
from typing import Final, Protocol, TypeAlias, runtime_checkable

from ..errors import PluginConfigurationError
from ..models import LintMessage, LintResult

FormatFunction: TypeAlias = Callable[[Sequence[LintResult]], str | None]

DEFAULT_FORMATTER: Final[str] = "stylish"
FORMATTER_ENTRY_POINT_GROUP: Final[str] = "lintstream.formatters"


@runtime_checkable
class Formatter(Protocol):
    """Object rendering a batch of results into text."""

    def format(self, results: Sequence[LintResult]) -> str | None:
        """Return the rendered text for ``results``."""

        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class FunctionFormatter:
    """Adapter exposing a plain function through the :class:`Formatter` protocol."""

    render: FormatFunction
    name: str = "<function>"

    def format(self, results: Sequence[LintResult]) -> str | None:
        return self.render(results)


def _pluralize(word: str, count: int) -> str:
    return word if count == 1 else f"{word}s"


def _label(message: LintMessage) -> str:
    return "error" if message.is_error else "warning"


def _position(message: LintMessage) -> tuple[int, int]:
    return message.line or 0, message.column or 0


def format_stylish(results: Sequence[LintResult]) -> str:
    """Render results grouped per file with a summary footer."""

    lines: list[str] = []
    errors = warnings = fixable_errors = fixable_warnings = 0
    for result in results:
        errors += result.error_count
        warnings += result.warning_count
        fixable_errors += result.fixable_error_count
        fixable_warnings += result.fixable_warning_count
        if not result.messages:
            continue
        rows = []
        for message in result.messages:
            line, column = _position(message)
            rows.append((f"{line}:{column}", _label(message), message.message.strip(), message.rule_id or ""))
        widths = [max(len(row[index]) for row in rows) for index in range(3)]
        lines.append("")
        lines.append(result.file_path)
        for position, label, text, rule in rows:
            cells = (position.rjust(widths[0]), label.ljust(widths[1]), text.ljust(widths[2]), rule)
            lines.append(f"  {'  '.join(cells)}".rstrip())

    total = errors + warnings
    if total == 0:
        return ""
    lines.append("")
    lines.append(
        f"✖ {total} {_pluralize('problem', total)} "
        f"({errors} {_pluralize('error', errors)}, {warnings} {_pluralize('warning', warnings)})",
    )
    if fixable_errors or fixable_warnings:
        lines.append(
            f"  {fixable_errors} {_pluralize('error', fixable_errors)} and "
            f"{fixable_warnings} {_pluralize('warning', fixable_warnings)} "
            "potentially fixable with the `--fix` option.",
        )
    return "\n".join(lines) + "\n"


def _problem_footer(count: int) -> str:
    return f"{count} {_pluralize('problem', count)}" if count else ""


def format_compact(results: Sequence[LintResult]) -> str:
    """Render one line per message in ``file: line L, col C, Level - text (rule)`` form."""

    lines: list[str] = []
    for result in results:
        for message in result.messages:
            line, column = _position(message)
            rule = f" ({message.rule_id})" if message.rule_id else ""
            lines.append(
                f"{result.file_path}: line {line}, col {column}, "
                f"{_label(message).capitalize()} - {message.message.strip()}{rule}",
            )
    if not lines:
        return ""
    return "\n".join([*lines, "", _problem_footer(len(lines))])


def format_unix(results: Sequence[LintResult]) -> str:
    """Render one ``file:line:column: text [Level/rule]`` line per message."""

    lines: list[str] = []
    for result in results:
        for message in result.messages:
            line, column = _position(message)
            rule = f"/{message.rule_id}" if message.rule_id else ""
            lines.append(
                f"{result.file_path}:{line}:{column}: {message.message.strip()} "
                f"[{_label(message).capitalize()}{rule}]",
            )
    if not lines:
        return ""
    return "\n".join([*lines, "", _problem_footer(len(lines))])


def format_json(results: Sequence[LintResult]) -> str:
    """Render results as a JSON array using ESLint field names."""

    payload = [result.model_dump(mode="json", by_alias=True, exclude_none=True) for result in results]
    return json.dumps(payload)


BUILTIN_FORMATTERS: Final[Mapping[str, FormatFunction]] = {
    "stylish": format_stylish,
    "compact": format_compact,
    "unix": format_unix,
    "json": format_json,
}


def _select_entry_points(group: str) -> Iterable[EntryPoint]:
    entries = metadata.entry_points()
    if hasattr(entries, "select"):
        return entries.select(group=group)
    return ()


def available_formatters() -> tuple[str, ...]:
    """Return the names of built-in and plugin-provided formatters."""

    names = set(BUILTIN_FORMATTERS)
    names.update(entry.name for entry in _select_entry_points(FORMATTER_ENTRY_POINT_GROUP))
    return tuple(sorted(names))


def resolve_formatter(formatter: str | FormatFunction | Formatter | None = None) -> Formatter:
    """Return a :class:`Formatter` for a name, a function, or a formatter object.

    Names resolve to the built-in formatters first and then to entry points
    registered under ``lintstream.formatters``. ``None`` selects ``stylish``.

    Args:
        formatter: Formatter name, render function, or formatter object.

    Returns:
        Formatter: Object exposing ``format(results)``.

    Raises:
        PluginConfigurationError: When the name is unknown or the argument unusable.
    """

    if formatter is None:
        formatter = DEFAULT_FORMATTER
    if not isinstance(formatter, str):
        # ``str`` has a ``format`` method too; names never reach the protocol check.
        if isinstance(formatter, Formatter) and not isinstance(formatter, type):
            return formatter
        if callable(formatter):
            return FunctionFormatter(render=formatter, name=getattr(formatter, "__name__", "<function>"))
        raise PluginConfigurationError(f"Unsupported formatter {formatter!r}")

    builtin = BUILTIN_FORMATTERS.get(formatter)
    if builtin is not None:
        return FunctionFormatter(render=builtin, name=formatter)
    for entry in _select_entry_points(FORMATTER_ENTRY_POINT_GROUP):
        if entry.name == formatter:
            return resolve_formatter(entry.load())
    raise PluginConfigurationError(
        f"There was a problem loading formatter: {formatter!r}. "
        f"Available formatters: {', '.join(available_formatters())}",
    )


__all__ = [
    "BUILTIN_FORMATTERS",
    "DEFAULT_FORMATTER",
    "FORMATTER_ENTRY_POINT_GROUP",
    "FormatFunction",
    "Formatter",
    "FunctionFormatter",
    "available_formatters",
    "format_compact",
    "format_json",
    "format_stylish",
    "format_unix",
    "resolve_formatter",
]
