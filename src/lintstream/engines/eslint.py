# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""ESLint engine driven through the ``eslint`` command line."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Iterable, Mapping, Sequence
from fnmatch import fnmatchcase
from pathlib import Path, PurePosixPath
from typing import Any, Final

from ..models import LintResult
from ..options import LintOptions
from ..process import SubprocessExecutionError, run_command

LOGGER = logging.getLogger(__name__)

DEFAULT_EXECUTABLE: Final[str] = "eslint"
IGNORE_FILE_NAME: Final[str] = ".eslintignore"
DEFAULT_IGNORE_PATTERNS: Final[tuple[str, ...]] = ("node_modules/", ".*")
# ESLint exits with 1 when errors were found and 2 on configuration or runtime failures.
_ESLINT_FAILURE_STATUS: Final[int] = 2


def parse_eslint_payload(payload: str) -> list[LintResult]:
    """Parse ESLint ``--format json`` output into :class:`LintResult` objects.

    Args:
        payload: JSON text printed by ESLint.

    Returns:
        list[LintResult]: One result per entry in the payload.

    Raises:
        ValueError: When the payload is not a JSON array of result objects.
    """

    data = json.loads(payload or "[]")
    if not isinstance(data, list):
        raise ValueError("ESLint JSON payload must be an array")
    return [LintResult.model_validate(entry) for entry in data if isinstance(entry, Mapping)]


def _segments_match(pattern: Sequence[str], parts: Sequence[str]) -> bool:
    if not pattern:
        return not parts
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_segments_match(rest, parts[index:]) for index in range(len(parts) + 1))
    return bool(parts) and fnmatchcase(parts[0], head) and _segments_match(rest, parts[1:])


def _pattern_matches(relative: PurePosixPath, pattern: str) -> bool:
    directory_only = pattern.endswith("/")
    anchored = pattern.startswith("/") or "/" in pattern.rstrip("/")
    segments = pattern.strip("/").split("/")
    if not anchored:
        segments = ["**", *segments]
    parts = relative.parts
    # A directory pattern matches any ancestor directory; otherwise the file itself counts too.
    limit = len(parts) - 1 if directory_only else len(parts)
    return any(_segments_match(segments, parts[:index]) for index in range(1, limit + 1))


def is_ignored_by_patterns(relative: str | Path, patterns: Iterable[str]) -> bool:
    """Apply gitignore-style ``patterns`` to ``relative``; the last match wins."""

    path = PurePosixPath(Path(relative).as_posix())
    if path.parts and path.parts[0] == "..":
        return False
    ignored = False
    for raw in patterns:
        pattern = raw.strip()
        if not pattern or pattern.startswith("#"):
            continue
        negated = pattern.startswith("!")
        if negated:
            pattern = pattern[1:]
        if _pattern_matches(path, pattern):
            ignored = not negated
    return ignored


class EslintCommandEngine:
    """Lint text by piping it to ``eslint --stdin``.

    Ignore queries are answered locally from the default ESLint ignore rules,
    the ``.eslintignore`` file in the base directory, and ``ignore_patterns``.
    """

    def __init__(self, options: LintOptions) -> None:
        self._options = options
        self._engine_options = options.engine_options()
        self._base_dir = options.resolved_base_dir()
        self._executable = str(self._engine_options.get("executable") or DEFAULT_EXECUTABLE)
        self._ignore_patterns: tuple[str, ...] | None = None

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def ignore_patterns(self) -> tuple[str, ...]:
        """Return the ignore patterns in evaluation order."""

        if self._ignore_patterns is None:
            patterns: list[str] = list(DEFAULT_IGNORE_PATTERNS)
            ignore_file = self._base_dir / str(self._engine_options.get("ignore_path") or IGNORE_FILE_NAME)
            if ignore_file.is_file():
                patterns.extend(ignore_file.read_text(encoding="utf-8").splitlines())
            patterns.extend(self._options.ignore_patterns)
            self._ignore_patterns = tuple(patterns)
        return self._ignore_patterns

    def is_path_ignored(self, path: str) -> bool:
        if not self._options.ignore:
            return False
        return is_ignored_by_patterns(path, self.ignore_patterns())

    def build_command(self, file_path: str) -> list[str]:
        """Return the ESLint command used to lint stdin as ``file_path``."""

        command = [self._executable, "--stdin", "--stdin-filename", file_path, "--format", "json"]
        if self._options.fix:
            command.append("--fix-dry-run")
        if self._options.override_config_file:
            command.extend(["--config", self._options.override_config_file])
        command.extend(_override_config_args(self._options.override_config))
        extra_args = self._engine_options.get("args") or ()
        command.extend(str(arg) for arg in extra_args)
        return command

    async def lint_text(self, text: str, *, file_path: str) -> list[LintResult]:
        command = self.build_command(file_path)
        LOGGER.debug("running %s", " ".join(command))
        completed = await asyncio.to_thread(
            run_command,
            command,
            cwd=self._base_dir,
            input_text=text,
        )
        if completed.returncode >= _ESLINT_FAILURE_STATUS:
            raise SubprocessExecutionError(command, completed.returncode, completed.stdout, completed.stderr)
        results = parse_eslint_payload(completed.stdout)
        if not results:
            raise ValueError(f"ESLint produced no result for {file_path}")
        return results


def _override_config_args(config: Mapping[str, Any]) -> list[str]:
    args: list[str] = []
    for name, enabled in (config.get("env") or {}).items():
        if enabled:
            args.extend(["--env", str(name)])
    for name, writable in (config.get("globals") or {}).items():
        flag = writable if isinstance(writable, str) else str(bool(writable)).lower()
        args.extend(["--global", f"{name}:{flag}"])
    if config.get("parser"):
        args.extend(["--parser", str(config["parser"])])
    for key, value in (config.get("parserOptions") or {}).items():
        args.extend(["--parser-options", f"{key}:{json.dumps(value)}"])
    plugins = config.get("plugins") or ()
    for plugin in [plugins] if isinstance(plugins, str) else plugins:
        args.extend(["--plugin", str(plugin)])
    for rule, setting in (config.get("rules") or {}).items():
        args.extend(["--rule", json.dumps({rule: setting})])
    return args


__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "EslintCommandEngine",
    "is_ignored_by_patterns",
    "parse_eslint_payload",
]
