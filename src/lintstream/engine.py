# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Protocols describing the linting engine consumed by the lint stage."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol, TypeAlias, runtime_checkable

from .engines.eslint import EslintCommandEngine
from .models import LintResult
from .options import LintOptions


@runtime_checkable
class LintEngine(Protocol):
    """Pre-configured engine able to lint text and answer ignore queries.

    Implementations may return plain values or awaitables from either method
    and must tolerate concurrent calls for independent files.
    """

    def is_path_ignored(self, path: str) -> bool | Awaitable[bool]:
        """Return whether ``path`` (relative to the base directory) is ignored."""

        raise NotImplementedError

    def lint_text(
        self,
        text: str,
        *,
        file_path: str,
    ) -> Sequence[LintResult] | Awaitable[Sequence[LintResult]]:
        """Lint ``text`` as if it were the contents of ``file_path``.

        Returns:
            Sequence[LintResult]: A single-element sequence describing the file.
        """

        raise NotImplementedError


EngineFactory: TypeAlias = Callable[[LintOptions], LintEngine]


def build_engine(options: LintOptions, engine: LintEngine | EngineFactory | None = None) -> LintEngine:
    """Return the engine for a lint stage.

    Args:
        options: Normalised stage options.
        engine: A ready engine, a factory called with ``options``, or ``None``
            to use the ESLint command engine.

    Returns:
        LintEngine: Engine shared by every record of the stage.
    """

    if engine is None:
        return EslintCommandEngine(options)
    if not isinstance(engine, type) and isinstance(engine, LintEngine):
        return engine
    return engine(options)


__all__ = ["EngineFactory", "LintEngine", "build_engine"]
