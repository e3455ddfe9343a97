# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolution of output sinks and delivery of rendered results."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import IO, TypeAlias

from ..errors import PluginConfigurationError
from ..logging import log
from ..models import LintResult
from ..streams import settle
from .formatters import Formatter

Writable: TypeAlias = Callable[[str], object]


def resolve_writable(sink: Writable | IO[str] | None = None) -> Writable:
    """Return a callable accepting rendered text.

    Args:
        sink: ``None`` for the timestamped console log, an object with a
            ``write`` method, or a callable taking the rendered text.

    Returns:
        Writable: Callable that delivers text to the sink.

    Raises:
        PluginConfigurationError: When ``sink`` is none of the above.
    """

    if sink is None:
        return log
    write = getattr(sink, "write", None)
    if callable(write):
        return write
    if callable(sink):
        return sink
    raise PluginConfigurationError(f"Expected a writable stream or callable, got {type(sink).__name__}")


async def write_results(
    results: Sequence[LintResult],
    formatter: Formatter,
    writable: Writable,
) -> None:
    """Render ``results`` with ``formatter`` and hand non-empty output to ``writable``.

    Either collaborator may return an awaitable; both are awaited.
    """

    message = await settle(formatter.format(list(results)))
    if message is None or message == "":
        return
    await settle(writable(message))


__all__ = ["Writable", "resolve_writable", "write_results"]
