# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous stream primitives used to compose pipeline stages.

A stage is any callable that takes an async iterable of
:class:`~lintstream.files.FileRecord` objects and returns an async iterator of
records. Stages raise :class:`~lintstream.errors.PluginError` to report a
failure; the exception propagates to whoever drives the pipeline and ends the
run.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import deque
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable
from typing import TYPE_CHECKING, TypeAlias, TypeVar

from .errors import PluginConfigurationError, PluginError

if TYPE_CHECKING:
    from .files import FileRecord

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Stage: TypeAlias = Callable[[AsyncIterable["FileRecord"]], AsyncIterator["FileRecord"]]
RecordHandler: TypeAlias = Callable[
    ["FileRecord"],
    "FileRecord | None | Awaitable[FileRecord | None]",
]
FlushHandler: TypeAlias = Callable[[], object]


async def settle(value: T | Awaitable[T]) -> T:
    """Return ``value``, awaiting it first when it is awaitable."""

    if inspect.isawaitable(value):
        return await value
    return value


async def call_action(action: Callable[[T], object], payload: T) -> None:
    """Invoke a user action and wait for its outcome.

    The action may be a plain function, a coroutine function, or any callable
    returning an awaitable. Exceptions are re-raised as :class:`PluginError`
    so every stage reports failures through the same channel.

    Args:
        action: Callable supplied by the pipeline author.
        payload: Value handed to ``action``.

    Raises:
        PluginError: When ``action`` raises or its awaitable fails.
    """

    try:
        await settle(action(payload))
    except PluginError:
        raise
    except Exception as exc:
        raise PluginError.wrap(exc) from exc


def ensure_callable(action: object) -> None:
    """Raise :class:`PluginConfigurationError` unless ``action`` is callable."""

    if not callable(action):
        raise PluginConfigurationError("Expected callable argument")


async def aclose_stream(stream: object) -> None:
    """Close ``stream`` when it is an async generator or exposes ``aclose``."""

    aclose = getattr(stream, "aclose", None)
    if callable(aclose):
        await aclose()


async def _handle(on_record: RecordHandler, record: FileRecord) -> FileRecord | None:
    try:
        return await settle(on_record(record))
    except PluginError:
        raise
    except Exception as exc:
        raise PluginError.wrap(exc) from exc


def transform(
    on_record: RecordHandler,
    on_flush: FlushHandler | None = None,
    *,
    concurrency: int = 1,
) -> Stage:
    """Build a stage from a per-record handler and an optional flush hook.

    ``on_record`` returns the record to emit downstream or ``None`` to drop
    it. ``on_flush`` runs once, after the upstream is exhausted and every
    record has been handled. With ``concurrency`` above one, up to that many
    records are handled in overlapping tasks; records are still emitted in
    upstream order and the first failure cancels the outstanding tasks.

    Args:
        on_record: Handler applied to every record, sync or async.
        on_flush: Optional hook invoked at end of stream, sync or async.
        concurrency: Maximum number of records handled at once.

    Returns:
        Stage: Callable turning an upstream iterable into a downstream iterator.
    """

    if concurrency < 1:
        raise PluginConfigurationError(f"concurrency must be at least 1 (got {concurrency})")

    async def _sequential(records: AsyncIterable[FileRecord]) -> AsyncIterator[FileRecord]:
        async for record in records:
            emitted = await _handle(on_record, record)
            if emitted is not None:
                yield emitted

    async def _overlapping(records: AsyncIterable[FileRecord]) -> AsyncIterator[FileRecord]:
        pending: deque[asyncio.Task[FileRecord | None]] = deque()
        try:
            async for record in records:
                pending.append(asyncio.ensure_future(_handle(on_record, record)))
                if len(pending) < concurrency:
                    continue
                emitted = await pending.popleft()
                if emitted is not None:
                    yield emitted
            while pending:
                emitted = await pending.popleft()
                if emitted is not None:
                    yield emitted
        finally:
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

    async def stage(records: AsyncIterable[FileRecord]) -> AsyncIterator[FileRecord]:
        body = _sequential(records) if concurrency == 1 else _overlapping(records)
        try:
            async for record in body:
                yield record
        finally:
            await body.aclose()
            # Upstream stages may still hold running tasks when a later stage aborts.
            await aclose_stream(records)
        if on_flush is not None:
            LOGGER.debug("upstream exhausted; running flush hook %r", on_flush)
            try:
                await settle(on_flush())
            except PluginError:
                raise
            except Exception as exc:
                raise PluginError.wrap(exc) from exc

    return stage


async def iterate(source: AsyncIterable[T] | Iterable[T]) -> AsyncIterator[T]:
    """Yield items from a sync or async iterable."""

    if isinstance(source, AsyncIterable):
        try:
            async for item in source:
                yield item
        finally:
            await aclose_stream(source)
    else:
        for item in source:
            yield item


def pipe(
    source: AsyncIterable[FileRecord] | Iterable[FileRecord],
    *stages: Stage,
) -> AsyncIterator[FileRecord]:
    """Chain ``stages`` onto ``source`` and return the downstream iterator."""

    stream: AsyncIterator[FileRecord] = iterate(source)
    for stage in stages:
        stream = stage(stream)
    return stream


async def drain(stream: AsyncIterable[FileRecord]) -> list[FileRecord]:
    """Consume ``stream`` and return every record that reached the end.

    The stream is closed afterwards, even when consumption fails or is cancelled.
    """

    try:
        return [record async for record in stream]
    finally:
        await aclose_stream(stream)


async def run_pipeline(
    source: AsyncIterable[FileRecord] | Iterable[FileRecord],
    *stages: Stage,
) -> list[FileRecord]:
    """Run ``source`` through ``stages`` to completion.

    Raises:
        PluginError: The first error reported by any stage.
    """

    return await drain(pipe(source, *stages))


__all__ = [
    "FlushHandler",
    "RecordHandler",
    "Stage",
    "aclose_stream",
    "call_action",
    "drain",
    "ensure_callable",
    "iterate",
    "pipe",
    "run_pipeline",
    "settle",
    "transform",
]
