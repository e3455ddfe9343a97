# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""In-memory file records and the stages that read and write them."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Collection, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, Final

from .models import LintResult
from .streams import Stage, transform

LOGGER = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: Final[frozenset[str]] = frozenset({".js", ".mjs", ".cjs", ".jsx", ".ts", ".tsx"})
_SKIPPED_DIRECTORIES: Final[frozenset[str]] = frozenset({"node_modules", ".git"})


@dataclass(slots=True)
class FileRecord:
    """Unit of work flowing through a pipeline.

    Attributes:
        path: Absolute path of the file.
        contents: Buffered bytes, a live binary stream, or ``None`` when the
            record carries no contents (for example a directory entry).
        cwd: Working directory the record was created relative to.
        base: Base directory used to compute :attr:`relative`; defaults to ``cwd``.
        lint_result: Result attached by the lint stage, if any.
    """

    path: Path
    contents: bytes | BinaryIO | None = None
    cwd: Path = field(default_factory=Path.cwd)
    base: Path | None = None
    lint_result: LintResult | None = None

    def __post_init__(self) -> None:
        self.cwd = Path(self.cwd)
        path = Path(self.path)
        self.path = path if path.is_absolute() else self.cwd / path
        if self.base is not None:
            self.base = Path(self.base)
        if isinstance(self.contents, (bytearray, memoryview)):
            self.contents = bytes(self.contents)

    def is_null(self) -> bool:
        """Return ``True`` when the record has no contents."""

        return self.contents is None

    def is_buffer(self) -> bool:
        """Return ``True`` when the contents are fully materialised bytes."""

        return isinstance(self.contents, bytes)

    def is_stream(self) -> bool:
        """Return ``True`` when the contents are a live, unbuffered stream."""

        return self.contents is not None and not self.is_buffer()

    @property
    def relative(self) -> Path:
        """Return :attr:`path` relative to :attr:`base` (or :attr:`cwd`)."""

        anchor = self.base if self.base is not None else self.cwd
        try:
            return self.path.relative_to(anchor)
        except ValueError:
            return self.path

    def text(self, encoding: str = "utf-8") -> str:
        """Decode buffered contents as text."""

        if not isinstance(self.contents, bytes):
            raise TypeError(f"{self.path} does not carry buffered contents")
        return self.contents.decode(encoding)


def discover_files(
    paths: Iterable[Path],
    *,
    extensions: Collection[str] = DEFAULT_EXTENSIONS,
) -> Iterator[Path]:
    """Expand ``paths`` into files, walking directories for matching extensions.

    Explicit file arguments are always yielded; directories are walked
    recursively, skipping ``node_modules`` and ``.git``.
    """

    seen: set[Path] = set()
    for candidate in paths:
        if candidate.is_dir():
            matches = sorted(
                path
                for path in candidate.rglob("*")
                if path.is_file()
                and path.suffix in extensions
                and not _SKIPPED_DIRECTORIES.intersection(path.relative_to(candidate).parts)
            )
        else:
            matches = [candidate]
        for match in matches:
            if match in seen:
                continue
            seen.add(match)
            yield match


async def read_records(
    paths: Iterable[Path],
    *,
    cwd: Path | None = None,
    base: Path | None = None,
) -> AsyncIterator[FileRecord]:
    """Yield buffered :class:`FileRecord` objects for ``paths`` in order.

    Args:
        paths: Files to read; relative entries resolve against ``cwd``.
        cwd: Working directory for the records; defaults to the process cwd.
        base: Optional base directory recorded on each record.
    """

    root = cwd or Path.cwd()
    for path in paths:
        absolute = path if path.is_absolute() else root / path
        contents = await asyncio.to_thread(absolute.read_bytes)
        yield FileRecord(path=absolute, contents=contents, cwd=root, base=base)


def write_records(dest: Path | None = None, *, only_fixed: bool = False) -> Stage:
    """Return a stage persisting buffered record contents to disk.

    Args:
        dest: Output directory; records keep their relative layout beneath it.
            When ``None`` each record is written back to its own path.
        only_fixed: Write only records whose lint result reports a fix.

    Returns:
        Stage: Pass-through stage that writes records as they arrive.
    """

    async def _write(record: FileRecord) -> FileRecord:
        if not record.is_buffer():
            return record
        if only_fixed and not (record.lint_result is not None and record.lint_result.fixed):
            return record
        target = record.path if dest is None else dest / record.relative
        LOGGER.debug("writing %s", target)
        await asyncio.to_thread(_write_bytes, target, record.contents)
        return record

    return transform(_write)


def _write_bytes(target: Path, payload: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(payload)


__all__ = [
    "DEFAULT_EXTENSIONS",
    "FileRecord",
    "discover_files",
    "read_records",
    "write_records",
]
