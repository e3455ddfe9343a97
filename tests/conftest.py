# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from lintstream.files import FileRecord


@pytest.fixture
def make_record(tmp_path: Path) -> Callable[..., FileRecord]:
    """Return a factory building buffered records rooted at ``tmp_path``."""

    def _make(name: str, text: str | None = "var a = 1;\n") -> FileRecord:
        contents = text.encode("utf-8") if text is not None else None
        return FileRecord(path=tmp_path / name, contents=contents, cwd=tmp_path)

    return _make
