# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Formatting and output of lint results."""

from __future__ import annotations

from .formatters import (
    BUILTIN_FORMATTERS,
    DEFAULT_FORMATTER,
    FORMATTER_ENTRY_POINT_GROUP,
    FormatFunction,
    Formatter,
    FunctionFormatter,
    available_formatters,
    resolve_formatter,
)
from .writers import Writable, resolve_writable, write_results

__all__ = [
    "BUILTIN_FORMATTERS",
    "DEFAULT_FORMATTER",
    "FORMATTER_ENTRY_POINT_GROUP",
    "FormatFunction",
    "Formatter",
    "FunctionFormatter",
    "Writable",
    "available_formatters",
    "resolve_formatter",
    "resolve_writable",
    "write_results",
]
