# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Asynchronous lint pipeline stages for in-memory file records."""

from __future__ import annotations

from .engine import EngineFactory, LintEngine, build_engine
from .errors import (
    ConfigError,
    LintEngineError,
    LintFailureError,
    PluginConfigurationError,
    PluginError,
    UnsupportedInputError,
)
from .files import FileRecord, discover_files, read_records, write_records
from .models import (
    LintMessage,
    LintResult,
    ResultBatch,
    create_ignore_result,
    filter_result,
    first_result_message,
    is_error_message,
    is_warning_message,
)
from .options import LintOptions, migrate_options
from .plugin import fail_after_error, fail_on_error, format, format_each, lint, result, results
from .reporting import resolve_formatter, resolve_writable, write_results
from .severity import Severity
from .streams import Stage, drain, pipe, run_pipeline, transform

__all__ = [
    "ConfigError",
    "EngineFactory",
    "FileRecord",
    "LintEngine",
    "LintEngineError",
    "LintFailureError",
    "LintMessage",
    "LintOptions",
    "LintResult",
    "PluginConfigurationError",
    "PluginError",
    "ResultBatch",
    "Severity",
    "Stage",
    "UnsupportedInputError",
    "build_engine",
    "create_ignore_result",
    "discover_files",
    "drain",
    "fail_after_error",
    "fail_on_error",
    "filter_result",
    "first_result_message",
    "format",
    "format_each",
    "is_error_message",
    "is_warning_message",
    "lint",
    "migrate_options",
    "pipe",
    "read_records",
    "resolve_formatter",
    "resolve_writable",
    "result",
    "results",
    "run_pipeline",
    "transform",
    "write_records",
    "write_results",
]
