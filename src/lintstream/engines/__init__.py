# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Concrete linting engines."""

from __future__ import annotations

from .eslint import EslintCommandEngine, is_ignored_by_patterns, parse_eslint_payload

__all__ = ["EslintCommandEngine", "is_ignored_by_patterns", "parse_eslint_payload"]
