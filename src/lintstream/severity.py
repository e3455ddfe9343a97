# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels reported for lint messages."""

    ERROR = "error"
    WARNING = "warning"


_LEVEL_ERROR: Final[int] = 2
_LEVEL_WARNING: Final[int] = 1


def coerce_severity(value: object, default: Severity = Severity.WARNING) -> Severity:
    """Normalise numeric or textual severities into :class:`Severity`.

    ESLint reports ``2`` for errors and ``1`` for warnings; textual labels are
    matched case-insensitively. Anything unrecognised maps to ``default``,
    including ESLint's ``0`` ("off"), which engines never attach to a message.

    Args:
        value: Raw severity payload produced by an engine.
        default: Severity returned when ``value`` is not recognised.

    Returns:
        Severity: Normalised severity.
    """

    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        if value >= _LEVEL_ERROR:
            return Severity.ERROR
        if value == _LEVEL_WARNING:
            return Severity.WARNING
        return default
    if isinstance(value, str):
        label = value.strip().lower()
        if label in {"error", "err", "fatal", "2"}:
            return Severity.ERROR
        if label in {"warning", "warn", "1"}:
            return Severity.WARNING
    return default


__all__ = ["Severity", "coerce_severity"]
