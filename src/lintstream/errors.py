# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exceptions raised by lintstream pipeline stages."""

from __future__ import annotations

from typing import Final

PLUGIN_NAME: Final[str] = "lintstream"


class ConfigError(Exception):
    """Raised when option or configuration input is invalid."""


class PluginError(RuntimeError):
    """Pipeline-level error surfaced through a stage's error channel.

    Attributes:
        plugin: Name of the plugin that raised the error.
        name: Identifying error name shown to users.
        message: Human-readable description of the failure.
        file_name: Path of the offending file, when the error is file specific.
        line_number: Line of the offending finding, when known.
        show_stack: Whether reporters should include the traceback.
    """

    default_name: str = "Error"

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        file_name: str | None = None,
        line_number: int | None = None,
        plugin: str = PLUGIN_NAME,
        show_stack: bool = False,
    ) -> None:
        super().__init__(message)
        self.plugin = plugin
        self.name = name or self.default_name
        self.message = message
        self.file_name = file_name
        self.line_number = line_number
        self.show_stack = show_stack

    @classmethod
    def wrap(cls, exc: BaseException, *, plugin: str = PLUGIN_NAME) -> PluginError:
        """Return ``exc`` when it already is a :class:`PluginError`, otherwise wrap it.

        Args:
            exc: Exception raised by a user action or collaborator.
            plugin: Plugin name recorded on the wrapping error.

        Returns:
            PluginError: Error suitable for the pipeline's error channel.
        """

        if isinstance(exc, PluginError):
            return exc
        message = str(exc) or "Unknown Error"
        return cls(message, name=type(exc).__name__, plugin=plugin, show_stack=True)

    @property
    def location(self) -> str | None:
        """Return ``file:line`` when the error is tied to a file."""

        if self.file_name is None:
            return None
        if self.line_number is None:
            return self.file_name
        return f"{self.file_name}:{self.line_number}"

    def __str__(self) -> str:
        text = f"{self.name}: {self.message}"
        location = self.location
        if location:
            text = f"{text} ({location})"
        return text


class UnsupportedInputError(PluginError):
    """Raised when a record carries streamed contents that cannot be linted as text."""

    default_name = "UnsupportedInputError"


class LintEngineError(PluginError):
    """Raised when the linting engine fails for a single record."""

    default_name = "LintEngineError"


class PluginConfigurationError(PluginError):
    """Raised when a stage factory receives an unusable argument."""

    default_name = "PluginConfigurationError"


class LintFailureError(PluginError):
    """Raised by failure stages to signal error-severity findings."""

    default_name = "ESLintError"


__all__ = [
    "PLUGIN_NAME",
    "ConfigError",
    "LintEngineError",
    "LintFailureError",
    "PluginConfigurationError",
    "PluginError",
    "UnsupportedInputError",
]
