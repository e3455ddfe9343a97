# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Project-level configuration loaded from ``pyproject.toml``."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from .errors import ConfigError

PYPROJECT_FILE: Final[str] = "pyproject.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintstream"


def _normalise_keys(payload: Mapping[str, Any]) -> dict[str, Any]:
    # Keys inside ``rules``/``override_config`` belong to the engine and keep their spelling.
    return {str(key).replace("-", "_"): value for key, value in payload.items()}


def find_pyproject(start: Path) -> Path | None:
    """Return the nearest ``pyproject.toml`` at or above ``start``."""

    current = start.resolve()
    for candidate in (current, *current.parents):
        path = candidate / PYPROJECT_FILE
        if path.is_file():
            return path
    return None


def load_project_options(root: Path) -> dict[str, Any]:
    """Return the ``[tool.lintstream]`` table for the project containing ``root``.

    Args:
        root: Directory from which the ``pyproject.toml`` search starts.

    Returns:
        dict[str, Any]: Option mapping with dashed keys converted to
        underscores; empty when no configuration exists.

    Raises:
        ConfigError: When the file cannot be parsed or the section is not a table.
    """

    pyproject = find_pyproject(root)
    if pyproject is None:
        return {}
    try:
        with pyproject.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {pyproject}: {exc}") from exc
    section = data.get(PYPROJECT_TOOL_KEY, {}).get(PYPROJECT_SECTION_KEY, {})
    if not isinstance(section, Mapping):
        raise ConfigError(f"[tool.{PYPROJECT_SECTION_KEY}] in {pyproject} must be a table")
    options = _normalise_keys(section)
    base_dir = options.get("base_dir")
    if isinstance(base_dir, str):
        options["base_dir"] = (pyproject.parent / base_dir).resolve()
    return options


__all__ = ["find_pyproject", "load_project_options"]
