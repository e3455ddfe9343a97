# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for ``[tool.lintstream]`` loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from lintstream.config import find_pyproject, load_project_options
from lintstream.errors import ConfigError
from lintstream.options import migrate_options


def test_missing_pyproject_yields_empty_options(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("lintstream.config.find_pyproject", lambda start: None)

    assert load_project_options(tmp_path) == {}


def test_section_is_loaded_from_parent_directory(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        "[tool.lintstream]\n"
        "warn-file-ignored = true\n"
        'base-dir = "web"\n'
        "concurrency = 4\n"
        "\n"
        "[tool.lintstream.rules]\n"
        'no-var = "error"\n',
        encoding="utf-8",
    )
    nested = tmp_path / "web" / "src"
    nested.mkdir(parents=True)

    assert find_pyproject(nested) == (tmp_path / "pyproject.toml").resolve()
    raw = load_project_options(nested)
    options = migrate_options(raw)

    assert options.warn_file_ignored is True
    assert options.base_dir == (tmp_path / "web").resolve()
    assert options.concurrency == 4
    assert options.override_config == {"rules": {"no-var": "error"}}


def test_project_without_section_yields_empty_options(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n', encoding="utf-8")

    assert load_project_options(tmp_path) == {}


def test_invalid_toml_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.lintstream\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Unable to read"):
        load_project_options(tmp_path)


def test_non_table_section_raises_config_error(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool]\nlintstream = "yes"\n', encoding="utf-8")

    with pytest.raises(ConfigError, match="must be a table"):
        load_project_options(tmp_path)
