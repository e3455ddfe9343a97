# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Option models and migration of legacy option shapes."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError
from .models import LintMessage, MessagePredicate, is_error_message

CONFIG_FILE_KEYS: Final[tuple[str, ...]] = ("configFile", "config_file")

# Legacy top-level keys that now live under ``override_config``.
OVERRIDE_CONFIG_KEYS: Final[dict[str, str]] = {
    "rules": "rules",
    "globals": "globals",
    "env": "env",
    "envs": "env",
    "parser": "parser",
    "parserOptions": "parserOptions",
    "parser_options": "parserOptions",
    "plugins": "plugins",
    "extends": "extends",
}

# Options consumed by the pipeline itself rather than the engine.
PIPELINE_FIELDS: Final[frozenset[str]] = frozenset({"quiet", "warn_file_ignored", "base_dir", "concurrency"})


class LintOptions(BaseModel):
    """Normalised options for a lint stage.

    Unknown keys are preserved and handed to the engine untouched.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", validate_assignment=True)

    quiet: bool | Callable[[LintMessage], bool] = False
    warn_file_ignored: bool = Field(default=False, alias="warnFileIgnored")
    base_dir: Path | None = Field(default=None, alias="baseDir")
    concurrency: int = Field(default=1, ge=1)
    fix: bool = False
    ignore: bool = True
    ignore_patterns: list[str] = Field(default_factory=list, alias="ignorePatterns")
    override_config_file: str | None = Field(default=None, alias="overrideConfigFile")
    override_config: dict[str, Any] = Field(default_factory=dict, alias="overrideConfig")

    def quiet_predicate(self) -> MessagePredicate | None:
        """Return the message filter implied by :attr:`quiet`, or ``None``."""

        if callable(self.quiet):
            return self.quiet
        return is_error_message if self.quiet else None

    def resolved_base_dir(self) -> Path:
        """Return :attr:`base_dir`, falling back to the process working directory."""

        return self.base_dir if self.base_dir is not None else Path.cwd()

    def engine_options(self) -> dict[str, Any]:
        """Return the options meant for the linting engine."""

        return self.model_dump(exclude=set(PIPELINE_FIELDS))


def _coerce_envs(value: object) -> object:
    if isinstance(value, Sequence) and not isinstance(value, str):
        return {str(name): True for name in value}
    return value


def _coerce_globals(value: object) -> object:
    if not isinstance(value, Sequence) or isinstance(value, str):
        return value
    globals_map: dict[str, bool] = {}
    for entry in value:
        name, _, flag = str(entry).partition(":")
        globals_map[name.strip()] = flag.strip().lower() == "true"
    return globals_map


def _migrate_mapping(raw: Mapping[str, Any]) -> dict[str, Any]:
    payload = dict(raw)
    for key in CONFIG_FILE_KEYS:
        if key in payload:
            config_file = payload.pop(key)
            payload.setdefault("override_config_file", str(config_file) if config_file else None)

    override_key = "overrideConfig" if "overrideConfig" in payload else "override_config"
    override = dict(payload.pop(override_key, None) or {})
    for legacy_key, target in OVERRIDE_CONFIG_KEYS.items():
        if legacy_key not in payload:
            continue
        value = payload.pop(legacy_key)
        if legacy_key == "envs":
            value = _coerce_envs(value)
        elif legacy_key == "globals":
            value = _coerce_globals(value)
        override.setdefault(target, value)
    payload["override_config"] = override
    return payload


def migrate_options(raw: LintOptions | Mapping[str, Any] | str | Path | None = None) -> LintOptions:
    """Convert legacy option shapes into :class:`LintOptions`.

    Accepted shapes are ``None``, a config file path, a mapping (legacy
    top-level rule keys are moved into ``override_config``) or an existing
    :class:`LintOptions`, which is returned unchanged.

    Args:
        raw: Options supplied by the pipeline author.

    Returns:
        LintOptions: Normalised options.

    Raises:
        ConfigError: When ``raw`` has an unsupported shape or invalid values.
    """

    if isinstance(raw, LintOptions):
        return raw
    if raw is None:
        return LintOptions()
    if isinstance(raw, (str, Path)):
        return LintOptions(override_config_file=str(raw))
    if not isinstance(raw, Mapping):
        raise ConfigError(f"options must be a mapping or a config file path, not {type(raw).__name__}")
    try:
        return LintOptions.model_validate(_migrate_mapping(raw))
    except ValidationError as exc:
        raise ConfigError(f"invalid lint options: {exc}") from exc


__all__ = ["LintOptions", "migrate_options"]
