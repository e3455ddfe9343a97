# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line entry point running the lint pipeline over files on disk."""

from __future__ import annotations

import asyncio
from contextlib import ExitStack
from pathlib import Path
from typing import Any

import typer

from .config import load_project_options
from .errors import ConfigError, LintFailureError, PluginError
from .files import DEFAULT_EXTENSIONS, discover_files, read_records, write_records
from .logging import fail, ok, warn
from .options import migrate_options
from .plugin import fail_after_error, fail_on_error, format, format_each, lint
from .reporting.formatters import DEFAULT_FORMATTER
from .streams import Stage, run_pipeline

EXIT_LINT_FAILURE = 1
EXIT_USAGE_FAILURE = 2

app = typer.Typer(
    name="lintstream",
    help="Lint files through an asynchronous result pipeline.",
    add_completion=False,
    no_args_is_help=False,
)


def _cli_overrides(**values: Any) -> dict[str, Any]:
    return {key: value for key, value in values.items() if value not in (None, False, [], ())}


@app.command()
def main(
    paths: list[Path] = typer.Argument(None, help="Files or directories to lint (default: current directory)."),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="ESLint configuration file."),
    formatter: str = typer.Option(DEFAULT_FORMATTER, "--format", "-f", help="Formatter name."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report to this file."),
    fix: bool = typer.Option(False, "--fix", help="Apply automatic fixes and write them back."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Report errors only."),
    warn_ignored: bool = typer.Option(False, "--warn-ignored", help="Report files skipped by ignore rules."),
    fail_first: bool = typer.Option(
        False,
        "--fail-on-error",
        help="Stop at the first file with an error instead of after all files.",
    ),
    concurrency: int | None = typer.Option(None, "--concurrency", "-j", min=1, help="Files linted at once."),
    executable: str | None = typer.Option(None, "--executable", help="ESLint executable to run."),
    base_dir: Path | None = typer.Option(None, "--base-dir", help="Directory paths are resolved against."),
    extensions: list[str] = typer.Option(
        None,
        "--ext",
        help="File extensions to lint when walking directories.",
    ),
    use_color: bool = typer.Option(True, "--color/--no-color", help="Colour console messages."),
) -> None:
    """Lint PATHS, print a report, and exit non-zero when errors were found."""

    cwd = Path.cwd()
    try:
        raw_options = load_project_options(cwd)
        raw_options.update(
            _cli_overrides(
                override_config_file=str(config_file) if config_file else None,
                fix=fix,
                quiet=quiet,
                warn_file_ignored=warn_ignored,
                concurrency=concurrency,
                executable=executable,
                base_dir=base_dir.resolve() if base_dir else None,
            ),
        )
        options = migrate_options(raw_options)
    except ConfigError as exc:
        fail(str(exc), use_emoji=False, use_color=use_color)
        raise typer.Exit(code=EXIT_USAGE_FAILURE) from exc

    suffixes = frozenset(ext if ext.startswith(".") else f".{ext}" for ext in extensions) if extensions else None
    files = list(discover_files(paths or [cwd], extensions=suffixes or DEFAULT_EXTENSIONS))
    if not files:
        warn("No files matched the given paths", use_emoji=False, use_color=use_color)
        return

    with ExitStack() as stack:
        sink = stack.enter_context(output.open("w", encoding="utf-8")) if output else None
        try:
            stages: list[Stage] = [lint(options)]
            if options.fix:
                stages.append(write_records(only_fixed=True))
            if fail_first:
                stages.extend([format_each(formatter, sink), fail_on_error()])
            else:
                stages.extend([format(formatter, sink), fail_after_error()])
            asyncio.run(run_pipeline(read_records(files, cwd=cwd), *stages))
        except LintFailureError as exc:
            fail(str(exc), use_emoji=False, use_color=use_color)
            raise typer.Exit(code=EXIT_LINT_FAILURE) from exc
        except PluginError as exc:
            fail(str(exc), use_emoji=False, use_color=use_color)
            raise typer.Exit(code=EXIT_USAGE_FAILURE) from exc

    ok(f"Linted {len(files)} file(s)", use_emoji=False, use_color=use_color)


__all__ = ["app", "main"]
