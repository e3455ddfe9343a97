# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess is only reached through this wrapper, which normalises
# arguments and never sets ``shell=True``.
import subprocess  # nosec B404
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    # Bandit: type-only import of subprocess metadata is part of the safe wrapper.
    from subprocess import CompletedProcess as _CompletedProcess  # nosec B404


class SubprocessExecutionError(RuntimeError):
    """Raised when an engine subprocess exits with a failure status."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


def _normalize_args(args: Sequence[str]) -> list[str]:
    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    input_text: str | None = None,
) -> _CompletedProcess[str]:
    """Execute *args* after normalising the executable path.

    The exit status is returned, not checked; callers decide which statuses
    count as failures.

    Args:
        args: Command and arguments; the executable is resolved on ``PATH``.
        cwd: Working directory for the child process.
        input_text: Text written to the child's stdin.

    Returns:
        CompletedProcess[str]: Completed process with captured text output.
    """

    normalized = _normalize_args(args)
    # Bandit: commands originate from engine options; we pass argument
    # lists directly without shell expansion.
    return subprocess.run(  # nosec B603
        normalized,
        cwd=str(cwd) if cwd is not None else None,
        check=False,
        capture_output=True,
        text=True,
        input=input_text,
        stdin=subprocess.DEVNULL if input_text is None else None,
    )


__all__ = ["SubprocessExecutionError", "run_command"]
