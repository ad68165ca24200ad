"""Subprocess execution with Result-based error handling.

Two capabilities are kept apart:

- captured runs (``run``, ``run_to_file``): output is redirected into a
  buffer or a file, stderr is captured for diagnostics;
- interactive runs (``run_interactive``): the child inherits the caller's
  terminal streams, which is what editors and ``git tag -e`` need.

All of them block until the child exits.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import IO

from semrel.core.result import Err, Ok, Result

__all__ = [
    "OUTPUT_ENCODING",
    "OUTPUT_ERRORS",
    "ProcessError",
    "run",
    "run_interactive",
    "run_to_file",
]

# Git passes commit and author bytes through as stored; keep any that are
# not valid UTF-8 as surrogate escapes instead of failing.
OUTPUT_ENCODING = "utf-8"
OUTPUT_ERRORS = "surrogateescape"


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process (-1 if it never started).
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"

    @property
    def first_line(self) -> str:
        """First line of the diagnostic output, or the summary if there is none."""
        line = self.stderr.split("\n", 1)[0].rstrip("\r")
        return line or str(self)


def _launch_error(cmd: list[str], e: OSError) -> Err[ProcessError]:
    return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and return its stdout.

    Output is decoded as UTF-8; undecodable bytes are kept as surrogate
    escapes so they can be written back unchanged.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.
        env: Environment variables (uses current env if None).

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            encoding=OUTPUT_ENCODING,
            errors=OUTPUT_ERRORS,
            check=False,
        )
    except OSError as e:
        return _launch_error(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_to_file(
    cmd: list[str],
    cwd: Path,
    stdout: IO[str],
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with stdout written straight into ``stdout``.

    Use this when the output size is unbounded. Stderr is still captured so
    failures carry their diagnostics.
    """
    stdout.flush()
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            stdin=subprocess.DEVNULL,
            stdout=stdout,
            stderr=subprocess.PIPE,
            encoding=OUTPUT_ENCODING,
            errors=OUTPUT_ERRORS,
            check=False,
        )
    except OSError as e:
        return _launch_error(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr=proc.stderr,
            )
        )

    return Ok(None)


def run_interactive(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command attached to the caller's terminal.

    Stdin, stdout and stderr are inherited, so nothing is captured: on
    failure only the exit status is known.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            check=False,
        )
    except OSError as e:
        return _launch_error(cmd, e)

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout="",
                stderr="",
            )
        )

    return Ok(None)
