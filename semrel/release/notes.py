"""Release notes collected interactively in the operator's editor."""

from __future__ import annotations

import shlex
from collections.abc import Callable
from pathlib import Path

from semrel.core.result import Err, Ok, Result
from semrel.platform.files import scratch_file
from semrel.platform.process import ProcessError, run_interactive
from semrel.release.errors import ReleaseError

__all__ = ["NOTES_PREAMBLE", "EditorLauncher", "NotesEditor", "strip_comment_lines"]

NOTES_PREAMBLE = (
    "# Enter notes about the release below. These would provide a high-level overview\n"
    "# of what's in the release. Lines starting with '#' will be ignored, and the\n"
    "# output of 'git shortlog' will be appended to the bottom.\n"
)

EditorLauncher = Callable[[list[str], Path], Result[None, ProcessError]]


def strip_comment_lines(text: str) -> str:
    """Drop lines starting with ``#``; keep the rest, blank ones included."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    kept = [line.removesuffix("\r") for line in lines if not line.startswith("#")]
    return "".join(f"{line}\n" for line in kept)


def _default_launcher(cmd: list[str], cwd: Path) -> Result[None, ProcessError]:
    return run_interactive(cmd, cwd=cwd)


class NotesEditor:
    """Opens a scratch buffer in the operator's editor and returns the cleaned text.

    Args:
        editor: Editor command line (e.g. ``"code --wait"``); None if unset.
        cwd: Directory the editor is started from.
        launch: Runs the editor attached to the terminal and waits for it.
    """

    def __init__(
        self,
        editor: str | None,
        *,
        cwd: Path,
        launch: EditorLauncher = _default_launcher,
    ) -> None:
        self.editor = editor
        self.cwd = cwd
        self._launch = launch

    def collect(self) -> Result[str, ReleaseError]:
        if not self.editor:
            return Err(
                ReleaseError(
                    kind="editor_missing",
                    message="EDITOR not set",
                    hint="export EDITOR or set [editor] command in .semrel.toml",
                )
            )

        try:
            cmd = shlex.split(self.editor)
        except ValueError as e:
            return Err(ReleaseError(kind="editor_missing", message=f"invalid editor command: {e}"))
        if not cmd:
            return Err(ReleaseError(kind="editor_missing", message="EDITOR not set"))

        try:
            with scratch_file("semrel-notes-", NOTES_PREAMBLE) as buffer:
                launched = self._launch([*cmd, str(buffer)], self.cwd)
                if isinstance(launched, Err):
                    return Err(ReleaseError(kind="tool_failed", message=launched.error.first_line))
                raw = buffer.read_text(encoding="utf-8", errors="surrogateescape")
        except OSError as e:
            return Err(ReleaseError(kind="io_failed", message=f"release notes buffer: {e}"))

        return Ok(strip_comment_lines(raw))
