"""Git adapter for the release pipeline.

Usage:
    repo = GitRepository(Path.cwd())

    match repo.describe_latest_tag():
        case Ok(tag):
            print(f"Previous release: {tag}")
        case Err(e) if e.kind == "tag_not_found":
            print("First release")
        case Err(e):
            print(f"git failed: {e.message}")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import IO

from semrel.core.result import Err, Ok, Result
from semrel.platform.process import ProcessError, run, run_interactive, run_to_file
from semrel.release.errors import ReleaseError
from semrel.release.model import ChangelogRange

__all__ = ["ARCHIVE_SUFFIX", "GitRepository", "archive_name"]

ARCHIVE_SUFFIX = ".tar.gz"

# Fragments of `git describe` stderr meaning "no tag to describe from".
# Only stable under the C locale, see `_c_locale_env`.
_NO_TAG_MARKERS = ("No names found", "No tags can describe", "No annotated tags can describe")


def archive_name(tag: str) -> str:
    return f"{tag}{ARCHIVE_SUFFIX}"


def _tool_failed(e: ProcessError) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="tool_failed", message=e.first_line))


def _c_locale_env() -> dict[str, str]:
    """Current environment with git's messages forced to untranslated English."""
    return {**os.environ, "LC_ALL": "C", "LANGUAGE": "C"}


class GitRepository:
    """Release operations on a single git repository.

    Attributes:
        path: Repository working directory; archives are written here.
        git: Git executable.
    """

    def __init__(self, path: Path, *, git: str = "git") -> None:
        self.path = path
        self.git = git

    def describe_latest_tag(self) -> Result[str, ReleaseError]:
        """Get the most recent annotated tag reachable from HEAD.

        Returns:
            Ok(tag) on success
            Err(ReleaseError) with kind ``tag_not_found`` when the history has
            no tag yet, ``tool_failed`` for any other git failure
        """
        result = self._run(["describe", "--abbrev=0"], env=_c_locale_env())
        match result:
            case Err(e):
                if any(marker in e.stderr for marker in _NO_TAG_MARKERS):
                    return Err(
                        ReleaseError(kind="tag_not_found", message=e.first_line)
                    )
                return _tool_failed(e)
            case Ok(stdout):
                return Ok(stdout.rstrip("\n"))

    def short_head(self) -> Result[str, ReleaseError]:
        """Abbreviated hash of the current commit."""
        result = self._run(["log", "-n", "1", "--format=%h"])
        match result:
            case Err(e):
                return _tool_failed(e)
            case Ok(stdout):
                return Ok(stdout.rstrip("\n"))

    def shortlog(self, rev_range: ChangelogRange, dest: IO[str]) -> Result[None, ReleaseError]:
        """Stream `git shortlog <range>` into ``dest``."""
        result = run_to_file(
            [self.git, "shortlog", str(rev_range)],
            cwd=self.path,
            stdout=dest,
        )
        if isinstance(result, Err):
            return _tool_failed(result.error)
        return Ok(None)

    def create_annotated_tag(self, name: str, message_file: Path) -> Result[None, ReleaseError]:
        """Create an annotated tag from ``message_file``.

        Git opens its editor on the message before writing the tag object,
        so this runs attached to the terminal.
        """
        result = run_interactive(
            [self.git, "tag", "-a", name, "-eF", str(message_file)],
            cwd=self.path,
        )
        if isinstance(result, Err):
            return _tool_failed(result.error)
        return Ok(None)

    def create_archive(self, tag: str) -> Result[Path, ReleaseError]:
        """Write ``<tag>.tar.gz`` into the repository directory."""
        output = self.path / archive_name(tag)
        result = self._run(["archive", "-o", str(output), tag])
        if isinstance(result, Err):
            return _tool_failed(result.error)
        return Ok(output)

    def _run(
        self, args: list[str], env: dict[str, str] | None = None
    ) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run([self.git, *args], cwd=self.path, env=env)
