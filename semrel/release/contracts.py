"""Capability interfaces consumed by the release pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Protocol

from semrel.core.result import Result
from semrel.release.errors import ReleaseError
from semrel.release.model import ChangelogRange


class VcsGateway(Protocol):
    """The version-control operations a release needs.

    Each call is a synchronous request/response; implementations hold no
    state between calls.
    """

    def describe_latest_tag(self) -> Result[str, ReleaseError]:
        """Return the most recent tag, or Err(kind="tag_not_found") if there is none."""
        ...

    def short_head(self) -> Result[str, ReleaseError]:
        """Return the abbreviated hash of HEAD."""
        ...

    def shortlog(self, rev_range: ChangelogRange, dest: IO[str]) -> Result[None, ReleaseError]:
        """Write the per-author commit summary for ``rev_range`` into ``dest``."""
        ...

    def create_annotated_tag(self, name: str, message_file: Path) -> Result[None, ReleaseError]: ...

    def create_archive(self, tag: str) -> Result[Path, ReleaseError]: ...


class NotesSource(Protocol):
    def collect(self) -> Result[str, ReleaseError]:
        """Return the operator's cleaned release notes."""
        ...
