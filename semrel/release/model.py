from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from semrel.release.semver import SemanticVersion


BumpKind = Literal["major", "minor", "patch"]
BUMP_KINDS: tuple[BumpKind, ...] = ("major", "minor", "patch")

CHANGELOG_HEADER = "\nChangelog:\n\n"


class ReleaseStage(Enum):
    START = "start"
    NOTES_COLLECTED = "notes_collected"
    VERSION_RESOLVED = "version_resolved"
    CHANGELOG_COLLECTED = "changelog_collected"
    TAG_MESSAGE_ASSEMBLED = "tag_message_assembled"
    TAGGED = "tagged"
    ARCHIVED = "archived"
    DONE = "done"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    bump: BumpKind
    include_build_metadata: bool = False
    prerelease: str = ""


@dataclass(frozen=True, slots=True)
class ChangelogRange:
    """Commits going into the changelog: all history, or since the last tag."""

    previous_tag: str | None = None

    def __str__(self) -> str:
        if self.previous_tag is None:
            return "HEAD"
        return f"{self.previous_tag}..HEAD"


@dataclass(frozen=True, slots=True)
class ReleaseArtifact:
    version: SemanticVersion
    tag: str
    message: str  # baseline handed to `git tag`, before the final amend
    archive: Path
