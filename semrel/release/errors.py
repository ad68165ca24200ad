"""Error payload for the release pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_version",
    "editor_missing",
    "tool_failed",
    "tag_not_found",
    "io_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error.

    ``tag_not_found`` is the one expected condition: it marks a repository
    without any previous release and is handled by the pipeline rather than
    reported.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
