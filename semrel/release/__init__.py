"""Release bounded context.

- semver: version model
- git: version-control adapter
- notes: interactive release notes
- pipeline: end-to-end orchestration
"""

from __future__ import annotations

from .errors import ReleaseError
from .model import BUMP_KINDS, BumpKind, ChangelogRange, ReleaseArtifact, ReleaseRequest, ReleaseStage
from .semver import SemanticVersion, parse_version

__all__ = [
    "BUMP_KINDS",
    "BumpKind",
    "ChangelogRange",
    "ReleaseArtifact",
    "ReleaseError",
    "ReleaseRequest",
    "ReleaseStage",
    "SemanticVersion",
    "parse_version",
]
