"""Semantic version parsing, bumping and rendering.

Tags look like ``v<major>.<minor>.<patch>[-<prerelease>][+<build>]``. The
qualifier tail after the patch number is scanned one character at a time:
``-`` starts collecting pre-release characters, ``+`` starts collecting
build metadata, anything else goes to whichever buffer is active.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from semrel.core.result import Err, Ok, Result
from semrel.release.errors import ReleaseError
from semrel.release.model import BumpKind

__all__ = ["SemanticVersion", "parse_version"]


@dataclass(slots=True)
class SemanticVersion:
    """A mutable semantic version; the default value is ``v0.0.0``."""

    major: int = 0
    minor: int = 0
    patch: int = 0
    prerelease: str = ""
    build: str = ""

    def bump(self, kind: BumpKind) -> None:
        """Advance to the next clean numeric version, in place.

        Qualifiers are always dropped; callers set new ones afterwards.
        """
        self.prerelease = ""
        self.build = ""

        match kind:
            case "major":
                self.major += 1
                self.minor = 0
                self.patch = 0
            case "minor":
                self.minor += 1
                self.patch = 0
            case "patch":
                self.patch += 1
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def render(self) -> str:
        s = f"v{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            s += f"-{self.prerelease}"
        if self.build:
            s += f"+{self.build}"
        return s

    def __str__(self) -> str:
        return self.render()


class _Collecting(Enum):
    PRERELEASE = auto()
    BUILD = auto()


def _invalid(text: str, reason: str) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="invalid_version",
            message=f"invalid semver {text!r}: {reason}",
        )
    )


def _parse_number(segment: str) -> int | None:
    if not segment or not (segment.isascii() and segment.isdigit()):
        return None
    return int(segment)


def _split_tail(tail: str) -> tuple[str, str]:
    prerelease: list[str] = []
    build: list[str] = []
    state = _Collecting.PRERELEASE if tail[0] == "-" else _Collecting.BUILD

    for ch in tail[1:]:
        if ch == "-":
            state = _Collecting.PRERELEASE
            continue
        if ch == "+":
            state = _Collecting.BUILD
            continue
        if state is _Collecting.PRERELEASE:
            prerelease.append(ch)
        else:
            build.append(ch)

    return ("".join(prerelease), "".join(build))


def parse_version(text: str) -> Result[SemanticVersion, ReleaseError]:
    """Parse a version string, with or without the leading ``v``.

    Returns:
        Ok(SemanticVersion) on success
        Err(ReleaseError) with kind ``invalid_version`` otherwise
    """
    s = text[1:] if text.startswith("v") else text
    if not s:
        return _invalid(text, "empty version")

    parts = s.split(".", 2)
    if len(parts) != 3:
        return _invalid(text, "expected <major>.<minor>.<patch>")

    last = parts[2]
    digits = len(last) - len(last.lstrip("0123456789"))
    patch_text, tail = last[:digits], last[digits:]

    numbers: list[int] = []
    for name, segment in zip(("major", "minor", "patch"), (parts[0], parts[1], patch_text)):
        n = _parse_number(segment)
        if n is None:
            return _invalid(text, f"{name} is not a number")
        numbers.append(n)

    prerelease = ""
    build = ""
    if tail:
        if tail[0] not in "-+":
            return _invalid(text, "qualifiers must start with '-' or '+'")
        prerelease, build = _split_tail(tail)

    return Ok(
        SemanticVersion(
            major=numbers[0],
            minor=numbers[1],
            patch=numbers[2],
            prerelease=prerelease,
            build=build,
        )
    )
