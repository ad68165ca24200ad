"""Release orchestration.

A release run walks a fixed sequence of stages:

    start -> notes_collected -> version_resolved -> changelog_collected
          -> tag_message_assembled -> tagged -> archived -> done

Notes come first so that an aborted editor session never touches the
repository. Tagging and archiving come last. Nothing is retried and nothing
is rolled back: if the archive fails, the tag already exists and the run
still reports the failure.

Usage:
    pipeline = ReleasePipeline(repo=GitRepository(root), notes=NotesEditor(editor, cwd=root),
                               console=RichConsole())
    match pipeline.run(ReleaseRequest(bump="minor")):
        case Ok(artifact):
            print(artifact.tag)
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass, replace
from pathlib import Path

from semrel.core.result import Err, Ok, Result
from semrel.output.console import ConsoleProtocol
from semrel.platform.files import scratch_file
from semrel.release.contracts import NotesSource, VcsGateway
from semrel.release.errors import ReleaseError
from semrel.release.fsm import StepHandler, StepOutcome, advance, finish, run_state_machine
from semrel.release.model import (
    CHANGELOG_HEADER,
    ChangelogRange,
    ReleaseArtifact,
    ReleaseRequest,
    ReleaseStage,
)
from semrel.release.semver import SemanticVersion, parse_version

__all__ = ["PipelineState", "ReleasePipeline"]


@dataclass(frozen=True, slots=True)
class PipelineState:
    stage: ReleaseStage
    notes: str = ""
    version: SemanticVersion | None = None
    rev_range: ChangelogRange | None = None
    changelog_file: Path | None = None
    message_file: Path | None = None
    message: str = ""
    tag: str = ""
    archive: Path | None = None


def _io_failed(what: str, e: OSError) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="io_failed", message=f"{what}: {e}"))


def _missing(field_name: str) -> AssertionError:
    return AssertionError(f"pipeline state has no {field_name}")


class ReleasePipeline:
    """Turns a bump request into an annotated, archived tag.

    Attributes:
        last_stage: Last stage reached by the most recent ``run``.
    """

    def __init__(
        self,
        *,
        repo: VcsGateway,
        notes: NotesSource,
        console: ConsoleProtocol,
    ) -> None:
        self.repo = repo
        self.notes = notes
        self.console = console
        self.last_stage = ReleaseStage.START

    def run(self, request: ReleaseRequest) -> Result[ReleaseArtifact, ReleaseError]:
        self.last_stage = ReleaseStage.START

        with ExitStack() as scratch:
            handlers: dict[ReleaseStage, StepHandler[PipelineState]] = {
                ReleaseStage.START: self._collect_notes,
                ReleaseStage.NOTES_COLLECTED: lambda s: self._resolve_version(s, request),
                ReleaseStage.VERSION_RESOLVED: lambda s: self._collect_changelog(s, scratch),
                ReleaseStage.CHANGELOG_COLLECTED: lambda s: self._assemble_message(s, scratch),
                ReleaseStage.TAG_MESSAGE_ASSEMBLED: self._create_tag,
                ReleaseStage.TAGGED: self._create_archive,
                ReleaseStage.ARCHIVED: self._done,
            }

            result = run_state_machine(
                initial_state=PipelineState(stage=ReleaseStage.START),
                get_step=lambda s: s.stage,
                handlers=handlers,
                on_advance=self._record_stage,
            )

        if isinstance(result, Err):
            return result

        final = result.value
        if final.version is None or final.archive is None:
            raise _missing("artifact")
        return Ok(
            ReleaseArtifact(
                version=final.version,
                tag=final.tag,
                message=final.message,
                archive=final.archive,
            )
        )

    def _record_stage(self, state: PipelineState) -> None:
        self.last_stage = state.stage

    def _collect_notes(self, state: PipelineState) -> Result[StepOutcome[PipelineState], ReleaseError]:
        notes = self.notes.collect()
        if isinstance(notes, Err):
            return notes
        return Ok(advance(replace(state, stage=ReleaseStage.NOTES_COLLECTED, notes=notes.value)))

    def _resolve_version(
        self, state: PipelineState, request: ReleaseRequest
    ) -> Result[StepOutcome[PipelineState], ReleaseError]:
        previous = self.repo.describe_latest_tag()
        match previous:
            case Err(e) if e.kind == "tag_not_found":
                self.console.info("no previous tag, starting from v0.0.0")
                version = SemanticVersion()
                rev_range = ChangelogRange()
            case Err(e):
                return Err(e)
            case Ok(tag):
                parsed = parse_version(tag)
                if isinstance(parsed, Err):
                    return parsed
                self.console.info(f"previous tag: {tag}")
                version = parsed.value
                rev_range = ChangelogRange(previous_tag=tag)

        version.bump(request.bump)
        version.prerelease = request.prerelease

        if request.include_build_metadata:
            head = self.repo.short_head()
            if isinstance(head, Err):
                return head
            version.build = head.value

        return Ok(
            advance(
                replace(
                    state,
                    stage=ReleaseStage.VERSION_RESOLVED,
                    version=version,
                    rev_range=rev_range,
                )
            )
        )

    def _collect_changelog(
        self, state: PipelineState, scratch: ExitStack
    ) -> Result[StepOutcome[PipelineState], ReleaseError]:
        if state.rev_range is None:
            raise _missing("changelog range")

        self.console.info(f"collecting changelog for {state.rev_range}")
        try:
            path = scratch.enter_context(scratch_file("semrel-changelog-"))
            with path.open("w", encoding="utf-8", errors="surrogateescape") as dest:
                written = self.repo.shortlog(state.rev_range, dest)
        except OSError as e:
            return _io_failed("changelog file", e)

        if isinstance(written, Err):
            return written
        return Ok(
            advance(replace(state, stage=ReleaseStage.CHANGELOG_COLLECTED, changelog_file=path))
        )

    def _assemble_message(
        self, state: PipelineState, scratch: ExitStack
    ) -> Result[StepOutcome[PipelineState], ReleaseError]:
        if state.changelog_file is None:
            raise _missing("changelog file")

        try:
            changelog = state.changelog_file.read_text(encoding="utf-8", errors="surrogateescape")
            message = state.notes + CHANGELOG_HEADER + changelog
            path = scratch.enter_context(scratch_file("semrel-tag-", message))
        except OSError as e:
            return _io_failed("tag message file", e)

        return Ok(
            advance(
                replace(
                    state,
                    stage=ReleaseStage.TAG_MESSAGE_ASSEMBLED,
                    message_file=path,
                    message=message,
                )
            )
        )

    def _create_tag(self, state: PipelineState) -> Result[StepOutcome[PipelineState], ReleaseError]:
        if state.version is None or state.message_file is None:
            raise _missing("tag inputs")

        tag = state.version.render()
        self.console.info(f"creating tag {tag}")
        created = self.repo.create_annotated_tag(tag, state.message_file)
        if isinstance(created, Err):
            return created
        return Ok(advance(replace(state, stage=ReleaseStage.TAGGED, tag=tag)))

    def _create_archive(self, state: PipelineState) -> Result[StepOutcome[PipelineState], ReleaseError]:
        archive = self.repo.create_archive(state.tag)
        if isinstance(archive, Err):
            return archive
        self.console.success(f"archive written: {archive.value.name}")
        return Ok(advance(replace(state, stage=ReleaseStage.ARCHIVED, archive=archive.value)))

    def _done(self, state: PipelineState) -> Result[StepOutcome[PipelineState], ReleaseError]:
        return Ok(finish(replace(state, stage=ReleaseStage.DONE)))
