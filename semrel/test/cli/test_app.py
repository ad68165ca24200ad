from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

import semrel.cli.app as cli_app
from semrel import __version__
from semrel.core.config import Config
from semrel.core.result import Err, Ok, Result
from semrel.output.console import ConsoleProtocol
from semrel.release.errors import ReleaseError
from semrel.release.model import ReleaseArtifact, ReleaseRequest
from semrel.release.semver import SemanticVersion

runner = CliRunner()


class _FakePipeline:
    def __init__(self, result: Result[ReleaseArtifact, ReleaseError]) -> None:
        self.result = result
        self.requests: list[ReleaseRequest] = []

    def run(self, request: ReleaseRequest) -> Result[ReleaseArtifact, ReleaseError]:
        self.requests.append(request)
        return self.result


def _install(
    monkeypatch: pytest.MonkeyPatch,
    result: Result[ReleaseArtifact, ReleaseError],
) -> tuple[_FakePipeline, dict[str, object]]:
    fake = _FakePipeline(result)
    seen: dict[str, object] = {}

    def fake_build_pipeline(
        *,
        root: Path,
        config: Config,
        editor: str | None,
        console: ConsoleProtocol,
    ) -> _FakePipeline:
        seen["root"] = root
        seen["config"] = config
        seen["editor"] = editor
        return fake

    monkeypatch.setattr(cli_app, "build_pipeline", fake_build_pipeline)
    return fake, seen


def _artifact(tmp_path: Path, tag: str) -> ReleaseArtifact:
    return ReleaseArtifact(
        version=SemanticVersion(1, 0, 0, prerelease="rc1"),
        tag=tag,
        message="notes\n",
        archive=tmp_path / f"{tag}.tar.gz",
    )


def test_prints_final_tag(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EDITOR", "vim")
    fake, seen = _install(monkeypatch, Ok(_artifact(tmp_path, "v1.0.0-rc1")))

    result = runner.invoke(cli_app.app, ["--info", "-C", str(tmp_path), "major", "rc1"])

    assert result.exit_code == 0
    assert result.stdout.strip() == "v1.0.0-rc1"
    assert fake.requests == [
        ReleaseRequest(bump="major", include_build_metadata=True, prerelease="rc1")
    ]
    assert seen["root"] == tmp_path.resolve()
    assert seen["editor"] == "vim"


def test_config_file_editor(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EDITOR", raising=False)
    (tmp_path / ".semrel.toml").write_text('[editor]\ncommand = "nano"\n', encoding="utf-8")
    _, seen = _install(monkeypatch, Ok(_artifact(tmp_path, "v0.0.1")))

    result = runner.invoke(cli_app.app, ["-C", str(tmp_path), "patch"])

    assert result.exit_code == 0
    assert seen["editor"] == "nano"


def test_missing_bump_prints_usage(monkeypatch: pytest.MonkeyPatch) -> None:
    fake, _ = _install(monkeypatch, Err(ReleaseError(kind="tool_failed", message="unused")))

    result = runner.invoke(cli_app.app, [])

    assert result.exit_code == 1
    assert "usage: semrel" in result.stdout
    assert fake.requests == []


def test_unknown_bump(monkeypatch: pytest.MonkeyPatch) -> None:
    fake, _ = _install(monkeypatch, Err(ReleaseError(kind="tool_failed", message="unused")))

    result = runner.invoke(cli_app.app, ["huge"])

    assert result.exit_code == 1
    assert 'semrel: unknown release version "huge"' in result.output
    assert fake.requests == []


def test_pipeline_error_is_reported(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _install(monkeypatch, Err(ReleaseError(kind="editor_missing", message="EDITOR not set")))

    result = runner.invoke(cli_app.app, ["-C", str(tmp_path), "-q", "patch"])

    assert result.exit_code == 1
    assert "semrel: EDITOR not set" in result.output


def test_broken_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / ".semrel.toml").write_text("[editor\n", encoding="utf-8")
    fake, _ = _install(monkeypatch, Ok(_artifact(tmp_path, "v0.0.1")))

    result = runner.invoke(cli_app.app, ["-C", str(tmp_path), "patch"])

    assert result.exit_code == 1
    assert "Invalid TOML" in result.output
    assert fake.requests == []


def test_version_flag() -> None:
    result = runner.invoke(cli_app.app, ["--version"])

    assert result.exit_code == 0
    assert result.stdout.strip() == __version__


def test_quiet_still_reports_hint(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _install(
        monkeypatch,
        Err(
            ReleaseError(
                kind="editor_missing",
                message="EDITOR not set",
                hint="export EDITOR or set [editor] command in .semrel.toml",
            )
        ),
    )

    result = runner.invoke(cli_app.app, ["-C", str(tmp_path), "-q", "patch"])

    assert result.exit_code == 1
    assert "hint: export EDITOR" in result.output
    assert "semrel: EDITOR not set" in result.output
