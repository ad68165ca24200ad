from __future__ import annotations

import pytest

from semrel.platform.files import scratch_file


def test_scratch_file_holds_content_and_is_removed() -> None:
    with scratch_file("semrel-test-", "# preamble\n") as path:
        assert path.name.startswith("semrel-test-")
        assert path.read_text(encoding="utf-8") == "# preamble\n"

    assert not path.exists()


def test_scratch_file_removed_on_error() -> None:
    with pytest.raises(RuntimeError):
        with scratch_file("semrel-test-") as path:
            raise RuntimeError("boom")

    assert not path.exists()


def test_scratch_file_tolerates_early_delete() -> None:
    with scratch_file("semrel-test-") as path:
        path.unlink()

    assert not path.exists()
