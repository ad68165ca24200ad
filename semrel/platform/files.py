"""Filesystem helpers."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

__all__ = ["scratch_file"]


@contextmanager
def scratch_file(
    prefix: str,
    content: str = "",
    *,
    encoding: str = "utf-8",
    errors: str = "surrogateescape",
) -> Iterator[Path]:
    """Create a private temp file holding ``content`` and delete it on exit.

    Surrogate escapes in ``content`` are written back as the original bytes.
    The file is closed before it is yielded so other processes (editors, git)
    can open it by path. Removal happens on every exit path.

    Raises:
        OSError: If the file cannot be created or written.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=prefix)
    path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, errors=errors, newline="") as handle:
            handle.write(content)
        yield path
    finally:
        path.unlink(missing_ok=True)
