"""Platform abstraction layer."""

from .files import scratch_file
from .process import (
    ProcessError,
    run,
    run_interactive,
    run_to_file,
)

__all__ = [
    # files
    "scratch_file",
    # process
    "ProcessError",
    "run",
    "run_interactive",
    "run_to_file",
]
