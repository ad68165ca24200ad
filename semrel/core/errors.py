"""Process exit codes.

semrel keeps the classic release-script convention: 0 on success and 1 for
any usage error or pipeline failure.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI.

    These values are used as process exit codes and should remain stable.
    """

    OK = 0
    FAILURE = 1
