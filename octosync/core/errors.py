"""Exit codes for the octosync CLI.

Each fatal failure kind maps to a stable process exit status:
- 0: Success
- 1: User error (bad arguments)
- 2: Environment error (missing token, invalid config file)
- 4: Network error (listing the organization failed)
- 5: I/O error (working directory unreadable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values must stay stable for scripts."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
