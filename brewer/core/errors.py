"""Error codes for CLI exit status.

These values are used as process exit codes and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    - 0: Success
    - 1: User error (bad flags, missing metadata)
    - 2: Environment error (missing credentials, no tag at HEAD)
    - 3: Render error (formula template defect)
    - 4: Network error (GitHub API failure)
    - 5: I/O error (artifact unreadable, formula not writable)
    - 6: Conflict (remote formula changed during publish)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RENDER_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5
    CONFLICT = 6

    def __str__(self) -> str:
        """Return human-readable name."""
        return self.name.lower().replace("_", " ")
