"""Process exit codes for the monover CLI."""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including "nothing to release")
    - 1: User error (bad flags, unknown project)
    - 2: Environment error (no workspace, invalid monover.toml)
    - 3: Release error (the release pipeline failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RELEASE_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
