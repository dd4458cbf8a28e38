"""Errors raised while saving a report.

Messages already carry the OS error code and text, so callers can show
them to the user as-is.
"""

from typing import Optional


class SaveError(Exception):
    """Base class for failures of the save-report operation."""

    def __init__(
        self,
        message: str,
        errno: Optional[int] = None,
        strerror: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errno = errno
        self.strerror = strerror

    @classmethod
    def from_os_error(cls, action: str, error: OSError) -> "SaveError":
        detail = error.strerror or str(error)
        code = f"[Errno {error.errno}] " if error.errno is not None else ""
        return cls(f"{action}: {code}{detail}", errno=error.errno, strerror=detail)


class DestinationUnavailable(SaveError):
    """No user directory could be determined."""


class DirectoryCreateFailed(SaveError):
    """The destination directory could not be created."""


class WriteFailed(SaveError):
    """The report file could not be written."""
