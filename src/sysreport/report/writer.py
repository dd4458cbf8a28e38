"""Persist report text to the user's filesystem."""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from sysreport.config.models import ReportSettings

from .destination import DestinationResolver
from .errors import DirectoryCreateFailed, WriteFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedReport:
    path: Path
    message: str


def ensure_directory(directory: Path) -> None:
    """Create a directory and its parents if missing.

    Raises:
        DirectoryCreateFailed: If the directory cannot be created.
    """
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateFailed.from_os_error(
            f"Could not create directory {directory}", e
        ) from e


def write_report(path: Path, content: str, mode: Optional[int] = None) -> None:
    """Atomically replace ``path`` with ``content`` encoded as UTF-8.

    The text goes to a temporary file in the same directory which is then
    renamed over the target, so the target either holds the full new
    content or is left as it was. The temporary file never outlives the
    call.

    Args:
        path: Target file.
        content: Report text.
        mode: POSIX mode applied to the temporary file before the rename.

    Raises:
        WriteFailed: If the file cannot be written or the text cannot be
            encoded as UTF-8.
    """
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            if mode is not None and os.name == "posix":
                try:
                    os.fchmod(f.fileno(), mode)
                except OSError as e:
                    logger.debug(f"Could not set mode on {tmp_name}: {e}")
            f.write(content)
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as e:
        raise WriteFailed.from_os_error(f"Could not write {path}", e) from e
    except UnicodeError as e:
        raise WriteFailed(
            f"Could not write {path}: text cannot be encoded as UTF-8: {e}",
            strerror=str(e),
        ) from e
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass


def normalize_permissions(path: Path, mode: int = 0o644) -> bool:
    """Set a predictable mode on POSIX systems. Failures are only logged.

    Returns:
        True if the mode was applied.
    """
    if os.name != "posix":
        return False
    try:
        path.chmod(mode)
    except OSError as e:
        logger.warning(f"Could not set permissions on {path}: {e}")
        return False
    return True


class ReportWriter:
    """Resolve a destination and write the report file into it."""

    def __init__(
        self,
        settings: Optional[ReportSettings] = None,
        resolver: Optional[DestinationResolver] = None,
    ) -> None:
        self.settings = settings or ReportSettings()
        self.resolver = resolver or DestinationResolver()

    def destination(self) -> Path:
        if self.settings.output_dir:
            return Path(self.settings.output_dir).expanduser().absolute()
        return self.resolver.resolve()

    def save(self, content: str) -> SavedReport:
        """Write ``content`` to the canonical report file.

        Raises:
            DestinationUnavailable: No user directory could be found.
            DirectoryCreateFailed: The directory could not be created.
            WriteFailed: The file could not be written.
        """
        directory = self.destination()
        ensure_directory(directory)

        path = directory / self.settings.filename
        write_report(path, content, self.settings.file_mode)
        normalize_permissions(path, self.settings.file_mode)

        logger.info(f"Report written to {path}")
        return SavedReport(path=path, message=f"Report saved to: {path}")


def save_report(
    content: str,
    settings: Optional[ReportSettings] = None,
    resolver: Optional[DestinationResolver] = None,
) -> SavedReport:
    """Save report text to Desktop, Documents or home, in that order."""
    return ReportWriter(settings, resolver).save(content)
