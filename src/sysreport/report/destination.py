"""Destination directory resolution for saved reports."""

import logging
import os
import platform
import shlex
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from .errors import DestinationUnavailable

logger = logging.getLogger(__name__)

DESKTOP_NAMES = {
    "Linux": ("Desktop", "Escritorio"),
}
DEFAULT_DESKTOP_NAMES = ("Desktop",)


def read_xdg_user_dirs(home: Path, environ: Mapping[str, str]) -> Dict[str, Path]:
    """Parse $XDG_CONFIG_HOME/user-dirs.dirs.

    Lines look like ``XDG_DESKTOP_DIR="$HOME/Escritorio"``. Entries that
    point at the home directory itself are dropped, following xdg-user-dirs.
    """
    config_home = environ.get("XDG_CONFIG_HOME") or str(home / ".config")
    path = Path(config_home) / "user-dirs.dirs"
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeError):
        return {}

    dirs = {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, raw = line.split("=", 1)
        try:
            parts = shlex.split(raw)
        except ValueError:
            logger.debug(f"Ignoring malformed user-dirs line: {line!r}")
            continue
        if not parts:
            continue
        value = parts[0]
        if value.startswith("$HOME"):
            value = str(home) + value[len("$HOME"):]
        elif not value.startswith("/"):
            continue
        resolved = Path(value)
        if resolved != home:
            dirs[key.strip()] = resolved
    return dirs


class DestinationResolver:
    """Find the directory a report should be saved to.

    Candidates are tried in order Desktop, Documents, home. The first
    existing one wins; the home directory is returned when neither of the
    others exists, even if it does not exist itself.
    """

    def __init__(
        self,
        system: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        home_provider: Optional[Callable[[], Path]] = None,
    ) -> None:
        self.system = system or platform.system()
        self.environ = environ if environ is not None else os.environ
        self.home_provider = home_provider or Path.home

    def home(self) -> Path:
        """Base directory for the current user, looked up on every call.

        Raises:
            DestinationUnavailable: If no home directory can be determined.
        """
        if self.system == "Windows":
            profile = self.environ.get("USERPROFILE", "").strip()
            if profile:
                return Path(profile)
        try:
            home = self.home_provider()
        except (RuntimeError, KeyError, OSError) as e:
            raise DestinationUnavailable(
                f"Could not determine the user's home directory: {e}"
            ) from e
        if not str(home) or str(home) == ".":
            raise DestinationUnavailable("Could not determine the user's home directory")
        return Path(home)

    def candidates(self) -> List[Path]:
        home = self.home()
        xdg: Dict[str, Path] = {}
        if self.system != "Windows":
            xdg = read_xdg_user_dirs(home, self.environ)

        result: List[Path] = []
        if "XDG_DESKTOP_DIR" in xdg:
            result.append(xdg["XDG_DESKTOP_DIR"])
        names = DESKTOP_NAMES.get(self.system, DEFAULT_DESKTOP_NAMES)
        result.extend(home / name for name in names)

        if "XDG_DOCUMENTS_DIR" in xdg:
            result.append(xdg["XDG_DOCUMENTS_DIR"])
        result.append(home / "Documents")

        deduped: List[Path] = []
        for path in result:
            if path not in deduped:
                deduped.append(path)
        return deduped

    def resolve(self) -> Path:
        """Return the destination directory as an absolute path."""
        for candidate in self.candidates():
            if candidate.is_dir():
                logger.debug(f"Report destination: {candidate}")
                return candidate.absolute()
        home = self.home()
        logger.debug(f"No Desktop or Documents directory, using {home}")
        return home.absolute()
