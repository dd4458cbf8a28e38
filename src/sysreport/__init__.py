"""sysreport - local hardware inventory and report saving."""

__version__ = "0.3.0"

from .hardware.inventory import DiskInfo, SystemInfo, get_system_info  # noqa: E402
from .report.errors import (  # noqa: E402
    DestinationUnavailable,
    DirectoryCreateFailed,
    SaveError,
    WriteFailed,
)
from .report.formatter import render_report  # noqa: E402
from .report.writer import SavedReport, save_report  # noqa: E402

__all__ = [
    "__version__",
    "DiskInfo",
    "SystemInfo",
    "get_system_info",
    "SaveError",
    "DestinationUnavailable",
    "DirectoryCreateFailed",
    "WriteFailed",
    "SavedReport",
    "save_report",
    "render_report",
]
