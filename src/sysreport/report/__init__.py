"""Report rendering and persistence."""

from .destination import DestinationResolver
from .errors import DestinationUnavailable, DirectoryCreateFailed, SaveError, WriteFailed
from .formatter import render_report
from .writer import ReportWriter, SavedReport, save_report

__all__ = [
    "DestinationResolver",
    "DestinationUnavailable",
    "DirectoryCreateFailed",
    "SaveError",
    "WriteFailed",
    "render_report",
    "ReportWriter",
    "SavedReport",
    "save_report",
]
