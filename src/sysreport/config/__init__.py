"""Configuration loading for sysreport."""

from .loader import ConfigError, load_settings
from .models import DEFAULT_REPORT_FILENAME, ReportSettings

__all__ = ["ConfigError", "load_settings", "ReportSettings", "DEFAULT_REPORT_FILENAME"]
