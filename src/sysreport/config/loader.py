"""YAML configuration file loading with Pydantic validation."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ReportSettings


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""


def default_config_path() -> Path:
    return Path.home() / ".sysreport" / "config.yaml"


def load_yaml(path: Path) -> dict:
    """Load a YAML file and return its contents as a dict.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed YAML contents.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}") from None
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping at the top of {path}")
    return data


def load_settings(path: Path | None = None) -> ReportSettings:
    """Load report settings.

    Args:
        path: Explicit config file. When None, the default location is
            used if it exists, otherwise defaults are returned.

    Raises:
        ConfigError: If the file is invalid, or an explicit path is missing.
    """
    if path is None:
        try:
            path = default_config_path()
        except RuntimeError:
            return ReportSettings()
        if not path.is_file():
            return ReportSettings()

    data = load_yaml(path)
    try:
        return ReportSettings(**data)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e
