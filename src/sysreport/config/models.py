"""Pydantic models for sysreport configuration."""

from pydantic import BaseModel, Field, field_validator

DEFAULT_REPORT_FILENAME = "reporte_sistema.txt"


class ReportSettings(BaseModel):
    """Settings for gathering and saving a system report."""

    filename: str = DEFAULT_REPORT_FILENAME
    output_dir: str | None = None  # None = resolve Desktop/Documents/home
    command_timeout_s: float = Field(default=5.0, gt=0, le=60)
    file_mode: int = Field(default=0o644, ge=0, le=0o777)

    @field_validator("filename")
    @classmethod
    def _plain_filename(cls, value: str) -> str:
        value = value.strip()
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"filename must be a plain file name, got {value!r}")
        return value
