"""Fallback values used when a probe cannot read real data."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Placeholder(str, Enum):
    """Every string a probe may substitute for missing data."""

    UNKNOWN_SYSTEM = "Unknown System"
    NOT_AVAILABLE = "N/A"
    GENERIC_VENDOR = "Generic"
    GENERIC_MODEL = "PC Windows"
    RAM_GUESS = "DDR4"
    RAM_PROBABLE = "DDR4 (Probable)"
    RAM_UNDETECTED = "DDR4 (speed not detected)"
    GENERIC_DDR = "DDR"

    def __str__(self) -> str:
        return self.value


class DegradeReason(str, Enum):
    """Why a field holds a placeholder instead of real data."""

    MISSING_SOURCE = "missing_source"
    READ_ERROR = "read_error"
    COMMAND_FAILED = "command_failed"
    EMPTY_OUTPUT = "empty_output"
    MALFORMED_OUTPUT = "malformed_output"
    UNDETECTED_SPEED = "undetected_speed"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Degradation:
    field: str
    reason: DegradeReason
    detail: str = ""


@dataclass(frozen=True)
class ProbeResult:
    """A probed value, plus the reason it degraded if it did."""

    value: str
    reason: Optional[DegradeReason] = None
    detail: str = ""

    @property
    def degraded(self) -> bool:
        return self.reason is not None

    @classmethod
    def fallback(
        cls, placeholder: Placeholder, reason: DegradeReason, detail: str = ""
    ) -> "ProbeResult":
        return cls(value=placeholder.value, reason=reason, detail=detail)

    def as_degradation(self, field: str) -> Optional[Degradation]:
        if self.reason is None:
            return None
        return Degradation(field=field, reason=self.reason, detail=self.detail)
