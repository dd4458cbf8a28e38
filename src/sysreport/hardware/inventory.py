"""System inventory assembly."""

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple

from .detector import (
    CPUInfo,
    DiskInfo,
    detect_architecture,
    detect_cpu,
    detect_disks,
    detect_os_name,
    detect_ram_total_gb,
)
from .placeholders import Degradation, DegradeReason, Placeholder
from .platforms import PlatformProbes, select_platform_probes

logger = logging.getLogger(__name__)

__all__ = ["DiskInfo", "SystemInfo", "SystemInventory", "get_system_info"]


@dataclass(frozen=True)
class SystemInfo:
    """Complete system hardware information.

    Every field always holds real data or a placeholder; ``degraded``
    lists the fields that fell back and why.
    """

    os_name: str
    motherboard: str
    bios: str
    cpu_model: str
    cpu_freq_mhz: int
    ram_total_gb: float
    ram_type: str
    disks: Tuple[DiskInfo, ...]
    architecture: str = Placeholder.NOT_AVAILABLE.value
    degraded: Tuple[Degradation, ...] = field(default_factory=tuple)

    def degraded_fields(self) -> Dict[str, DegradeReason]:
        return {d.field: d.reason for d in self.degraded}

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["degraded"] = [
            {"field": d.field, "reason": d.reason.value, "detail": d.detail}
            for d in self.degraded
        ]
        return data


class SystemInventory:
    """Query every probe once and merge the results into a SystemInfo."""

    def __init__(self, probes: Optional[PlatformProbes] = None) -> None:
        self.probes = probes or select_platform_probes()

    def collect(self) -> SystemInfo:
        degraded = []

        board = self.probes.board_info()
        degraded.extend(board.degraded)

        ram_type = self.probes.ram_type()
        if ram_type.degraded:
            degraded.append(ram_type.as_degradation("ram_type"))
        ram_type_value = ram_type.value or Placeholder.RAM_GUESS.value

        cpu: CPUInfo = detect_cpu()
        if not cpu.model:
            degraded.append(Degradation("cpu_model", DegradeReason.MISSING_SOURCE))
        if not cpu.freq_mhz:
            degraded.append(Degradation("cpu_freq_mhz", DegradeReason.MISSING_SOURCE))

        ram_total_gb = detect_ram_total_gb()
        if not ram_total_gb:
            degraded.append(Degradation("ram_total_gb", DegradeReason.MISSING_SOURCE))

        os_name = detect_os_name()
        if os_name.degraded:
            degraded.append(os_name.as_degradation("os_name"))

        architecture = detect_architecture()
        if architecture.degraded:
            degraded.append(architecture.as_degradation("architecture"))

        if degraded:
            logger.debug(
                "Degraded fields: "
                + ", ".join(f"{d.field} ({d.reason.value})" for d in degraded)
            )

        return SystemInfo(
            os_name=os_name.value,
            motherboard=board.motherboard,
            bios=board.bios,
            cpu_model=cpu.model,
            cpu_freq_mhz=cpu.freq_mhz,
            ram_total_gb=ram_total_gb,
            ram_type=ram_type_value,
            disks=detect_disks(),
            architecture=architecture.value,
            degraded=tuple(degraded),
        )


def get_system_info(probes: Optional[PlatformProbes] = None) -> SystemInfo:
    """Produce a fresh SystemInfo for this machine. Never raises."""
    return SystemInventory(probes).collect()
