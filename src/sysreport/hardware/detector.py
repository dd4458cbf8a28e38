"""Portable hardware detection functions with fallbacks."""

import logging
import os
import platform
from dataclasses import dataclass
from typing import Tuple

from .placeholders import DegradeReason, Placeholder, ProbeResult

logger = logging.getLogger(__name__)

BYTES_PER_GB = 1_073_741_824  # 2**30


@dataclass(frozen=True)
class CPUInfo:
    model: str
    freq_mhz: int


@dataclass(frozen=True)
class DiskInfo:
    name: str
    total_gb: int
    mount_point: str


def detect_os_name() -> ProbeResult:
    """Detect the OS display name.

    Linux reports the distribution name from os-release (e.g. "Fedora Linux"),
    other systems the platform.system() name.
    """
    system = platform.system()
    if system == "Linux":
        try:
            name = platform.freedesktop_os_release().get("NAME", "").strip()
            if name:
                return ProbeResult(name)
        except OSError as e:
            logger.debug(f"os-release not readable: {e}")

    if system:
        return ProbeResult(system)
    return ProbeResult.fallback(Placeholder.UNKNOWN_SYSTEM, DegradeReason.UNSUPPORTED)


def detect_architecture() -> ProbeResult:
    machine = platform.machine().strip()
    if machine:
        return ProbeResult(machine)
    return ProbeResult.fallback(Placeholder.NOT_AVAILABLE, DegradeReason.UNSUPPORTED)


def detect_cpu() -> CPUInfo:
    """Detect CPU brand and current frequency.

    An unavailable CPU entry gives an empty model and 0 MHz.
    """
    model = ""
    try:
        import cpuinfo

        model = (cpuinfo.get_cpu_info().get("brand_raw") or "").strip()
    except Exception as e:
        logger.debug(f"CPU brand detection failed: {e}")

    freq_mhz = 0
    try:
        import psutil

        freq = psutil.cpu_freq()
        if freq is not None and freq.current:
            freq_mhz = int(freq.current)
    except Exception as e:
        logger.debug(f"CPU frequency detection failed: {e}")

    return CPUInfo(model=model, freq_mhz=freq_mhz)


def detect_ram_total_gb() -> float:
    """Detect total physical RAM in GiB (bytes / 2**30)."""
    try:
        import psutil

        return psutil.virtual_memory().total / BYTES_PER_GB
    except Exception as e:
        logger.warning(f"RAM size detection failed: {e}")
        return 0.0


def _lossy_text(value: str) -> str:
    """Decode a device label, replacing bytes that are not UTF-8."""
    try:
        return os.fsencode(value).decode("utf-8", "replace")
    except (UnicodeError, TypeError):
        return value.encode("utf-8", "replace").decode("utf-8")


def _printable_mount_point(mount_point: str) -> str:
    # Undecodable path bytes come back as lone surrogates
    try:
        mount_point.encode("utf-8")
    except UnicodeEncodeError:
        return ""
    return mount_point


def detect_disks() -> Tuple[DiskInfo, ...]:
    """Enumerate mounted disks, skipping zero-capacity filesystems.

    Order follows the OS mount table.
    """
    try:
        import psutil

        partitions = psutil.disk_partitions(all=False)
    except Exception as e:
        logger.warning(f"Disk enumeration failed: {e}")
        return ()

    disks = []
    for part in partitions:
        try:
            total = psutil.disk_usage(part.mountpoint).total
        except OSError as e:
            logger.debug(f"Skipping {part.mountpoint!r}: {e}")
            continue
        if total <= 0:
            continue
        disks.append(
            DiskInfo(
                name=_lossy_text(part.device),
                total_gb=total // BYTES_PER_GB,
                mount_point=_printable_mount_point(part.mountpoint),
            )
        )
    return tuple(disks)
