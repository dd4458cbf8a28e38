"""Platform-specific board and memory probes.

Board identity and memory type have no portable API, so each platform
gets its own PlatformProbes variant. The variant is picked once via
select_platform_probes() and receives a CommandRunner, which lets tests
substitute canned command output for real processes.
"""

import logging
import platform
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from .commands import DEFAULT_TIMEOUT_S, CommandRunner, SubprocessRunner
from .placeholders import Degradation, DegradeReason, Placeholder, ProbeResult

logger = logging.getLogger(__name__)

# SMBIOS type 17 "Memory Type" codes (Win32_PhysicalMemory.SMBIOSMemoryType)
MEMORY_TYPE_CODES = {
    20: "DDR",
    21: "DDR2",
    22: "DDR2 FB-DIMM",
    24: "DDR3",
    26: "DDR4",
    27: "LPDDR",
    28: "LPDDR2",
    29: "LPDDR3",
    30: "LPDDR4",
    34: "DDR5",
    35: "LPDDR5",
}

DMI_ID_DIR = "class/dmi/id"
EDAC_DIMM_TYPE = "devices/system/edac/mc/mc0/dimm0/dimm_mem_type"

_DDR_PATTERN = re.compile(r"(?:LP)?DDR\d*")


@dataclass(frozen=True)
class BoardInfo:
    vendor: str
    model: str
    bios: str
    degraded: Tuple[Degradation, ...] = field(default_factory=tuple)

    @property
    def motherboard(self) -> str:
        return f"{self.vendor} {self.model}"


def memory_type_name(code: Optional[int]) -> str:
    """Map an SMBIOS memory type code to a name, "DDR" when unknown."""
    if code is None:
        return Placeholder.GENERIC_DDR.value
    return MEMORY_TYPE_CODES.get(code, Placeholder.GENERIC_DDR.value)


def speed_is_undetected(speed: Optional[str]) -> bool:
    """True for an empty, zero or non-numeric speed such as "Unknown"."""
    if not speed:
        return True
    tokens = speed.split()
    if not tokens:
        return True
    try:
        return int(tokens[0]) == 0
    except ValueError:
        return True


def format_ram_type(code: Optional[int], speed: Optional[str]) -> str:
    """Format a memory type code and speed as e.g. "DDR4 @ 3200 MHz".

    A missing or zero speed is reported as undetected, regardless of the
    code, because firmware reporting 0 usually means it never filled the
    field in.
    """
    if speed_is_undetected(speed):
        return Placeholder.RAM_UNDETECTED.value
    return f"{memory_type_name(code)} @ {speed.strip()}"


def _build_ram_result(code: Optional[int], speed: Optional[str]) -> ProbeResult:
    value = format_ram_type(code, speed)
    if value == Placeholder.RAM_UNDETECTED.value:
        return ProbeResult(value, DegradeReason.UNDETECTED_SPEED, f"speed={speed!r}")
    return ProbeResult(value)


class PlatformProbes(ABC):
    """Board identity and memory type queries for one platform family."""

    name = "unknown"

    def __init__(self, runner: Optional[CommandRunner] = None) -> None:
        self.runner = runner or SubprocessRunner()

    @abstractmethod
    def board_info(self) -> BoardInfo:
        """Return motherboard vendor, model and BIOS version. Never raises."""

    @abstractmethod
    def ram_type(self) -> ProbeResult:
        """Return a non-empty memory type description. Never raises."""


class PosixProbes(PlatformProbes):
    """Linux-style probes: DMI sysfs files, EDAC sysfs, dmidecode."""

    name = "posix"

    def __init__(
        self,
        runner: Optional[CommandRunner] = None,
        sysfs_root: Path = Path("/sys"),
    ) -> None:
        super().__init__(runner)
        self.sysfs_root = Path(sysfs_root)

    def read_sys_file(self, relative: str) -> ProbeResult:
        """Read one sysfs text file, "N/A" on any failure."""
        path = self.sysfs_root / relative
        try:
            content = path.read_text(encoding="utf-8", errors="replace").strip()
        except FileNotFoundError:
            return ProbeResult.fallback(
                Placeholder.NOT_AVAILABLE, DegradeReason.MISSING_SOURCE, str(path)
            )
        except OSError as e:
            logger.debug(f"Could not read {path}: {e}")
            return ProbeResult.fallback(
                Placeholder.NOT_AVAILABLE, DegradeReason.READ_ERROR, str(e)
            )
        if not content:
            return ProbeResult.fallback(
                Placeholder.NOT_AVAILABLE, DegradeReason.EMPTY_OUTPUT, str(path)
            )
        return ProbeResult(content)

    def board_info(self) -> BoardInfo:
        vendor = self.read_sys_file(f"{DMI_ID_DIR}/board_vendor")
        model = self.read_sys_file(f"{DMI_ID_DIR}/board_name")
        bios = self.read_sys_file(f"{DMI_ID_DIR}/bios_version")

        degraded = tuple(
            d
            for d in (
                vendor.as_degradation("motherboard.vendor"),
                model.as_degradation("motherboard.model"),
                bios.as_degradation("bios"),
            )
            if d is not None
        )
        return BoardInfo(
            vendor=vendor.value, model=model.value, bios=bios.value, degraded=degraded
        )

    def ram_type(self) -> ProbeResult:
        from_sysfs = self._ram_type_from_edac()
        if from_sysfs is not None:
            return from_sysfs
        return self._ram_type_from_dmidecode()

    def _ram_type_from_edac(self) -> Optional[ProbeResult]:
        scalar = self.read_sys_file(EDAC_DIMM_TYPE)
        if scalar.degraded:
            return None
        match = _DDR_PATTERN.search(scalar.value)
        if not match:
            logger.debug(f"Unrecognized EDAC memory type: {scalar.value!r}")
            return None
        return ProbeResult(match.group(0))

    def _ram_type_from_dmidecode(self) -> ProbeResult:
        # Unprivileged; fails quietly when not run as root
        result = self.runner.run(["dmidecode", "-t", "17"])
        if not result.ok:
            logger.debug(f"dmidecode failed ({result.returncode}): {result.stderr.strip()}")
            return ProbeResult.fallback(
                Placeholder.RAM_GUESS,
                DegradeReason.COMMAND_FAILED,
                result.stderr.strip(),
            )

        mem_type, speed = parse_dmidecode_memory(result.stdout)
        if mem_type is None and speed is None:
            return ProbeResult.fallback(
                Placeholder.RAM_PROBABLE, DegradeReason.EMPTY_OUTPUT
            )
        if speed is None:
            return ProbeResult(mem_type, DegradeReason.UNDETECTED_SPEED)
        return ProbeResult(f"{mem_type or Placeholder.GENERIC_DDR.value} @ {speed}")


def parse_dmidecode_memory(output: str) -> Tuple[Optional[str], Optional[str]]:
    """Pull the first DDR type and first numeric speed out of dmidecode output.

    Returns:
        (type, speed) where either may be None, e.g. ("DDR4", "3200 MT/s").
    """
    mem_type = None
    speed = None
    for line in output.splitlines():
        line = line.strip()
        if mem_type is None and line.startswith("Type:") and "DDR" in line:
            mem_type = line.split(":", 1)[1].strip()
        elif speed is None and line.startswith("Speed:"):
            fields = line.split()
            if len(fields) >= 2 and not speed_is_undetected(fields[1]):
                speed = " ".join(fields[1:])
        if mem_type is not None and speed is not None:
            break
    return mem_type, speed


class WindowsProbes(PlatformProbes):
    """Windows probes backed by PowerShell CIM queries."""

    name = "windows"

    BOARD_QUERIES = {
        "motherboard.vendor": (
            "(Get-CimInstance -ClassName Win32_BaseBoard).Manufacturer",
            Placeholder.GENERIC_VENDOR,
        ),
        "motherboard.model": (
            "(Get-CimInstance -ClassName Win32_BaseBoard).Product",
            Placeholder.GENERIC_MODEL,
        ),
        "bios": (
            "(Get-CimInstance -ClassName Win32_BIOS).SMBIOSBIOSVersion",
            Placeholder.NOT_AVAILABLE,
        ),
    }

    # One round trip for speed and both type codes of the first module
    RAM_QUERY = (
        "Get-CimInstance -ClassName Win32_PhysicalMemory | Select-Object -First 1 | "
        "ForEach-Object { '{0},{1},{2}' -f $_.ConfiguredClockSpeed, "
        "$_.SMBIOSMemoryType, $_.MemoryType }"
    )

    def powershell(self, command: str) -> ProbeResult:
        """Run one PowerShell command; the ProbeResult has no fallback value set."""
        result = self.runner.run(
            ["powershell", "-NoProfile", "-NonInteractive", "-Command", command]
        )
        if not result.ok:
            return ProbeResult("", DegradeReason.COMMAND_FAILED, result.stderr.strip())
        output = result.stdout.strip()
        if not output:
            return ProbeResult("", DegradeReason.EMPTY_OUTPUT)
        return ProbeResult(output)

    def board_info(self) -> BoardInfo:
        values = {}
        degraded = []
        for field_name, (query, default) in self.BOARD_QUERIES.items():
            probed = self.powershell(query)
            if probed.degraded:
                logger.debug(f"{field_name} query degraded: {probed.reason.value}")
                values[field_name] = default.value
                degraded.append(probed.as_degradation(field_name))
            else:
                values[field_name] = probed.value

        return BoardInfo(
            vendor=values["motherboard.vendor"],
            model=values["motherboard.model"],
            bios=values["bios"],
            degraded=tuple(degraded),
        )

    def ram_type(self) -> ProbeResult:
        probed = self.powershell(self.RAM_QUERY)
        if probed.reason == DegradeReason.COMMAND_FAILED:
            return ProbeResult.fallback(
                Placeholder.RAM_GUESS, probed.reason, probed.detail
            )
        if probed.degraded:
            return ProbeResult.fallback(
                Placeholder.RAM_UNDETECTED, probed.reason, probed.detail
            )

        speed, code = parse_cim_memory(probed.value)
        if speed is None:
            return ProbeResult.fallback(
                Placeholder.RAM_UNDETECTED,
                DegradeReason.MALFORMED_OUTPUT,
                probed.value,
            )
        return _build_ram_result(code, f"{speed} MHz")


def parse_cim_memory(output: str) -> Tuple[Optional[int], Optional[int]]:
    """Parse "speed,smbios_type,memory_type" from the Windows RAM query.

    Returns:
        (speed_mhz, type_code). The SMBIOS code wins over the legacy
        MemoryType code unless it is 0 (unknown). speed_mhz is None when
        the line cannot be parsed.
    """
    line = output.strip().splitlines()[0] if output.strip() else ""
    parts = [p.strip() for p in line.split(",")]
    try:
        speed = int(parts[0])
    except (IndexError, ValueError):
        return None, None

    codes = []
    for part in parts[1:3]:
        try:
            codes.append(int(part))
        except ValueError:
            codes.append(0)
    code = next((c for c in codes if c), None)
    return speed, code


def select_platform_probes(
    system: Optional[str] = None,
    runner: Optional[CommandRunner] = None,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> PlatformProbes:
    """Pick the probes variant for this host.

    Args:
        system: platform.system() value; detected when None.
        runner: CommandRunner to use; a SubprocessRunner when None.
        timeout: Timeout for the default runner, in seconds.
    """
    system = system or platform.system()
    runner = runner or SubprocessRunner(timeout=timeout)
    if system == "Windows":
        return WindowsProbes(runner)
    return PosixProbes(runner)
