"""Tests for SystemInfo assembly."""

from types import SimpleNamespace
from unittest.mock import patch

from sysreport.hardware.commands import CommandResult
from sysreport.hardware.detector import BYTES_PER_GB, DiskInfo
from sysreport.hardware.inventory import SystemInfo, get_system_info
from sysreport.hardware.placeholders import DegradeReason
from sysreport.hardware.platforms import PosixProbes, WindowsProbes


def _all_sources_broken():
    """Patch every portable data source to fail."""
    return [
        patch("cpuinfo.get_cpu_info", side_effect=Exception("no cpuid")),
        patch("psutil.cpu_freq", side_effect=OSError("no cpufreq")),
        patch("psutil.virtual_memory", side_effect=OSError("no meminfo")),
        patch("psutil.disk_partitions", side_effect=OSError("no mtab")),
        patch("sysreport.hardware.detector.platform.system", return_value=""),
        patch("sysreport.hardware.detector.platform.machine", return_value=""),
    ]


class TestTotalAbsorption:
    def _collect(self, probes) -> SystemInfo:
        patches = _all_sources_broken()
        for p in patches:
            p.start()
        try:
            return get_system_info(probes)
        finally:
            for p in patches:
                p.stop()

    def test_posix_everything_missing(self, sysfs, make_runner):
        info = self._collect(PosixProbes(make_runner(), sysfs_root=sysfs.root))

        assert info.os_name == "Unknown System"
        assert info.motherboard == "N/A N/A"
        assert info.bios == "N/A"
        assert info.cpu_model == ""
        assert info.cpu_freq_mhz == 0
        assert info.ram_total_gb == 0.0
        assert info.ram_type == "DDR4"
        assert info.disks == ()
        assert info.architecture == "N/A"

    def test_windows_everything_missing(self, make_runner):
        runner = make_runner(default=CommandResult(1, "", "Access denied"))
        info = self._collect(WindowsProbes(runner))

        assert info.motherboard == "Generic PC Windows"
        assert info.bios == "N/A"
        assert "DDR4" in info.ram_type
        assert len(runner.calls) == 4

    def test_malformed_output(self, make_runner):
        runner = make_runner(default=CommandResult(0, "\x00\x01 not what we asked for"))
        info = self._collect(WindowsProbes(runner))
        assert info.ram_type
        assert "DDR4" in info.ram_type
        assert info.degraded_fields()["ram_type"] == DegradeReason.MALFORMED_OUTPUT

    def test_degradations_name_their_reason(self, sysfs, make_runner):
        info = self._collect(PosixProbes(make_runner(), sysfs_root=sysfs.root))
        reasons = info.degraded_fields()
        assert reasons["bios"] == DegradeReason.MISSING_SOURCE
        assert reasons["ram_type"] == DegradeReason.COMMAND_FAILED
        assert reasons["os_name"] == DegradeReason.UNSUPPORTED
        assert "cpu_model" in reasons
        assert "ram_total_gb" in reasons


class TestAssembly:
    def test_real_values(self, sysfs, make_runner):
        sysfs("class/dmi/id/board_vendor", "ASRock\n")
        sysfs("class/dmi/id/board_name", "B450M Pro4\n")
        sysfs("class/dmi/id/bios_version", "P5.60\n")
        sysfs("devices/system/edac/mc/mc0/dimm0/dimm_mem_type", "Unbuffered-DDR4\n")

        partitions = [
            SimpleNamespace(device="/dev/sda2", mountpoint="/"),
            SimpleNamespace(device="tmpfs", mountpoint="/run/empty"),
        ]
        sizes = {"/": 250 * BYTES_PER_GB, "/run/empty": 0}

        with patch("cpuinfo.get_cpu_info", return_value={"brand_raw": "AMD Ryzen 5 3600"}), patch(
            "psutil.cpu_freq", return_value=SimpleNamespace(current=3600.0)
        ), patch(
            "psutil.virtual_memory", return_value=SimpleNamespace(total=16 * BYTES_PER_GB)
        ), patch("psutil.disk_partitions", return_value=partitions), patch(
            "psutil.disk_usage", side_effect=lambda mp: SimpleNamespace(total=sizes[mp])
        ):
            info = get_system_info(PosixProbes(make_runner(), sysfs_root=sysfs.root))

        assert info.motherboard == "ASRock B450M Pro4"
        assert info.bios == "P5.60"
        assert info.cpu_model == "AMD Ryzen 5 3600"
        assert info.cpu_freq_mhz == 3600
        assert info.ram_total_gb == 16.0
        assert info.ram_type == "DDR4"
        assert info.disks == (DiskInfo("/dev/sda2", 250, "/"),)
        assert info.degraded == ()

    def test_live_system(self):
        """Runs against the real host; every field must be populated."""
        info = get_system_info()
        assert isinstance(info, SystemInfo)
        assert info.os_name
        assert info.motherboard.strip()
        assert info.bios
        assert info.ram_type
        assert all(d.total_gb >= 0 for d in info.disks)

    def test_to_dict(self):
        info = SystemInfo(
            os_name="Windows",
            motherboard="Generic PC Windows",
            bios="N/A",
            cpu_model="Intel(R) Core(TM) i5-12400F",
            cpu_freq_mhz=2500,
            ram_total_gb=31.9,
            ram_type="DDR4 @ 3200 MHz",
            disks=(DiskInfo("C:\\", 931, "C:\\"),),
        )
        data = info.to_dict()
        assert data["disks"][0] == {"name": "C:\\", "total_gb": 931, "mount_point": "C:\\"}
        assert data["degraded"] == []
        assert data["architecture"] == "N/A"
