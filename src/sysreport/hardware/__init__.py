"""Hardware inventory probes."""

from .inventory import DiskInfo, SystemInfo, SystemInventory, get_system_info

__all__ = ["DiskInfo", "SystemInfo", "SystemInventory", "get_system_info"]
