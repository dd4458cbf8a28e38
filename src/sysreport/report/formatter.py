"""Plain-text system report generation."""

from datetime import datetime

from sysreport.hardware.inventory import SystemInfo

RULE = "=" * 60
THIN_RULE = "-" * 60


def _section(lines: list[str], title: str) -> None:
    lines.append("")
    lines.append(f"[ {title} ]")
    lines.append(THIN_RULE)


def render_report(info: SystemInfo, generated_at: datetime | None = None) -> str:
    """Render a SystemInfo as the text saved by ``sysreport save``.

    Args:
        info: Inventory to render.
        generated_at: Timestamp for the header; now if omitted.

    Returns:
        Report text, without a trailing newline.
    """
    generated_at = generated_at or datetime.now()

    lines = [
        RULE,
        "    HARDWARE DIAGNOSTIC REPORT",
        RULE,
        f"Issued: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}",
        THIN_RULE,
    ]

    _section(lines, "OPERATING SYSTEM")
    lines.append(f"Installed OS:      {info.os_name}")
    lines.append(f"Architecture:      {info.architecture}")

    _section(lines, "MOTHERBOARD")
    lines.append(f"Vendor/Model:      {info.motherboard}")
    lines.append(f"BIOS version:      {info.bios}")

    _section(lines, "PROCESSOR (CPU)")
    lines.append(f"Model:             {info.cpu_model or 'N/A'}")
    if info.cpu_freq_mhz:
        lines.append(f"Frequency:         {info.cpu_freq_mhz} MHz")

    _section(lines, "MEMORY (RAM)")
    lines.append(f"Total capacity:    {info.ram_total_gb:.2f} GB")
    # Speed-bearing descriptions get a different label
    if "MHz" in info.ram_type or "MT/s" in info.ram_type:
        lines.append(f"Type/Speed:        {info.ram_type}")
    else:
        lines.append(f"Memory type:       {info.ram_type}")

    _section(lines, "STORAGE")
    if info.disks:
        for disk in info.disks:
            lines.append(
                f"Mount point: {disk.mount_point:<5} | "
                f"Name: {(disk.name or 'Disk'):<15} | "
                f"Total: {disk.total_gb} GB"
            )
    else:
        lines.append("No disks detected")

    lines.append("")
    lines.append(RULE)
    lines.append("    DIAGNOSTIC STATUS: COMPLETED")
    lines.append(RULE)
    return "\n".join(lines)
