"""sysreport CLI - Main entry point."""

import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sysreport import __version__

console = Console()
err_console = Console(stderr=True)


def _setup_logging(verbose: bool) -> None:
    """Configure root logging on stderr."""
    log_format = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if root_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(log_format))
    root_logger.addHandler(handler)


def _load_settings(ctx: click.Context):
    from sysreport.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(2)


def _collect(settings):
    from sysreport.hardware.inventory import get_system_info
    from sysreport.hardware.platforms import select_platform_probes

    probes = select_platform_probes(timeout=settings.command_timeout_s)
    return get_system_info(probes)


@click.group()
@click.version_option(version=__version__, prog_name="sysreport")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: ~/.sysreport/config.yaml)",
)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, config_path, verbose):
    """sysreport - Local hardware inventory and diagnostic reports."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the inventory as JSON")
@click.pass_context
def info(ctx, as_json):
    """Display hardware information for this system."""
    settings = _load_settings(ctx)
    system_info = _collect(settings)

    if as_json:
        click.echo(json.dumps(system_info.to_dict(), indent=2))
        return

    table = Table(title="System Information", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("OS", escape(system_info.os_name))
    table.add_row("Architecture", escape(system_info.architecture))
    table.add_row("Motherboard", escape(system_info.motherboard))
    table.add_row("BIOS", escape(system_info.bios))
    cpu = escape(system_info.cpu_model) or "[yellow]Not detected[/yellow]"
    if system_info.cpu_freq_mhz:
        cpu += f" ({system_info.cpu_freq_mhz} MHz)"
    table.add_row("CPU", cpu)
    table.add_row("RAM", f"{system_info.ram_total_gb:.2f} GB {escape(system_info.ram_type)}")
    for disk in system_info.disks:
        table.add_row("Disk", escape(f"{disk.mount_point or '?'}  {disk.total_gb} GB ({disk.name})"))
    console.print(table)

    if system_info.degraded:
        fields = ", ".join(d.field for d in system_info.degraded)
        console.print(f"[dim]Placeholders used for: {fields}[/dim]")


@cli.command()
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Save into this directory instead of Desktop/Documents/home",
)
@click.option("--filename", default=None, help="Report file name")
@click.pass_context
def save(ctx, output_dir, filename):
    """Generate a diagnostic report and save it as a text file."""
    from sysreport.report.errors import SaveError
    from sysreport.report.formatter import render_report
    from sysreport.report.writer import save_report

    settings = _load_settings(ctx)
    overrides = {}
    if output_dir is not None:
        overrides["output_dir"] = str(output_dir)
    if filename:
        overrides["filename"] = filename
    if overrides:
        try:
            settings = settings.model_validate({**settings.model_dump(), **overrides})
        except ValueError as e:
            err_console.print(f"[red]Invalid option: {escape(str(e))}[/red]")
            raise SystemExit(2)

    content = render_report(_collect(settings))
    try:
        saved = save_report(content, settings)
    except SaveError as e:
        err_console.print(f"[red]Error saving report: {escape(str(e))}[/red]")
        raise SystemExit(1)

    console.print(f"[bold green]{escape(saved.message)}[/bold green]")


if __name__ == "__main__":
    cli()
