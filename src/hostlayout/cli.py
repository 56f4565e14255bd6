"""Root CLI group for hostlayout with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from hostlayout import __version__
from hostlayout.commands import register_commands
from hostlayout.commands._base import HostGroup
from hostlayout.commands._context import AppContext
from hostlayout.config.settings import HostLayoutSettings


@click.group(cls=HostGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="hostlayout")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Base configuration directory (default: $XDG_CONFIG_HOME or ~/.config).",
)
@click.option(
    "-H",
    "--host",
    "hosts",
    multiple=True,
    help="Canonical host name (repeatable).",
)
@click.option(
    "--hosts-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="File listing canonical hosts, one per line.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    config_dir: Path | None,
    hosts: tuple[str, ...],
    hosts_file: Path | None,
) -> None:
    """hostlayout — organize SSH hosts into nested folders."""
    settings = HostLayoutSettings.from_cli(
        config_path=config_path,
        config_dir=config_dir,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        hosts=hosts or None,
        hosts_file=hosts_file,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
