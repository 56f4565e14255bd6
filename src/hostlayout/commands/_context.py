"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. Resolves the canonical host set, builds the
LayoutService, and centralizes result emission (stdout/stderr routing
and exit codes).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from hostlayout.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from hostlayout.config.settings import HostLayoutSettings
    from hostlayout.infrastructure.store import LayoutStore
    from hostlayout.services.layout import LayoutService
    from hostlayout.services.result import ServiceResult

logger = logging.getLogger(__name__)


def read_hosts_file(path: Path) -> list[str]:
    """Host names from *path*: one per line, blank lines and ``#`` comments skipped."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        msg = f"Cannot read hosts file {path}: {exc}"
        raise click.ClickException(msg) from exc
    names = []
    for line in lines:
        name = line.split("#", 1)[0].strip()
        if name:
            names.append(name)
    return names


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: HostLayoutSettings) -> None:
        self.settings = settings
        self._store: LayoutStore | None = None

        from hostlayout.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def store(self) -> LayoutStore:
        if self._store is None:
            from hostlayout.infrastructure.store import LayoutStore

            self._store = LayoutStore.from_settings(self.settings)
        return self._store

    def canonical_hosts(self) -> list[str]:
        """Hosts from ``--host`` and ``--hosts-file``.

        With neither given, the hosts already in the saved layout are used,
        so commands can run without a registry and never add or drop hosts.
        """
        names = list(self.settings.hosts)
        if self.settings.hosts_file is not None:
            names.extend(read_hosts_file(self.settings.hosts_file))
        if names or self.settings.hosts_file is not None:
            return names
        logger.debug("No host registry given; using hosts from %s", self.store.path)
        return self.store.read().server_names()

    def service(self) -> LayoutService:
        from hostlayout.services.layout import LayoutService

        return LayoutService(self.store, self.canonical_hosts(), on_change=self._log_change)

    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr outside JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = self.output_settings()
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    @staticmethod
    def _log_change(op: str, data: dict[str, Any]) -> None:
        logger.info("Layout changed by %s: %s", op, data)
