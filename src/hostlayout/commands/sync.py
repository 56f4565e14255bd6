"""Command: reconcile the layout with the host registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hostlayout.commands._base import HostCommand

if TYPE_CHECKING:
    from hostlayout.commands._context import AppContext


@click.command(
    cls=HostCommand,
    examples="""\
  hostlayout --hosts-file hosts.txt sync
  hostlayout -H web -H db --json sync""",
)
@click.pass_obj
def sync(app: AppContext) -> None:
    """Add new hosts at the top level, drop vanished ones, prune empty folders."""
    app.emit(app.service().sync())
