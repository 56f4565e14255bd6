"""Command: drop one host onto another."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hostlayout.commands._base import HostCommand

if TYPE_CHECKING:
    from hostlayout.commands._context import AppContext


@click.command(
    cls=HostCommand,
    examples="""\
  hostlayout group web-2 web-1
  hostlayout group db-replica db --in production""",
)
@click.argument("source")
@click.argument("target")
@click.option(
    "--in",
    "parent_folder",
    default=None,
    help="Folder (id or name) where TARGET is shown; groups inside it.",
)
@click.pass_obj
def group(app: AppContext, source: str, target: str, parent_folder: str | None) -> None:
    """Drop host SOURCE onto host TARGET, creating a group folder if needed."""
    service = app.service()
    if parent_folder is None:
        result = service.drop_onto_server(source, target)
    else:
        result = service.drop_onto_server_in_folder(source, target, parent_folder)
    app.emit(result)
