"""Command: remove a host from the layout."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hostlayout.commands._base import HostCommand

if TYPE_CHECKING:
    from hostlayout.commands._context import AppContext


@click.command(
    cls=HostCommand,
    examples="""\
  hostlayout remove old-box
  hostlayout remove web-1 --except web""",
)
@click.argument("host")
@click.option(
    "--except",
    "keep_folder",
    default=None,
    help="Keep occurrences inside this folder (id or name).",
)
@click.pass_obj
def remove(app: AppContext, host: str, keep_folder: str | None) -> None:
    """Remove HOST from the layout and prune folders left empty.

    The host is not removed from the registry; the next sync with a
    registry that still lists it adds it back at the top level.
    """
    service = app.service()
    if keep_folder is None:
        result = service.remove_host(host)
    else:
        result = service.remove_host_except_folder(host, keep_folder)
    app.emit(result)
