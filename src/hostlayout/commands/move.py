"""Command: move a host or folder into a folder."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hostlayout.commands._base import HostCommand

if TYPE_CHECKING:
    from hostlayout.commands._context import AppContext


@click.command(
    cls=HostCommand,
    examples="""\
  hostlayout move web-1 production
  hostlayout move staging production
  hostlayout --json move db 3f0c9a52-9b8e-4c1e-8d7a-0c5f4f1b2e6d""",
)
@click.argument("key")
@click.argument("folder")
@click.pass_obj
def move(app: AppContext, key: str, folder: str) -> None:
    """Move host or folder KEY into FOLDER (id or name)."""
    app.emit(app.service().drop_item_onto_folder(key, folder))
