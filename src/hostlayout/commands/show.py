"""Command: show the layout tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hostlayout.commands._base import HostCommand

if TYPE_CHECKING:
    from hostlayout.commands._context import AppContext


@click.command(
    cls=HostCommand,
    examples="""\
  hostlayout show
  hostlayout show --ids
  hostlayout -H web -H db --json show""",
)
@click.option("--ids", "show_ids", is_flag=True, help="Show folder ids next to names.")
@click.pass_obj
def show(app: AppContext, show_ids: bool) -> None:
    """Print the reconciled layout (not written back)."""
    from hostlayout.output.tree import render_layout

    layout = app.service().layout()
    if app.settings.json_output:
        click.echo(layout.model_dump_json(indent=2))
        return
    click.echo(render_layout(layout, show_ids=show_ids))
