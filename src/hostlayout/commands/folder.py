"""Command group: folder queries and rename."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hostlayout.commands._base import HostGroup
from hostlayout.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from hostlayout.commands._context import AppContext


@click.group(
    cls=HostGroup,
    examples="""\
  hostlayout folder path backend
  hostlayout folder ls production
  hostlayout folder hosts production
  hostlayout folder rename "Group: web-1" web""",
)
def folder() -> None:
    """Inspect and rename folders."""


@folder.command()
@click.argument("key")
@click.argument("new_name")
@click.pass_obj
def rename(app: AppContext, key: str, new_name: str) -> None:
    """Rename the folder KEY (id or name) to NEW_NAME."""
    app.emit(app.service().rename_folder(key, new_name))


@folder.command()
@click.argument("name")
@click.pass_obj
def path(app: AppContext, name: str) -> None:
    """Show the folders leading to NAME, outermost first."""
    op = "folder_path"
    crumbs = app.service().folder_path(name)
    if not crumbs:
        app.emit(_not_found(op, name))
        return
    app.emit(ServiceResult(ok=True, op=op, data={"folder": name, "path": crumbs}))


@folder.command(name="ls")
@click.argument("name")
@click.pass_obj
def ls(app: AppContext, name: str) -> None:
    """List the items directly inside folder NAME."""
    from hostlayout.services.paths import folder_path, items_in_folder

    op = "items_in_folder"
    layout = app.service().layout()
    if not folder_path(layout, name):
        app.emit(_not_found(op, name))
        return
    items = [item.model_dump(exclude={"items"}) for item in items_in_folder(layout, name)]
    app.emit(ServiceResult(ok=True, op=op, data={"folder": name, "items": items}))


@folder.command()
@click.argument("name")
@click.pass_obj
def hosts(app: AppContext, name: str) -> None:
    """List every host under folder NAME, including subfolders."""
    from hostlayout.services.paths import folder_path, servers_in_folder

    op = "servers_in_folder"
    layout = app.service().layout()
    if not folder_path(layout, name):
        app.emit(_not_found(op, name))
        return
    names = servers_in_folder(layout, name)
    app.emit(ServiceResult(ok=True, op=op, data={"folder": name, "hosts": names}))


def _not_found(op: str, name: str) -> ServiceResult:
    return failure(op, "FOLDER_NOT_FOUND", f"Folder '{name}' not found", key=name)
