"""Subcommand modules for hostlayout.

register_commands() imports lazily so ``hostlayout --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the folder group and the standalone commands on the root group."""
    from hostlayout.commands.folder import folder

    cli.add_command(folder)

    from hostlayout.commands.group import group
    from hostlayout.commands.move import move
    from hostlayout.commands.remove import remove
    from hostlayout.commands.show import show
    from hostlayout.commands.sync import sync

    cli.add_command(show)
    cli.add_command(sync)
    cli.add_command(move)
    cli.add_command(group)
    cli.add_command(remove)
