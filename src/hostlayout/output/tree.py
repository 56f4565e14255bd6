"""Rich tree rendering of a layout."""

from __future__ import annotations

from rich.markup import escape
from rich.tree import Tree

from hostlayout.domain.layout import FolderItem, Layout, LayoutItem
from hostlayout.output.console import create_console, get_output


def _add_items(branch: Tree, items: list[LayoutItem], *, show_ids: bool) -> None:
    for item in items:
        if isinstance(item, FolderItem):
            label = f"[hl.folder]{escape(item.name)}/[/]"
            if show_ids:
                label += f" [hl.id]{item.id}[/]"
            _add_items(branch.add(label), item.items, show_ids=show_ids)
        else:
            branch.add(f"[hl.host]{escape(item.name)}[/]")


def render_layout(layout: Layout, *, show_ids: bool = False, title: str = "hosts") -> str:
    """Render *layout* as an indented tree, folders before their contents."""
    root = Tree(f"[hl.op]{escape(title)}[/]")
    _add_items(root, layout.items, show_ids=show_ids)
    console = create_console()
    console.print(root)
    return get_output(console).rstrip("\n")
