"""Layout tree model — hosts grouped into nested folders.

A :class:`Layout` is an ordered list of :data:`LayoutItem` nodes. Each node
is either a :class:`ServerItem` leaf naming one host of the canonical
registry, or a :class:`FolderItem` owning its children by value.

The models serialize straight to the persisted document shape::

    {"items": [{"type": "server", "name": "web"},
               {"type": "folder", "id": "...", "name": "prod", "items": [...]}]}

INVARIANT: Folders own their children. There are no back-references,
so the tree cannot contain cycles.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ServerItem(BaseModel):
    """Leaf node referencing a host by its canonical name."""

    type: Literal["server"] = "server"
    name: str


class FolderItem(BaseModel):
    """Internal node: stable id, mutable display name, ordered children.

    ``id`` defaults to an empty string so documents written before folders
    carried ids still validate; :func:`hostlayout.domain.ids.ensure_folder_ids`
    backfills them on load.
    """

    type: Literal["folder"] = "folder"
    id: str = ""
    name: str
    items: list[LayoutItem] = Field(default_factory=list)

    def matches(self, key: str) -> bool:
        """True when *key* equals this folder's id or its name."""
        return key in (self.id, self.name)

    def walk(self) -> Iterator[LayoutItem]:
        """Yield every descendant node, depth-first pre-order."""
        yield from _walk(self.items)

    def server_names(self) -> list[str]:
        """All leaf host names under this folder, in tree order."""
        return [node.name for node in self.walk() if isinstance(node, ServerItem)]

    def contains(self, node: LayoutItem) -> bool:
        """True when *node* (by identity) is this folder or one of its descendants."""
        if node is self:
            return True
        return any(child is node for child in self.walk())


LayoutItem = Annotated[ServerItem | FolderItem, Field(discriminator="type")]

FolderItem.model_rebuild()


class Layout(BaseModel):
    """Root container: the ordered top-level items."""

    items: list[LayoutItem] = Field(default_factory=list)

    def walk(self) -> Iterator[LayoutItem]:
        """Yield every node in the tree, depth-first pre-order."""
        yield from _walk(self.items)

    def server_names(self) -> list[str]:
        """Every leaf host name in the tree, in tree order."""
        return [node.name for node in self.walk() if isinstance(node, ServerItem)]

    def folders(self) -> list[FolderItem]:
        """Every folder in the tree, pre-order."""
        return [node for node in self.walk() if isinstance(node, FolderItem)]


def _walk(items: list[LayoutItem]) -> Iterator[LayoutItem]:
    for item in items:
        yield item
        if isinstance(item, FolderItem):
            yield from _walk(item.items)


def purge_empty_folders(items: list[LayoutItem]) -> int:
    """Remove, in place, every folder left without descendants.

    Children are purged before their parent is tested, so a chain of
    folders that only held each other collapses entirely. Returns the
    number of folders removed.
    """
    removed = 0
    kept: list[LayoutItem] = []
    for item in items:
        if isinstance(item, FolderItem):
            removed += purge_empty_folders(item.items)
            if not item.items:
                removed += 1
                continue
        kept.append(item)
    items[:] = kept
    return removed
