"""Path resolution and folder queries.

Folders are addressed two ways:

- By name only (:func:`folder_path`, :func:`servers_in_folder`,
  :func:`items_in_folder`), for breadcrumbs and folder listings.
- By id-or-name (:func:`find_folder`), for mutations.

Both use the first depth-first (pre-order) match. When two folders share
a name only the first one is reachable by name; when a folder's name
equals another folder's id, id-or-name lookup binds to whichever comes
first in tree order. Pass ``id_only=True`` to rule that out.
"""

from __future__ import annotations

from hostlayout.domain.layout import FolderItem, Layout, LayoutItem, ServerItem


def find_folder(
    items: list[LayoutItem],
    key: str,
    *,
    id_only: bool = False,
) -> FolderItem | None:
    """Return the first folder, depth-first, whose id (or name) equals *key*."""
    for item in items:
        if not isinstance(item, FolderItem):
            continue
        hit = item.id == key if id_only else item.matches(key)
        if hit:
            return item
        found = find_folder(item.items, key, id_only=id_only)
        if found is not None:
            return found
    return None


def _find_folder_by_name(items: list[LayoutItem], name: str) -> FolderItem | None:
    for item in items:
        if not isinstance(item, FolderItem):
            continue
        if item.name == name:
            return item
        found = _find_folder_by_name(item.items, name)
        if found is not None:
            return found
    return None


def find_parent_folder(layout: Layout, host_name: str) -> FolderItem | None:
    """Innermost folder directly holding *host_name*; None at the root or if absent."""
    for folder in layout.folders():
        if any(isinstance(i, ServerItem) and i.name == host_name for i in folder.items):
            return folder
    return None


def folder_path(layout: Layout, target: str) -> list[str]:
    """Folder names from a root ancestor down to the folder named *target*.

    Returns an empty list when no folder has that name.
    """
    path: list[str] = []

    def descend(items: list[LayoutItem]) -> bool:
        for item in items:
            if not isinstance(item, FolderItem):
                continue
            path.append(item.name)
            if item.name == target or descend(item.items):
                return True
            path.pop()
        return False

    descend(layout.items)
    return path


def servers_in_folder(layout: Layout, folder_name: str) -> list[str]:
    """Every host nested anywhere under the named folder, in tree order."""
    folder = _find_folder_by_name(layout.items, folder_name)
    if folder is None:
        return []
    return folder.server_names()


def items_in_folder(layout: Layout, folder_name: str) -> list[LayoutItem]:
    """Immediate children of the named folder (copies, safe to hand to a UI)."""
    folder = _find_folder_by_name(layout.items, folder_name)
    if folder is None:
        return []
    return [item.model_copy(deep=True) for item in folder.items]


def exists_anywhere(layout: Layout, host_name: str) -> bool:
    """Whether *host_name* appears as a leaf anywhere in the tree."""
    return any(isinstance(n, ServerItem) and n.name == host_name for n in layout.walk())
