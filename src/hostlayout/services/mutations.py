"""Mutation engine — the drag-and-drop operations on a layout tree.

Each operation takes a :class:`Layout`, changes it in place, and returns a
:class:`ServiceResult`. Work happens on a deep copy that replaces the
caller's items only once the operation has succeeded.

Pipeline: STAGE → RESOLVE → APPLY → PURGE → COMMIT

INVARIANT: On failure the caller's tree is untouched. On success every
host appears at most once and no folder is empty.

Folder keys accept a folder id or a folder name; see
:func:`hostlayout.services.paths.find_folder` for how ties resolve.
"""

from __future__ import annotations

import logging
from typing import Any

from hostlayout.domain.ids import group_name, new_folder_id, unique_sibling_name
from hostlayout.domain.layout import (
    FolderItem,
    Layout,
    LayoutItem,
    ServerItem,
    purge_empty_folders,
)
from hostlayout.services.paths import exists_anywhere, find_folder, find_parent_folder
from hostlayout.services.result import ServiceResult, failure

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Host moves
# ---------------------------------------------------------------------------


def move_into_folder(layout: Layout, source_host: str, target_folder: str) -> ServiceResult:
    """Move *source_host* from wherever it sits to the end of *target_folder*."""
    return _move_host(layout, source_host, target_folder, op="move_into_folder")


def drop_onto_folder(layout: Layout, source_host: str, target_folder: str) -> ServiceResult:
    """Host dropped on a folder: same as :func:`move_into_folder`."""
    return _move_host(layout, source_host, target_folder, op="drop_onto_folder")


def drop_onto_server(layout: Layout, source_host: str, target_host: str) -> ServiceResult:
    """Host dropped on another host.

    If the target already lives in a folder, the source joins that folder
    (the innermost one). Otherwise both hosts are replaced, at the target's
    root position, by a new folder ``"Group: {target}"`` holding
    ``[target, source]``.
    """
    op = "drop_onto_server"
    if source_host == target_host:
        return _noop(op, host=source_host)

    staged = layout.model_copy(deep=True)
    for name in (source_host, target_host):
        if not exists_anywhere(staged, name):
            return _host_not_found(op, name)

    parent = find_parent_folder(staged, target_host)
    if parent is not None:
        _place_host(staged, source_host, parent)
        _commit(layout, staged)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "host": source_host,
                "folder_id": parent.id,
                "folder_name": parent.name,
                "created": False,
            },
        )

    _remove_host(staged.items, source_host)
    purge_empty_folders(staged.items)
    index = _server_index(staged.items, target_host)
    # Target was found at the root and removing the source never removes it.
    assert index is not None
    staged.items.pop(index)

    folder = FolderItem(
        id=new_folder_id(),
        name=unique_sibling_name(staged.items, group_name(target_host)),
        items=[ServerItem(name=target_host), ServerItem(name=source_host)],
    )
    staged.items.insert(index, folder)
    _commit(layout, staged)
    logger.debug("Grouped %s with %s into %s", source_host, target_host, folder.name)
    return ServiceResult(
        ok=True,
        op=op,
        data={
            "host": source_host,
            "folder_id": folder.id,
            "folder_name": folder.name,
            "created": True,
        },
    )


def drop_onto_server_in_folder(
    layout: Layout,
    source_host: str,
    target_host: str,
    parent_folder: str,
) -> ServiceResult:
    """Host dropped on a host shown inside *parent_folder*.

    The target's slot in the parent becomes a new subfolder holding
    ``[target, source]``. Every other occurrence of the source is removed.
    """
    op = "drop_onto_server_in_folder"
    if source_host == target_host:
        return _noop(op, host=source_host)

    staged = layout.model_copy(deep=True)
    parent = find_folder(staged.items, parent_folder)
    if parent is None:
        return _folder_not_found(op, parent_folder)

    index = _server_index(parent.items, target_host)
    if index is None:
        return failure(
            op,
            "SERVER_NOT_FOUND",
            f"Target host '{target_host}' not found in folder '{parent_folder}'",
            host=target_host,
            folder=parent_folder,
        )
    if not exists_anywhere(staged, source_host):
        return _host_not_found(op, source_host)

    subfolder = FolderItem(
        id=new_folder_id(),
        name=unique_sibling_name(parent.items, group_name(target_host)),
        items=[ServerItem(name=target_host), ServerItem(name=source_host)],
    )
    parent.items[index] = subfolder
    _remove_host(staged.items, source_host, keep=subfolder)
    purge_empty_folders(staged.items)
    _commit(layout, staged)
    logger.debug("Grouped %s with %s inside %s", source_host, target_host, parent.name)
    return ServiceResult(
        ok=True,
        op=op,
        data={
            "host": source_host,
            "parent_id": parent.id,
            "folder_id": subfolder.id,
            "folder_name": subfolder.name,
            "created": True,
        },
    )


# ---------------------------------------------------------------------------
# Folder moves
# ---------------------------------------------------------------------------


def drop_folder_onto_folder(
    layout: Layout,
    source_folder: str,
    target_folder: str,
) -> ServiceResult:
    """Detach the *source_folder* subtree and append it to *target_folder*."""
    op = "drop_folder_onto_folder"
    if source_folder == target_folder:
        return _noop(op, folder=source_folder)

    staged = layout.model_copy(deep=True)
    source = find_folder(staged.items, source_folder)
    if source is None:
        return _folder_not_found(op, source_folder)
    target = find_folder(staged.items, target_folder)
    if target is None:
        if exists_anywhere(staged, target_folder):
            return failure(
                op,
                "NOT_A_FOLDER",
                f"Target '{target_folder}' is not a folder",
                key=target_folder,
            )
        return _folder_not_found(op, target_folder)

    if source is target:
        return _noop(op, folder=source.id)
    if source.contains(target):
        return failure(
            op,
            "INVALID_MOVE",
            f"Cannot move folder '{source.name}' into its own subtree",
            source=source.id,
            target=target.id,
        )

    _detach(staged.items, source)
    target.items.append(source)
    purge_empty_folders(staged.items)
    _commit(layout, staged)
    return ServiceResult(
        ok=True,
        op=op,
        data={"folder_id": source.id, "target_id": target.id, "target_name": target.name},
    )


def drop_item_onto_folder(layout: Layout, key: str, target_folder: str) -> ServiceResult:
    """Anything dropped on a folder: hosts move in, folders nest under it."""
    if exists_anywhere(layout, key):
        return drop_onto_folder(layout, key, target_folder)
    return drop_folder_onto_folder(layout, key, target_folder)


def rename_folder(layout: Layout, folder_key: str, new_name: str) -> ServiceResult:
    """Give the folder matched by *folder_key* a new display name.

    *new_name* is stored as given. A blank name fails with ``INVALID_NAME``.
    """
    op = "rename_folder"
    if not new_name.strip():
        return failure(op, "INVALID_NAME", "Folder name cannot be empty", key=folder_key)

    staged = layout.model_copy(deep=True)
    folder = find_folder(staged.items, folder_key)
    if folder is None:
        return _folder_not_found(op, folder_key)

    old_name = folder.name
    folder.name = new_name
    _commit(layout, staged)
    return ServiceResult(
        ok=True,
        op=op,
        data={"folder_id": folder.id, "old_name": old_name, "name": new_name},
    )


# ---------------------------------------------------------------------------
# Removal
# ---------------------------------------------------------------------------


def remove_host(layout: Layout, host_name: str) -> ServiceResult:
    """Delete every occurrence of *host_name*, then purge emptied folders."""
    removed = _remove_host(layout.items, host_name)
    pruned = purge_empty_folders(layout.items)
    return ServiceResult(
        ok=True,
        op="remove_host",
        data={"host": host_name, "removed": removed, "pruned_folders": pruned},
    )


def remove_host_except_folder(
    layout: Layout,
    host_name: str,
    keep_folder_id: str,
) -> ServiceResult:
    """Like :func:`remove_host`, sparing occurrences inside *keep_folder_id*'s subtree."""
    op = "remove_host_except_folder"
    keep = find_folder(layout.items, keep_folder_id)
    if keep is None:
        return _folder_not_found(op, keep_folder_id)

    removed = _remove_host(layout.items, host_name, keep=keep)
    pruned = purge_empty_folders(layout.items)
    return ServiceResult(
        ok=True,
        op=op,
        data={
            "host": host_name,
            "removed": removed,
            "kept_in": keep.id,
            "pruned_folders": pruned,
        },
    )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _move_host(layout: Layout, source_host: str, target_folder: str, *, op: str) -> ServiceResult:
    if source_host == target_folder:
        return _noop(op, host=source_host)

    staged = layout.model_copy(deep=True)
    folder = find_folder(staged.items, target_folder)
    if folder is None:
        return _folder_not_found(op, target_folder)
    if not exists_anywhere(staged, source_host):
        return _host_not_found(op, source_host)

    _place_host(staged, source_host, folder)
    _commit(layout, staged)
    return ServiceResult(
        ok=True,
        op=op,
        data={"host": source_host, "folder_id": folder.id, "folder_name": folder.name},
    )


def _place_host(staged: Layout, host_name: str, folder: FolderItem) -> None:
    """Remove *host_name* everywhere, append it to *folder*, purge empties."""
    _remove_host(staged.items, host_name)
    # Append before purging: the folder may have held only this host.
    folder.items.append(ServerItem(name=host_name))
    purge_empty_folders(staged.items)


def _remove_host(
    items: list[LayoutItem],
    host_name: str,
    *,
    keep: FolderItem | None = None,
) -> bool:
    """Drop leaf occurrences of *host_name* in place, skipping the *keep* subtree."""
    removed = False
    kept: list[LayoutItem] = []
    for item in items:
        if isinstance(item, ServerItem) and item.name == host_name:
            removed = True
            continue
        if isinstance(item, FolderItem) and item is not keep:
            removed = _remove_host(item.items, host_name, keep=keep) or removed
        kept.append(item)
    items[:] = kept
    return removed


def _detach(items: list[LayoutItem], node: LayoutItem) -> bool:
    """Remove *node* (by identity) from whichever list holds it."""
    for i, item in enumerate(items):
        if item is node:
            del items[i]
            return True
        if isinstance(item, FolderItem) and _detach(item.items, node):
            return True
    return False


def _server_index(items: list[LayoutItem], host_name: str) -> int | None:
    for i, item in enumerate(items):
        if isinstance(item, ServerItem) and item.name == host_name:
            return i
    return None


def _commit(layout: Layout, staged: Layout) -> None:
    layout.items = staged.items


def _noop(op: str, **data: Any) -> ServiceResult:
    return ServiceResult(ok=True, op=op, data={**data, "changed": False})


def _folder_not_found(op: str, key: str) -> ServiceResult:
    return failure(op, "FOLDER_NOT_FOUND", f"Folder '{key}' not found", key=key)


def _host_not_found(op: str, name: str) -> ServiceResult:
    return failure(op, "SERVER_NOT_FOUND", f"Host '{name}' not found in layout", host=name)
