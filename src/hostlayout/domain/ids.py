"""Folder id generation and collision-free default names.

Folder ids are random UUID4 strings. Collisions are treated as impossible.

INVARIANT: IDs are permanent. Once assigned, a folder id never changes
and is never reused for another folder. The one exception is
:func:`ensure_folder_ids` repairing a hand-edited document where two
folders share an id.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from hostlayout.domain.layout import FolderItem, Layout, LayoutItem

GROUP_NAME_PREFIX = "Group: "


def new_folder_id() -> str:
    """Return a fresh folder id."""
    return str(uuid.uuid4())


def group_name(target_host: str) -> str:
    """Default name for a folder synthesized by dropping a host onto *target_host*."""
    return f"{GROUP_NAME_PREFIX}{target_host}"


def unique_sibling_name(siblings: Iterable[LayoutItem], base: str) -> str:
    """Return *base*, or ``"{base} ({n})"`` with the smallest free *n*.

    Only folder siblings take part in the comparison; a host that happens
    to share the name does not force a suffix.

    Examples:
        >>> unique_sibling_name([], "Group: web")
        'Group: web'
    """
    taken = {item.name for item in siblings if isinstance(item, FolderItem)}
    if base not in taken:
        return base
    n = 1
    while f"{base} ({n})" in taken:
        n += 1
    return f"{base} ({n})"


def ensure_folder_ids(layout: Layout) -> int:
    """Give every folder a unique id. Returns how many ids were assigned.

    Folders without an id get a fresh one. When several folders share an
    id, the first in depth-first order keeps it and the others get fresh ids.
    """
    seen: set[str] = set()
    assigned = 0
    for folder in layout.folders():
        if not folder.id or folder.id in seen:
            folder.id = new_folder_id()
            assigned += 1
        seen.add(folder.id)
    return assigned
