"""Reconciliation — make the layout mirror the canonical host set.

Pipeline: COLLECT → APPEND → FILTER → PRUNE

New hosts always land at the root, after every existing item. Hosts
that left the registry disappear from wherever they were, and so do
folders emptied by their removal.

INVARIANT: After ``sync_layout`` every canonical host appears exactly
once and no folder is empty. Running it twice changes nothing the
second time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from hostlayout.domain.hosts import CanonicalHosts, host_names
from hostlayout.domain.layout import FolderItem, Layout, LayoutItem, ServerItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SyncReport:
    """What a reconciliation pass changed."""

    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    pruned_folders: int = 0

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed or self.pruned_folders)


def sync_layout(layout: Layout, canonical_hosts: CanonicalHosts) -> SyncReport:
    """Reconcile *layout* in place against *canonical_hosts*."""
    names = host_names(canonical_hosts)
    canonical = set(names)

    # ── COLLECT ──────────────────────────────────────────────
    known = set(layout.server_names())

    # ── APPEND ───────────────────────────────────────────────
    added = [name for name in names if name not in known]
    layout.items.extend(ServerItem(name=name) for name in added)

    # ── FILTER + PRUNE ───────────────────────────────────────
    removed: list[str] = []
    seen: set[str] = set()
    pruned = _filter_items(layout.items, canonical, seen, removed)

    report = SyncReport(added=added, removed=removed, pruned_folders=pruned)
    if report.changed:
        logger.debug(
            "Layout reconciled: %d added, %d removed, %d folders pruned",
            len(added),
            len(removed),
            pruned,
        )
    return report


def _filter_items(
    items: list[LayoutItem],
    canonical: set[str],
    seen: set[str],
    removed: list[str],
) -> int:
    """Drop unknown and duplicate hosts, then emptied folders. Returns folders pruned."""
    pruned = 0
    kept: list[LayoutItem] = []
    for item in items:
        if isinstance(item, ServerItem):
            if item.name not in canonical or item.name in seen:
                removed.append(item.name)
                continue
            seen.add(item.name)
        elif isinstance(item, FolderItem):
            pruned += _filter_items(item.items, canonical, seen, removed)
            if not item.items:
                pruned += 1
                continue
        kept.append(item)
    items[:] = kept
    return pruned
