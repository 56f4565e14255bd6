"""LayoutService — load, apply one change, save.

Every public mutation follows the same cycle:

    LOAD (+ reconcile) → MUTATE → SAVE → NOTIFY → RESPOND

The tree is loaded fresh for each call; nothing is cached between calls.
A failed mutation is returned as-is and nothing is written. A no-op
(``data["changed"] is False``) is not written either.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from hostlayout.domain.hosts import host_names
from hostlayout.services import mutations, paths
from hostlayout.services.base import BaseService, ChangeCallback
from hostlayout.services.result import ServiceResult

if TYPE_CHECKING:
    from hostlayout.domain.hosts import CanonicalHosts
    from hostlayout.domain.layout import Layout, LayoutItem
    from hostlayout.infrastructure.store import LayoutStore


class LayoutService(BaseService):
    """Persisted layout operations against a fixed canonical host set."""

    def __init__(
        self,
        store: LayoutStore,
        canonical_hosts: CanonicalHosts,
        *,
        on_change: ChangeCallback | None = None,
    ) -> None:
        super().__init__(store, on_change=on_change)
        self._hosts = host_names(canonical_hosts)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def layout(self) -> Layout:
        """The reconciled tree (not written back)."""
        return self._store.load(self._hosts)

    def folder_path(self, folder_name: str) -> list[str]:
        return paths.folder_path(self.layout(), folder_name)

    def servers_in_folder(self, folder_name: str) -> list[str]:
        return paths.servers_in_folder(self.layout(), folder_name)

    def items_in_folder(self, folder_name: str) -> list[LayoutItem]:
        return paths.items_in_folder(self.layout(), folder_name)

    def exists_anywhere(self, host_name: str) -> bool:
        return paths.exists_anywhere(self.layout(), host_name)

    # ------------------------------------------------------------------
    # Reconciliation
    # ------------------------------------------------------------------

    def sync(self) -> ServiceResult:
        """Reconcile against the canonical hosts and persist the result."""
        op = "sync"
        layout = self._store.load(self._hosts)
        report = self._store.last_sync

        saved = self._store.save(layout)
        if not saved.ok:
            return ServiceResult(ok=False, op=op, error=saved.error)

        data: dict[str, Any] = {
            "added": list(report.added) if report else [],
            "removed": list(report.removed) if report else [],
            "pruned_folders": report.pruned_folders if report else 0,
            "hosts": len(self._hosts),
        }
        warnings: list[str] = []
        if report is not None and report.changed:
            self._notify(op, data, warnings)
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def move_into_folder(self, source_host: str, target_folder: str) -> ServiceResult:
        return self._apply(mutations.move_into_folder, source_host, target_folder)

    def drop_onto_server(self, source_host: str, target_host: str) -> ServiceResult:
        return self._apply(mutations.drop_onto_server, source_host, target_host)

    def drop_onto_folder(self, source_host: str, target_folder: str) -> ServiceResult:
        return self._apply(mutations.drop_onto_folder, source_host, target_folder)

    def drop_onto_server_in_folder(
        self,
        source_host: str,
        target_host: str,
        parent_folder: str,
    ) -> ServiceResult:
        return self._apply(
            mutations.drop_onto_server_in_folder, source_host, target_host, parent_folder
        )

    def drop_folder_onto_folder(self, source_folder: str, target_folder: str) -> ServiceResult:
        return self._apply(mutations.drop_folder_onto_folder, source_folder, target_folder)

    def drop_item_onto_folder(self, key: str, target_folder: str) -> ServiceResult:
        return self._apply(mutations.drop_item_onto_folder, key, target_folder)

    def rename_folder(self, folder_key: str, new_name: str) -> ServiceResult:
        return self._apply(mutations.rename_folder, folder_key, new_name)

    def remove_host(self, host_name: str) -> ServiceResult:
        return self._apply(mutations.remove_host, host_name)

    def remove_host_except_folder(self, host_name: str, keep_folder_id: str) -> ServiceResult:
        return self._apply(mutations.remove_host_except_folder, host_name, keep_folder_id)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _apply(self, operation: Callable[..., ServiceResult], *args: str) -> ServiceResult:
        layout = self._store.load(self._hosts)
        result = operation(layout, *args)
        if not result.ok or result.data.get("changed") is False:
            return result

        saved = self._store.save(layout)
        if not saved.ok:
            return ServiceResult(ok=False, op=result.op, error=saved.error)

        warnings = list(result.warnings)
        self._notify(result.op, result.data, warnings)
        return result.model_copy(update={"warnings": warnings})
