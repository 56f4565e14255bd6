"""BaseService — foundation for services backed by a LayoutStore.

Services receive the store and an optional change callback at
construction time. The callback replaces any process-wide "refresh"
hook: whoever embeds the service (a UI, the CLI) decides what to do
when the layout changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from hostlayout.infrastructure.store import LayoutStore

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str, dict[str, Any]], None]


class BaseService:
    """Base for service-layer classes.

    Usage::

        class LayoutService(BaseService):
            def rename_folder(self, key: str, name: str) -> ServiceResult:
                layout = self._store.load(self._hosts)
                ...
    """

    def __init__(self, store: LayoutStore, *, on_change: ChangeCallback | None = None) -> None:
        self._store = store
        self._on_change = on_change

    def _notify(self, op: str, data: dict[str, Any], warnings: list[str]) -> None:
        """Invoke the change callback. No-op if none was given.

        INVARIANT: Callback failures are warnings, never errors.
        """
        if self._on_change is None:
            return
        try:
            self._on_change(op, data)
        except Exception:
            logger.debug("Change callback failed for %s", op, exc_info=True)
            warnings.append(f"Change callback failed for {op}")
