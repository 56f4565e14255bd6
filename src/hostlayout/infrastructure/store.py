"""Layout persistence — one JSON document per user.

``load`` never fails: a missing, unreadable, or malformed document yields
an empty layout, which reconciliation then fills from the host registry.
``save`` writes to a temporary sibling file and moves it into place, so a
crash mid-write leaves the previous document intact. An existing
document keeps its file permissions across saves.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from hostlayout.domain.ids import ensure_folder_ids
from hostlayout.domain.layout import Layout
from hostlayout.services.reconcile import SyncReport, sync_layout
from hostlayout.services.result import ServiceResult, failure

if TYPE_CHECKING:
    from hostlayout.config.settings import HostLayoutSettings
    from hostlayout.domain.hosts import CanonicalHosts

logger = logging.getLogger(__name__)


class LayoutStore:
    """Reads and writes the layout document at *path*."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._last_sync: SyncReport | None = None

    @classmethod
    def from_settings(cls, settings: HostLayoutSettings) -> LayoutStore:
        return cls(settings.layout_path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def last_sync(self) -> SyncReport | None:
        """Report of the reconciliation done by the most recent :meth:`load`."""
        return self._last_sync

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self, canonical_hosts: CanonicalHosts) -> Layout:
        """Read, backfill folder ids, and reconcile against *canonical_hosts*."""
        layout = self.read()
        assigned = ensure_folder_ids(layout)
        if assigned:
            logger.debug("Assigned ids to %d folders without a unique id", assigned)
        self._last_sync = sync_layout(layout, canonical_hosts)
        return layout

    def read(self) -> Layout:
        """Parse the document as stored, without backfill or reconciliation."""
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return Layout()
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read layout %s: %s", self._path, exc)
            return Layout()

        if not raw.strip():
            return Layout()
        try:
            return Layout.model_validate_json(raw)
        except (ValueError, RecursionError) as exc:
            logger.warning("Ignoring malformed layout %s: %s", self._path, exc)
            return Layout()

    def save(self, layout: Layout) -> ServiceResult:
        """Write *layout* atomically, creating parent directories as needed."""
        op = "save_layout"
        content = layout.model_dump_json(indent=2)
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                dir=self._path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(content)
            self._keep_mode(tmp_name)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            logger.warning("Failed to save layout %s: %s", self._path, exc)
            return failure(
                op,
                "IO_ERROR",
                f"Cannot write layout to {self._path}: {exc}",
                path=str(self._path),
            )

        return ServiceResult(ok=True, op=op, data={"path": str(self._path)})

    def _keep_mode(self, tmp_name: str) -> None:
        """Give the temporary file the permissions of the document it replaces."""
        try:
            mode = stat.S_IMODE(self._path.stat().st_mode)
        except FileNotFoundError:
            return
        os.chmod(tmp_name, mode)
