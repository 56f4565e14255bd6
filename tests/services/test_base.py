"""Tests for BaseService change notification."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from hostlayout.infrastructure.store import LayoutStore
from hostlayout.services.base import BaseService


class TestBaseService:
    def test_store_stored(self, tmp_path: Path) -> None:
        store = LayoutStore(tmp_path / "layout.json")
        assert BaseService(store)._store is store

    def test_notify_without_callback_is_noop(self, tmp_path: Path) -> None:
        warnings: list[str] = []
        BaseService(LayoutStore(tmp_path / "l.json"))._notify("op", {}, warnings)
        assert warnings == []

    def test_notify_calls_callback(self, tmp_path: Path) -> None:
        calls: list[tuple[str, dict[str, Any]]] = []
        svc = BaseService(
            LayoutStore(tmp_path / "l.json"), on_change=lambda op, d: calls.append((op, d))
        )
        svc._notify("rename_folder", {"name": "x"}, [])
        assert calls == [("rename_folder", {"name": "x"})]

    def test_callback_failure_becomes_warning(self, tmp_path: Path) -> None:
        def boom(op: str, data: dict[str, Any]) -> None:
            raise RuntimeError("ui gone")

        warnings: list[str] = []
        BaseService(LayoutStore(tmp_path / "l.json"), on_change=boom)._notify("sync", {}, warnings)
        assert warnings == ["Change callback failed for sync"]
