"""Tests for LayoutStore load/save."""

from __future__ import annotations

import json
import stat
import sys
from pathlib import Path

import pytest

from hostlayout.config.settings import HostLayoutSettings
from hostlayout.domain.layout import FolderItem
from hostlayout.infrastructure.store import LayoutStore
from tests.builders import assert_invariants, fld, shape, srv, tree


def _write(store: LayoutStore, content: str) -> None:
    store.path.parent.mkdir(parents=True, exist_ok=True)
    store.path.write_text(content, encoding="utf-8")


class TestLoad:
    def test_missing_file_gives_reconciled_tree(self, store: LayoutStore) -> None:
        layout = store.load(["a", "b"])
        assert shape(layout) == ["a", "b"]
        assert store.last_sync is not None
        assert store.last_sync.added == ["a", "b"]

    @pytest.mark.parametrize(
        "content",
        ["", "   \n", "{not json", "[1, 2]", '{"items": [{"type": "bogus"}]}', '"text"'],
    )
    def test_malformed_degrades_to_empty(self, store: LayoutStore, content: str) -> None:
        _write(store, content)
        assert shape(store.load(["x"])) == ["x"]

    def test_undecodable_bytes(self, store: LayoutStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b"\xff\xfe\x00garbage")
        assert shape(store.load(["x"])) == ["x"]

    def test_deeply_nested_garbage_degrades_to_empty(self, store: LayoutStore) -> None:
        _write(store, "[" * 200_000)
        assert shape(store.load(["a"])) == ["a"]

    def test_backfills_legacy_folder_ids(self, store: LayoutStore) -> None:
        _write(
            store,
            json.dumps(
                {"items": [{"type": "folder", "name": "old", "items": [{"type": "server", "name": "a"}]}]}
            ),
        )
        layout = store.load(["a"])
        folder = layout.items[0]
        assert isinstance(folder, FolderItem)
        assert folder.id

    def test_duplicate_folder_ids_are_reassigned(self, store: LayoutStore) -> None:
        folder = {"type": "folder", "id": "dup"}
        _write(
            store,
            json.dumps(
                {
                    "items": [
                        {**folder, "name": "A", "items": [{"type": "server", "name": "a"}]},
                        {**folder, "name": "B", "items": [{"type": "server", "name": "b"}]},
                    ]
                }
            ),
        )
        layout = store.load(["a", "b"])
        ids = [f.id for f in layout.folders()]
        assert ids[0] == "dup"
        assert len(set(ids)) == 2
        assert_invariants(layout)

    def test_reconciles_against_hosts(self, store: LayoutStore) -> None:
        store.save(tree(fld("F", fld("G", srv("gone"))), srv("a")))
        layout = store.load(["a", "new"])
        assert shape(layout) == ["a", "new"]

    def test_read_does_not_reconcile(self, store: LayoutStore) -> None:
        store.save(tree(srv("gone")))
        assert shape(store.read()) == ["gone"]


class TestSave:
    def test_creates_parent_dirs(self, store: LayoutStore) -> None:
        result = store.save(tree(srv("a")))
        assert result.ok
        assert result.data["path"] == str(store.path)
        assert json.loads(store.path.read_text()) == {"items": [{"type": "server", "name": "a"}]}

    def test_round_trip(self, store: LayoutStore) -> None:
        original = tree(srv("a"), fld("F", srv("b"), fld("G", srv("c"), id="g"), id="f"))
        store.save(original)
        assert store.load(["a", "b", "c"]) == original

    def test_no_temp_files_left(self, store: LayoutStore) -> None:
        store.save(tree(srv("a")))
        store.save(tree(srv("b")))
        assert [p.name for p in store.path.parent.iterdir()] == ["layout.json"]

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
    def test_keeps_existing_file_mode(self, store: LayoutStore) -> None:
        store.save(tree(srv("a")))
        store.path.chmod(0o644)
        store.save(tree(srv("b")))
        assert stat.S_IMODE(store.path.stat().st_mode) == 0o644

    def test_unwritable_location(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("x")
        result = LayoutStore(blocker / "sub" / "layout.json").save(tree(srv("a")))
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "IO_ERROR"


class TestFromSettings:
    def test_uses_app_dir(self, tmp_path: Path) -> None:
        settings = HostLayoutSettings(config_dir=tmp_path, app_name="demo")
        store = LayoutStore.from_settings(settings)
        assert store.path == tmp_path / "demo" / "layout.json"
