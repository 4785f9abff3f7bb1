"""Tests for the JSON-backed timezone store."""

import json
from pathlib import Path

from core.store import TimezoneStore


class TestLoad:
    def test_missing_file_is_created_empty(self, store: TimezoneStore, store_path: Path):
        assert store.load() == {}
        assert store_path.exists()
        assert json.loads(store_path.read_text()) == {}

    def test_invalid_json_falls_back_to_empty(self, store: TimezoneStore, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text("not json at all {{{")

        assert store.load() == {}
        assert len(store) == 0
        # The broken file is replaced by a valid empty snapshot
        assert json.loads(store_path.read_text()) == {}

    def test_non_object_document_is_treated_as_absent(self, store: TimezoneStore, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps(["Europe/London"]))

        assert store.load() == {}

    def test_malformed_entries_are_dropped(self, store: TimezoneStore, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"1": "Europe/London", "2": 5, "3": None}))

        assert store.load() == {"1": "Europe/London"}

    def test_existing_file(self, store: TimezoneStore, store_path: Path):
        store_path.parent.mkdir(parents=True)
        store_path.write_text(json.dumps({"123": "Asia/Tokyo"}))

        store.load()
        assert store.get(123) == "Asia/Tokyo"
        assert "123" in store
        assert 123 in store


class TestSave:
    def test_round_trip(self, store_path: Path):
        mapping = {"1": "Europe/London", "22": "America/New_York", "333": "Asia/Kolkata"}

        assert TimezoneStore(store_path).save(mapping) is True
        assert TimezoneStore(store_path).load() == mapping

    def test_file_is_pretty_printed(self, store: TimezoneStore, store_path: Path):
        store.set(1, "Europe/London")
        store.save()

        assert store_path.read_text() == '{\n  "1": "Europe/London"\n}'

    def test_write_failure_returns_false(self, tmp_path: Path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        store = TimezoneStore(blocker / "timezones.json")
        store.set(1, "Europe/London")

        assert store.save() is False
        # In-memory state survives the failed flush
        assert store.get(1) == "Europe/London"

    def test_no_temp_file_left_behind(self, store: TimezoneStore, store_path: Path):
        store.set(1, "UTC")
        store.save()

        assert [p.name for p in store_path.parent.iterdir()] == ["timezones.json"]


class TestSet:
    def test_last_write_wins(self, store: TimezoneStore):
        store.set(1, "Europe/London")
        store.set(1, "Asia/Tokyo")

        assert store.get(1) == "Asia/Tokyo"
        assert len(store) == 1

    def test_set_does_not_flush(self, store: TimezoneStore, store_path: Path):
        store.set(1, "Europe/London")

        assert not store_path.exists()

    def test_unknown_user(self, store: TimezoneStore):
        assert store.get(404) is None
