"""Tests for JSON file persistence.

Run with: pytest tests/test_storage.py -v
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from go_version_sync.errors import DecodeError, PersistenceError
from go_version_sync.schemas import LatestVersion, VersionRecord
from go_version_sync.storage import JSONVersionStore


@pytest.fixture
def store(tmp_path: Path) -> JSONVersionStore:
    return JSONVersionStore(tmp_path / "go-versions.json", tmp_path / "latest-version.json")


class TestLoad:
    def test_missing_file_is_empty_map(self, store: JSONVersionStore) -> None:
        assert store.load() == {}

    def test_loads_existing_map(self, store: JSONVersionStore) -> None:
        store.versions_path.write_text('{"1.21": {"0": {"sha256": "sha256-X"}}}')
        assert store.load() == {"1.21": {"0": VersionRecord(sha256="sha256-X")}}

    def test_record_without_digest_loads_as_empty(self, store: JSONVersionStore) -> None:
        store.versions_path.write_text('{"1.21": {"0": {}, "1": {"sha256": null}}}')
        assert store.load() == {
            "1.21": {"0": VersionRecord(sha256=""), "1": VersionRecord(sha256="")}
        }

    def test_malformed_json_raises_decode_error(self, store: JSONVersionStore) -> None:
        store.versions_path.write_text("{not json")
        with pytest.raises(DecodeError, match="go-versions.json"):
            store.load()

    def test_wrong_shape_raises_decode_error(self, store: JSONVersionStore) -> None:
        store.versions_path.write_text('["1.21"]')
        with pytest.raises(DecodeError):
            store.load()

    def test_unreadable_path_raises_persistence_error(self, tmp_path: Path) -> None:
        # A directory exists but cannot be read as a file.
        (tmp_path / "go-versions.json").mkdir()
        with pytest.raises(PersistenceError):
            JSONVersionStore(tmp_path / "go-versions.json").load()


class TestSave:
    def test_round_trip(self, store: JSONVersionStore) -> None:
        version_map = {
            "1.22": {"3": VersionRecord(sha256="sha256-B")},
            "1.21": {"0": VersionRecord(sha256="sha256-A")},
        }
        store.save(version_map)
        assert store.load() == version_map

    def test_output_format(self, store: JSONVersionStore) -> None:
        store.save(
            {
                "1.22": {"3": VersionRecord(sha256="sha256-B")},
                "1.21": {"0": VersionRecord(sha256="sha256-A")},
            }
        )
        text = store.versions_path.read_text()
        assert text == (
            "{\n"
            '  "1.21": {\n'
            '    "0": {\n'
            '      "sha256": "sha256-A"\n'
            "    }\n"
            "  },\n"
            '  "1.22": {\n'
            '    "3": {\n'
            '      "sha256": "sha256-B"\n'
            "    }\n"
            "  }\n"
            "}"
        )

    def test_empty_map(self, store: JSONVersionStore) -> None:
        store.save({})
        assert store.versions_path.read_text() == "{}"

    def test_overwrites_existing_file(self, store: JSONVersionStore) -> None:
        store.versions_path.write_text('{"old": {}}' * 10)
        store.save({"1.21": {}})
        assert json.loads(store.versions_path.read_text()) == {"1.21": {}}

    def test_write_failure_raises_persistence_error(self, tmp_path: Path) -> None:
        store = JSONVersionStore(tmp_path / "missing-dir" / "go-versions.json")
        with pytest.raises(PersistenceError):
            store.save({})


class TestSaveLatest:
    def test_writes_latest_version(self, store: JSONVersionStore) -> None:
        store.save_latest(LatestVersion(major=1, minor=22, patch=3))
        assert store.latest_path.read_text() == (
            '{\n  "major": 1,\n  "minor": 22,\n  "patch": 3\n}'
        )

    def test_no_latest_path_is_noop(self, tmp_path: Path) -> None:
        store = JSONVersionStore(tmp_path / "go-versions.json")
        store.save_latest(LatestVersion(major=1, minor=22, patch=3))
        assert list(tmp_path.iterdir()) == []
