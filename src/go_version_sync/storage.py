"""JSON file storage for the version map and the latest-version record.

go-versions.json is read at the start of a run (a missing file is an empty
map) and overwritten at the end. latest-version.json is only ever
written. Both are whole-file overwrites with no atomic rename, so a crash
mid-write can leave a truncated file behind.

Output format: 2-space indent, keys sorted, no trailing newline, matching
files produced by earlier runs of the job so diffs stay minimal.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from go_version_sync.errors import DecodeError, PersistenceError
from go_version_sync.schemas import LatestVersion, VersionMap, version_map_adapter


class JSONVersionStore:
    """Reads and writes the sync state files.

    Usage:
        store = JSONVersionStore("go-versions.json", "latest-version.json")
        version_map = store.load()
        store.save(version_map)
    """

    def __init__(
        self,
        versions_path: str | Path,
        latest_path: str | Path | None = None,
    ) -> None:
        """Initialize with file locations.

        Args:
            versions_path: Version map file
            latest_path: Latest-version file; None disables writing it
        """
        self.versions_path = Path(versions_path)
        self.latest_path = Path(latest_path) if latest_path else None

    def load(self) -> VersionMap:
        """Load the version map, or an empty map if the file doesn't exist.

        Raises:
            DecodeError: If the file is not a valid version map
            PersistenceError: If the file exists but cannot be read
        """
        if not self.versions_path.exists():
            return {}

        try:
            raw = self.versions_path.read_bytes()
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self.versions_path}: {exc}") from exc

        try:
            return version_map_adapter.validate_json(raw)
        except ValidationError as exc:
            raise DecodeError(f"Invalid version map in {self.versions_path}: {exc}") from exc

    def save(self, version_map: VersionMap) -> None:
        """Overwrite the version map file.

        Raises:
            PersistenceError: If the file cannot be written
        """
        data = version_map_adapter.dump_python(version_map, mode="json")
        self._write(self.versions_path, data)

    def save_latest(self, latest: LatestVersion) -> None:
        """Overwrite the latest-version file, if one is configured.

        Raises:
            PersistenceError: If the file cannot be written
        """
        if self.latest_path is None:
            return
        self._write(self.latest_path, latest.model_dump(mode="json"), sort_keys=False)

    @staticmethod
    def _write(path: Path, data: Any, sort_keys: bool = True) -> None:
        text = json.dumps(data, indent=2, sort_keys=sort_keys)
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"Cannot write {path}: {exc}") from exc
