"""Job configuration.

All settings have defaults that reproduce the stock behaviour (upstream
go.dev index, go-versions.json and latest-version.json in the working
directory). A YAML file can override any of them, and CLI flags override
the file:

    releases_url: https://go.dev/dl/?mode=json&include=all
    versions_path: data/go-versions.json
    latest_path: data/latest-version.json
    write_latest: true
    strict_digests: false
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

DEFAULT_RELEASES_URL = "https://go.dev/dl/?mode=json&include=all"


class SyncConfig(BaseModel):
    """Settings for one sync run.

    Attributes:
        releases_url: Upstream endpoint returning the full release list
        versions_path: Version map file, read at start and overwritten at end
        latest_path: Latest-version record file
        write_latest: Whether to write latest_path at all
        version_prefix: Literal prefix stripped from version labels
        source_kind: File kind identifying the source tarball
        strict_digests: Skip releases with malformed hex digests instead
                        of zero-filling bad digits
    """

    model_config = ConfigDict(extra="forbid")

    releases_url: str = DEFAULT_RELEASES_URL
    versions_path: Path = Path("go-versions.json")
    latest_path: Path = Path("latest-version.json")
    write_latest: bool = True
    version_prefix: str = "go"
    source_kind: str = "source"
    strict_digests: bool = False


def load_sync_config(path: str | Path) -> SyncConfig:
    """Load and validate a YAML config file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A validated SyncConfig. Returns defaults if the file doesn't exist.

    Raises:
        ValueError: If the YAML content is invalid or fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        return SyncConfig()

    try:
        raw = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping")

    try:
        return SyncConfig.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Invalid config in {path}: {exc}") from exc
