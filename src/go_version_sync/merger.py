"""Merge fetched releases into the persisted version map.

For each release, in the order upstream returns them:

1. Unstable releases are ignored.
2. The first file of the source kind is the artifact that gets recorded;
   a release without one is skipped.
3. The label ("go1.22.3") loses its prefix and must split into exactly
   three dot-separated numbers. Labels like "go1.20" (no patch) and any
   label whose major or minor parses to 0 are skipped.
4. The running latest version is updated, whether or not the release is
   already in the map.
5. An existing (major.minor, patch) entry is never touched.
6. New entries get the SRI form of the source digest.

Skips at steps 2, 3 and (strict mode) 6 are soft: they are logged and
collected in MergeResult.skipped, and the loop continues.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from go_version_sync.digest import to_sri
from go_version_sync.errors import ConversionError
from go_version_sync.logging_config import get_logger
from go_version_sync.schemas import (
    GoRelease,
    LatestVersion,
    VersionMap,
    VersionRecord,
)

logger = get_logger(__name__)

_LEADING_INT = re.compile(r"\d+")

# ---------------------------------------------------------------------------
# Result Types
# ---------------------------------------------------------------------------


@dataclass
class AddedVersion:
    """A record inserted by this merge."""

    version: LatestVersion
    sha256: str

    @property
    def base64_digest(self) -> str:
        return self.sha256.split("-", 1)[1]

    def progress_line(self) -> str:
        return f"Added version {self.version} with SHA256: {self.base64_digest}"


@dataclass
class SkippedRelease:
    """A stable release that could not be recorded.

    Attributes:
        version: The upstream version label
        reason: no_source_file, unparseable_version or invalid_digest
        detail: Extra context for the log line
    """

    version: str
    reason: str
    detail: str = ""


@dataclass
class MergeResult:
    """Outcome of merging one release list into a version map."""

    version_map: VersionMap
    latest: LatestVersion | None = None
    added: list[AddedVersion] = field(default_factory=list)
    skipped: list[SkippedRelease] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Version Parsing
# ---------------------------------------------------------------------------


def _scan_int(part: str) -> int:
    """Read the leading decimal integer of a label component, or 0."""
    match = _LEADING_INT.match(part.strip())
    return int(match.group()) if match else 0


def parse_version(label: str, prefix: str = "go") -> LatestVersion | None:
    """Parse a "go1.22.3" style label into its three components.

    Returns:
        The parsed version, or None if the label does not have exactly
        three components or its major or minor component is 0
    """
    parts = label.removeprefix(prefix).split(".")
    if len(parts) != 3:
        return None

    major, minor, patch = (_scan_int(p) for p in parts)
    # 0 is treated as unparseable, so a genuine 0.x release is dropped.
    if major == 0 or minor == 0:
        return None
    return LatestVersion(major=major, minor=minor, patch=patch)


# ---------------------------------------------------------------------------
# Merge
# ---------------------------------------------------------------------------


def merge_releases(
    releases: Iterable[GoRelease],
    version_map: VersionMap,
    *,
    version_prefix: str = "go",
    source_kind: str = "source",
    strict_digests: bool = False,
) -> MergeResult:
    """Fold fetched releases into a copy of the version map.

    Args:
        releases: Releases in upstream order
        version_map: Previously persisted map; not mutated
        version_prefix: Literal prefix stripped from version labels
        source_kind: File kind identifying the source tarball
        strict_digests: Skip releases whose digest is not valid hex
                        instead of zero-filling the bad digits

    Returns:
        The merged map, the newest stable version seen, and the lists of
        added and skipped releases
    """
    result = MergeResult(version_map=copy.deepcopy(version_map))

    for release in releases:
        if not release.stable:
            continue

        source = release.source_file(source_kind)
        if source is None:
            _skip(result, release.version, "no_source_file")
            continue

        parsed = parse_version(release.version, version_prefix)
        if parsed is None:
            _skip(result, release.version, "unparseable_version")
            continue

        if result.latest is None or parsed.is_newer_than(result.latest):
            result.latest = parsed

        patches = result.version_map.setdefault(parsed.major_minor, {})
        patch_key = str(parsed.patch)
        if patch_key in patches:
            continue

        try:
            sri = to_sri(source.sha256, strict=strict_digests)
        except ConversionError as exc:
            _skip(result, release.version, "invalid_digest", str(exc))
            continue

        patches[patch_key] = VersionRecord(sha256=sri)
        result.added.append(AddedVersion(version=parsed, sha256=sri))
        logger.debug("version_added", version=str(parsed), sha256=sri)

    return result


def _skip(result: MergeResult, version: str, reason: str, detail: str = "") -> None:
    result.skipped.append(SkippedRelease(version=version, reason=reason, detail=detail))
    logger.warning("release_skipped", version=version, reason=reason, detail=detail)
