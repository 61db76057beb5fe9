"""Pydantic models for the upstream release index and the local version map.

Upstream shape (https://go.dev/dl/?mode=json&include=all):

    [
        {
            "version": "go1.22.3",
            "stable": true,
            "files": [
                {"filename": "go1.22.3.src.tar.gz", "sha256": "80648e...",
                 "kind": "source", "os": "", "arch": "", "size": 27614041},
                ...
            ]
        },
        ...
    ]

Local shape (go-versions.json):

    {"1.22": {"3": {"sha256": "sha256-gGSOT..."}}}

Key design decisions:
- Upstream models only declare the fields the merge needs; anything else
  upstream sends is ignored.
- Only ``version`` is required. Every other field may be missing or null
  and decodes to an empty value, so one sloppy artifact entry cannot fail
  the whole index. A missing source file is a normal branch, not a decode
  error.
- VersionRecord is frozen: recorded digests are never rewritten.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

# ---------------------------------------------------------------------------
# Upstream Schemas
# ---------------------------------------------------------------------------


class GoFile(BaseModel):
    """A single downloadable artifact of a release.

    Attributes:
        filename: Artifact name (e.g., "go1.22.3.src.tar.gz")
        sha256: Hex-encoded SHA-256 of the artifact
        kind: Artifact kind ("source", "archive", "installer")
    """

    filename: str = Field("", description="Artifact file name")
    sha256: str = Field("", description="Hex-encoded SHA-256 digest")
    kind: str = Field("", description="Artifact kind label")

    @field_validator("filename", "sha256", "kind", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        """Upstream null strings decode as empty."""
        return "" if value is None else value


class GoRelease(BaseModel):
    """One entry of the upstream release index.

    Attributes:
        version: Version label (e.g., "go1.22.3", "go1.23rc1")
        stable: Whether upstream marks this release production-ready
        files: Artifacts published for the release
    """

    version: str = Field(..., description="Version label")
    stable: bool = Field(False, description="Production-ready flag")
    files: list[GoFile] = Field(default_factory=list, description="Artifacts")

    @field_validator("stable", mode="before")
    @classmethod
    def null_as_unstable(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("files", mode="before")
    @classmethod
    def null_as_no_files(cls, value: Any) -> Any:
        return [] if value is None else value

    def source_file(self, kind: str = "source") -> GoFile | None:
        """Return the first file of the given kind, or None."""
        for file in self.files:
            if file.kind == kind:
                return file
        return None


release_list_adapter = TypeAdapter(list[GoRelease])


# ---------------------------------------------------------------------------
# Local State Schemas
# ---------------------------------------------------------------------------


class VersionRecord(BaseModel):
    """Digest record stored under major.minor -> patch.

    Attributes:
        sha256: SRI-style digest string ("sha256-<base64>")
    """

    model_config = ConfigDict(frozen=True)

    sha256: str = Field("", description="SRI digest of the source tarball")

    @field_validator("sha256", mode="before")
    @classmethod
    def null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value


# "major.minor" -> "patch" -> record
VersionMap = dict[str, dict[str, VersionRecord]]

version_map_adapter = TypeAdapter(VersionMap)


class LatestVersion(BaseModel):
    """A parsed (major, minor, patch) triple.

    Used both for the newest stable release written to latest-version.json
    and for the result of parsing a single version label.
    """

    major: int = Field(..., ge=0)
    minor: int = Field(..., ge=0)
    patch: int = Field(..., ge=0)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def is_newer_than(self, other: LatestVersion) -> bool:
        """Strict component-wise comparison: major, then minor, then patch."""
        return self.as_tuple() > other.as_tuple()

    @property
    def major_minor(self) -> str:
        return f"{self.major}.{self.minor}"

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"
