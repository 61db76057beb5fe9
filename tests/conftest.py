"""Shared fixtures for the sync test suite."""

from __future__ import annotations

import pytest
import structlog

from go_version_sync.schemas import GoRelease

# Hex digest of 32 bytes of 0xAA.
AA_DIGEST = "aa" * 32


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test (or the CLI) applied."""
    yield
    structlog.reset_defaults()


def make_release(
    version: str,
    sha256: str = AA_DIGEST,
    stable: bool = True,
    kind: str = "source",
) -> GoRelease:
    """Build a release with one artifact of the given kind."""
    return GoRelease(
        version=version,
        stable=stable,
        files=[{"filename": f"{version}.src.tar.gz", "sha256": sha256, "kind": kind}],
    )


@pytest.fixture
def release_factory():
    return make_release


@pytest.fixture
def upstream_payload() -> list[dict]:
    """A trimmed-down copy of the go.dev release index."""
    return [
        {
            "version": "go1.23rc1",
            "stable": False,
            "files": [
                {"filename": "go1.23rc1.src.tar.gz", "os": "", "arch": "",
                 "sha256": "11" * 32, "size": 28000000, "kind": "source"},
            ],
        },
        {
            "version": "go1.22.3",
            "stable": True,
            "files": [
                {"filename": "go1.22.3.darwin-amd64.tar.gz", "os": "darwin",
                 "arch": "amd64", "sha256": "22" * 32, "size": 68000000,
                 "kind": "archive"},
                {"filename": "go1.22.3.src.tar.gz", "os": "", "arch": "",
                 "sha256": "33" * 32, "size": 27614041, "kind": "source"},
            ],
        },
        {
            "version": "go1.21.10",
            "stable": True,
            "files": [
                {"filename": "go1.21.10.src.tar.gz", "os": "", "arch": "",
                 "sha256": "44" * 32, "size": 26000000, "kind": "source"},
            ],
        },
        {
            "version": "go1.20",
            "stable": True,
            "files": [
                {"filename": "go1.20.src.tar.gz", "os": "", "arch": "",
                 "sha256": "55" * 32, "size": 26000000, "kind": "source"},
            ],
        },
    ]
