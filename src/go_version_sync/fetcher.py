"""Client for the upstream Go release index.

Issues a single GET against https://go.dev/dl/?mode=json&include=all and
decodes the full release list (stable and unstable) in one response.

Design notes:
- Uses httpx; the transport can be swapped for httpx.MockTransport in tests
- No retries and no pagination: the endpoint returns everything at once
- Uses a Protocol so the orchestrator doesn't depend on the concrete
  implementation
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from go_version_sync.config import DEFAULT_RELEASES_URL
from go_version_sync.errors import DecodeError, FetchError
from go_version_sync.schemas import GoRelease, release_list_adapter

# ---------------------------------------------------------------------------
# Protocol (Interface)
# ---------------------------------------------------------------------------


class ReleaseFetcherProtocol(Protocol):
    """Interface for anything that can produce the upstream release list."""

    def fetch(self) -> list[GoRelease]:
        """Return every release known upstream, in upstream order."""
        ...


# ---------------------------------------------------------------------------
# Concrete Implementation
# ---------------------------------------------------------------------------


class GoReleaseFetcher:
    """Fetches the release index over HTTP.

    Usage:
        fetcher = GoReleaseFetcher()
        releases = fetcher.fetch()
    """

    def __init__(
        self,
        url: str = DEFAULT_RELEASES_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            url: Endpoint returning the release list as a JSON array
            transport: Optional httpx transport (e.g., httpx.MockTransport)
        """
        self.url = url
        self._transport = transport
        self._headers: dict[str, str] = {"Accept": "application/json"}

    def fetch(self) -> list[GoRelease]:
        """Download and decode the release list.

        Returns:
            The releases, in the order upstream lists them

        Raises:
            FetchError: If the request fails or returns a non-2xx status
            DecodeError: If the body is not a JSON array of releases
        """
        try:
            with httpx.Client(
                headers=self._headers,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = client.get(self.url)
                resp.raise_for_status()
                body = resp.content
        except httpx.HTTPError as exc:
            raise FetchError(f"GET {self.url} failed: {exc}") from exc

        return decode_releases(body)


def decode_releases(body: str | bytes) -> list[GoRelease]:
    """Validate a raw JSON body as a list of releases.

    Raises:
        DecodeError: If the body is not valid JSON or has the wrong shape
    """
    try:
        return release_list_adapter.validate_json(body)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected release index payload: {exc}") from exc


# ---------------------------------------------------------------------------
# Mock Implementation (for testing)
# ---------------------------------------------------------------------------


class MockReleaseFetcher:
    """Fetcher that returns predefined releases without network access.

    Usage:
        fetcher = MockReleaseFetcher([{"version": "go1.22.0", "stable": True}])
        releases = fetcher.fetch()
    """

    def __init__(self, releases: list[dict[str, Any] | GoRelease] | None = None) -> None:
        self._releases = releases or []
        self.calls = 0

    def fetch(self) -> list[GoRelease]:
        self.calls += 1
        return [
            r if isinstance(r, GoRelease) else GoRelease.model_validate(r)
            for r in self._releases
        ]
