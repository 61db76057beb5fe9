"""Orchestrates one sync run.

The run follows this flow:
1. Fetch the upstream release list
2. Load the persisted version map
3. Merge the releases into the map
4. Write the version map
5. Write the latest-version record (if a stable version was parsed)

Nothing is written unless steps 1-3 succeed. Any SyncError propagates to
the caller unchanged.
"""

from __future__ import annotations

from go_version_sync.config import SyncConfig
from go_version_sync.fetcher import ReleaseFetcherProtocol
from go_version_sync.logging_config import get_logger
from go_version_sync.merger import MergeResult, merge_releases
from go_version_sync.storage import JSONVersionStore

logger = get_logger(__name__)


class VersionSync:
    """Runs fetch, merge and persist against one store.

    Usage:
        sync = VersionSync(GoReleaseFetcher(), JSONVersionStore("go-versions.json"))
        result = sync.run()
    """

    def __init__(
        self,
        fetcher: ReleaseFetcherProtocol,
        store: JSONVersionStore,
        config: SyncConfig | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.store = store
        self.config = config or SyncConfig()

    def run(self) -> MergeResult:
        """Execute one sync.

        Returns:
            The merge result, after both files have been written

        Raises:
            FetchError: If the release index cannot be retrieved
            DecodeError: If the index or the local map is malformed
            PersistenceError: If a state file cannot be read or written
        """
        logger.info("sync_started", versions_path=str(self.store.versions_path))

        releases = self.fetcher.fetch()
        logger.info("releases_fetched", count=len(releases))

        version_map = self.store.load()

        result = merge_releases(
            releases,
            version_map,
            version_prefix=self.config.version_prefix,
            source_kind=self.config.source_kind,
            strict_digests=self.config.strict_digests,
        )

        self.store.save(result.version_map)
        if result.latest is not None and self.config.write_latest:
            self.store.save_latest(result.latest)

        logger.info(
            "sync_complete",
            added=len(result.added),
            skipped=len(result.skipped),
            latest=str(result.latest) if result.latest else None,
        )
        return result
