"""Command-line entry point.

Usage:
    go-version-sync
    go-version-sync --versions-file data/go-versions.json --no-latest
    go-version-sync --config sync.yaml --strict-digests

Exit codes: 0 on success (soft skips included), 1 on any fatal error.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from go_version_sync.config import SyncConfig, load_sync_config
from go_version_sync.errors import SyncError
from go_version_sync.fetcher import GoReleaseFetcher
from go_version_sync.logging_config import LOG_LEVELS, get_logger, setup_logging
from go_version_sync.storage import JSONVersionStore
from go_version_sync.sync import VersionSync

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="go-version-sync",
        description="Record SRI digests of stable Go releases in a local version map",
    )
    parser.add_argument("--config", "-c", type=Path, help="YAML config file")
    parser.add_argument("--url", help="Release index URL")
    parser.add_argument("--versions-file", type=Path, help="Version map JSON file")
    parser.add_argument("--latest-file", type=Path, help="Latest-version JSON file")
    parser.add_argument(
        "--no-latest",
        action="store_true",
        help="Do not write the latest-version file",
    )
    parser.add_argument(
        "--strict-digests",
        action="store_true",
        help="Skip releases with malformed hex digests instead of zero-filling",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        help=f"One of {', '.join(LOG_LEVELS)} (default: $LOG_LEVEL or WARNING)",
    )
    return parser


def resolve_config(args: argparse.Namespace) -> SyncConfig:
    """Merge the config file (if any) with command-line overrides."""
    config = load_sync_config(args.config) if args.config else SyncConfig()

    overrides: dict = {}
    if args.url:
        overrides["releases_url"] = args.url
    if args.versions_file:
        overrides["versions_path"] = args.versions_file
    if args.latest_file:
        overrides["latest_path"] = args.latest_file
    if args.no_latest:
        overrides["write_latest"] = False
    if args.strict_digests:
        overrides["strict_digests"] = True
    return config.model_copy(update=overrides)


def main(argv: list[str] | None = None) -> int:
    """Run one sync and return the process exit code."""
    args = build_parser().parse_args(argv)

    try:
        setup_logging(log_level=args.log_level)
    except ValueError as exc:
        # Fall back to a known level so the failure still reaches stderr.
        setup_logging(log_level="WARNING")
        logger.error("config_invalid", error=str(exc))
        return 1

    try:
        config = resolve_config(args)
    except ValueError as exc:
        logger.error("config_invalid", error=str(exc))
        return 1

    store = JSONVersionStore(
        config.versions_path,
        config.latest_path if config.write_latest else None,
    )
    sync = VersionSync(GoReleaseFetcher(config.releases_url), store, config)

    try:
        result = sync.run()
    except SyncError as exc:
        logger.error("sync_failed", error_type=type(exc).__name__, error=str(exc))
        return 1

    for added in result.added:
        print(added.progress_line())
    if result.latest is not None:
        print(f"\nLatest stable version: {result.latest}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
