"""Exception types for the version sync job.

Every fatal failure raised by the fetcher, the store, or the converter is a
``SyncError`` so the CLI can catch one type, log it, and exit non-zero.
Per-release problems are not raised; the merger records them as skips.
"""

from __future__ import annotations


class SyncError(Exception):
    """Base class for fatal sync failures."""


class FetchError(SyncError):
    """The upstream release index could not be retrieved."""


class DecodeError(SyncError):
    """A response body or local file is not valid JSON of the expected shape."""


class PersistenceError(SyncError):
    """A local state file could not be read or written."""


class ConversionError(SyncError, ValueError):
    """A hex digest contains non-hex characters or has odd length."""
