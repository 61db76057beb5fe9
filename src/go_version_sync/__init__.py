"""Go Release Version Sync.

A batch job that fetches the upstream Go release index, records an
SRI-style digest of every stable source tarball in a local version map,
and tracks the newest stable release.
"""

__version__ = "0.1.0"
