"""Hex digest to SRI conversion.

Upstream publishes SHA-256 digests as hex; the version map stores them in
Subresource Integrity form, ``sha256-<base64>``.

Lenient mode (the default) keeps the historical behaviour of the job: any
character that is not a hex digit counts as zero and nothing is raised, so
a corrupt digest yields a wrong but well-formed SRI string. Strict mode
raises ConversionError instead.
"""

from __future__ import annotations

import base64
import string

from go_version_sync.errors import ConversionError

SRI_PREFIX = "sha256-"

_HEX_DIGITS = frozenset(string.hexdigits)
_HEX_BYTES = frozenset(string.hexdigits.encode("ascii"))


def _nibble(byte: int) -> int:
    if byte in _HEX_BYTES:
        return int(chr(byte), 16)
    return 0


def _lenient_bytes(hex_digest: str) -> bytes:
    # Pairs are taken over the UTF-8 bytes, so a multi-byte character counts
    # as several invalid digits. A trailing odd byte is dropped.
    raw = hex_digest.encode("utf-8", "surrogateescape")
    return bytes(
        (_nibble(raw[i * 2]) << 4) | _nibble(raw[i * 2 + 1])
        for i in range(len(raw) // 2)
    )


def _strict_bytes(hex_digest: str) -> bytes:
    if len(hex_digest) % 2:
        raise ConversionError(
            f"Hex digest has odd length {len(hex_digest)}: {hex_digest!r}"
        )
    bad = sorted(set(hex_digest) - _HEX_DIGITS)
    if bad:
        raise ConversionError(
            f"Hex digest contains non-hex characters {''.join(bad)!r}: {hex_digest!r}"
        )
    return bytes.fromhex(hex_digest)


def hex_to_base64(hex_digest: str, strict: bool = False) -> str:
    """Convert a hex digest to standard, padded base-64.

    Args:
        hex_digest: Hex string, two digits per byte, either case
        strict: Raise on malformed input instead of zero-filling

    Returns:
        The base-64 encoding of the decoded bytes

    Raises:
        ConversionError: In strict mode, if the input is not valid hex
    """
    raw = _strict_bytes(hex_digest) if strict else _lenient_bytes(hex_digest)
    return base64.b64encode(raw).decode("ascii")


def to_sri(hex_digest: str, strict: bool = False) -> str:
    """Return the ``sha256-<base64>`` integrity string for a hex digest."""
    return SRI_PREFIX + hex_to_base64(hex_digest, strict=strict)
