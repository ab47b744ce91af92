"""Similarity scoring between two Nilsimsa digests.

The score is 128 minus the Hamming distance between the two 256-bit
digests, so it runs from 128 (bit-identical) down to -128 (every bit
differs). Two digests of unrelated inputs land near 0, because about
half their bits agree by chance.

Digests are compared as raw 32-byte values. Anything of a different
width is caller misuse and raises LengthMismatch rather than being
padded or truncated.
"""
from __future__ import annotations

from nilsimsa_lite.core.tables import DIGEST_SIZE, MAX_SCORE


class LengthMismatch(ValueError):
    """Raised when a digest is not exactly DIGEST_SIZE bytes."""

    def __init__(self, argument: str, length: int) -> None:
        self.argument = argument
        self.length = length
        super().__init__(
            f"{argument} must be {DIGEST_SIZE} bytes, got {length}"
        )


def _check(digest: bytes, argument: str) -> bytes:
    raw = memoryview(digest).tobytes()
    if len(raw) != DIGEST_SIZE:
        raise LengthMismatch(argument, len(raw))
    return raw


def hamming_distance(digest_a: bytes, digest_b: bytes) -> int:
    """Number of bit positions where the two digests differ (0..256)."""
    a = int.from_bytes(_check(digest_a, "digest_a"), "big")
    b = int.from_bytes(_check(digest_b, "digest_b"), "big")
    return bin(a ^ b).count("1")


def compare(digest_a: bytes, digest_b: bytes) -> int:
    """Score two digests in [-128, 128]; 128 means identical.

    Symmetric in its arguments. Raises LengthMismatch if either digest
    is not 32 bytes.
    """
    return MAX_SCORE - hamming_distance(digest_a, digest_b)


def compare_hexdigests(hex_a: str, hex_b: str) -> int:
    """Score two hex-encoded digests.

    Malformed hex raises ValueError; well-formed hex of the wrong width
    raises LengthMismatch.
    """
    return compare(bytes.fromhex(hex_a), bytes.fromhex(hex_b))
