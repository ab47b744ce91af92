"""Streaming Nilsimsa accumulator.

Nilsimsa is a locality-sensitive digest: two inputs that share most of
their content produce digests that differ in only a few bits. It gets
there by counting byte trigrams rather than mixing every bit of input
into every bit of output the way SHA-256 does.

The accumulator keeps two pieces of state:

  - a histogram of 256 counters (one per digest bit)
  - a window of the 4 most recent bytes, newest first

For every incoming byte c, once 4 earlier bytes are in the window, we
form 8 trigrams from c and pairs of window bytes, push each through the
TRAN substitution table to get a bin index, and bump that bin. Then c
slides into the window and the oldest byte falls out. The first 4 bytes
of any stream only fill the window; they never touch the histogram, so
after N bytes the histogram holds exactly 8 * max(0, N - 4) increments.

The digest thresholds the histogram at its mean: a bin's bit is set iff
its count is strictly above total // 256. Small edits to the input move
a handful of counts by one or two, which flips only the few bins that
were sitting right on the threshold.

The window lives on the instance, not in a buffered copy of the input,
so a stream can be fed in chunks of any size and the result is the same
as one update() with the concatenated bytes.

References:
    Damiani et al., "An Open Digest-based Technique for Spam Detection", 2004.
"""
from __future__ import annotations

import array

from nilsimsa_lite.core.tables import (
    DIGEST_SIZE,
    NUM_BINS,
    TRAN,
    TRIGRAMS_PER_BYTE,
    WINDOW_SIZE,
)

BytesLike = bytes | bytearray | memoryview


def _tran3(a: int, b: int, c: int, n: int) -> int:
    """Diffuse the trigram (a, b, c) with rule offset n into a bin index."""
    return (
        (TRAN[(a + n) & 0xFF] ^ ((TRAN[b] * (n + n + 1)) & 0xFF))
        + TRAN[c ^ TRAN[n]]
    ) & 0xFF


def trigram_bins(c: int, w0: int, w1: int, w2: int, w3: int) -> tuple[int, ...]:
    """Return the 8 bin indices for byte c given a full window.

    w0 is the most recent prior byte, w3 the oldest. Each rule pairs c
    with two distinct window bytes and its own offset.
    """
    return (
        _tran3(c, w0, w1, 0),
        _tran3(c, w0, w2, 1),
        _tran3(c, w1, w2, 2),
        _tran3(c, w0, w3, 3),
        _tran3(c, w1, w3, 4),
        _tran3(c, w2, w3, 5),
        _tran3(w3, w0, c, 6),
        _tran3(w3, w2, c, 7),
    )


def _as_view(data: BytesLike | str) -> memoryview:
    if isinstance(data, str):
        return memoryview(data.encode("utf-8"))
    try:
        view = memoryview(data)
    except TypeError:
        raise TypeError(
            f"update() expects bytes-like or str, got {type(data).__name__}"
        ) from None
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


class Nilsimsa:
    """Streaming Nilsimsa hasher.

    Usage mirrors hashlib: create, feed bytes with update() as often as
    needed, read digest() or hexdigest() at any point. Reading a digest
    does not consume or reset the accumulator.

    Not thread-safe for a single instance. Separate instances share no
    mutable state.
    """

    __slots__ = ("_counts", "_window", "_num_bytes")

    def __init__(self) -> None:
        # uint64 cells: a bin that would pass 2**64 - 1 raises OverflowError
        self._counts = array.array("Q", [0]) * NUM_BINS
        self._window = bytearray(WINDOW_SIZE)
        self._num_bytes = 0

    @property
    def num_bytes(self) -> int:
        """Number of input bytes consumed so far."""
        return self._num_bytes

    @property
    def total_count(self) -> int:
        """Sum of all histogram counts."""
        return sum(self._counts)

    def histogram(self) -> tuple[int, ...]:
        """Snapshot of the 256 bin counts."""
        return tuple(self._counts)

    def update(self, data: BytesLike | str) -> None:
        """Feed more input. Strings are hashed as their UTF-8 bytes."""
        view = _as_view(data)
        if not len(view):
            return

        counts = self._counts
        w0, w1, w2, w3 = self._window
        seen = self._num_bytes

        for c in view:
            if seen >= WINDOW_SIZE:
                for idx in trigram_bins(c, w0, w1, w2, w3):
                    counts[idx] += 1
            w3, w2, w1, w0 = w2, w1, w0, c
            seen += 1

        self._window[:] = bytes((w0, w1, w2, w3))
        self._num_bytes = seen

    def digest(self) -> bytes:
        """Return the 32-byte digest of everything consumed so far.

        Bin i sets bit (i & 7) of byte (i >> 3), then the byte order is
        reversed, so bin 0 is the low bit of the last byte.
        """
        threshold = sum(self._counts) // NUM_BINS
        out = bytearray(DIGEST_SIZE)
        for i, count in enumerate(self._counts):
            if count > threshold:
                out[i >> 3] |= 1 << (i & 7)
        out.reverse()
        return bytes(out)

    def hexdigest(self) -> str:
        """Return the digest as 64 lowercase hex characters."""
        return self.digest().hex()

    def copy(self) -> Nilsimsa:
        """Return an independent accumulator with the same state."""
        other = Nilsimsa.__new__(Nilsimsa)
        other._counts = array.array("Q", self._counts)
        other._window = bytearray(self._window)
        other._num_bytes = self._num_bytes
        return other

    def __repr__(self) -> str:
        return (
            f"Nilsimsa(num_bytes={self._num_bytes}, "
            f"total_count={self.total_count})"
        )


def expected_total(num_bytes: int) -> int:
    """Histogram total after num_bytes of input."""
    return TRIGRAMS_PER_BYTE * max(0, num_bytes - WINDOW_SIZE)


def nilsimsa_digest(data: BytesLike | str) -> bytes:
    """One-shot digest of a single buffer."""
    h = Nilsimsa()
    h.update(data)
    return h.digest()


def nilsimsa_hexdigest(data: BytesLike | str) -> str:
    """One-shot hex digest of a single buffer."""
    h = Nilsimsa()
    h.update(data)
    return h.hexdigest()
