"""Nilsimsa core -- streaming accumulator, digest, and comparison.

Public API:
    Nilsimsa: streaming accumulator (update / digest / hexdigest / copy)
    nilsimsa_digest, nilsimsa_hexdigest: one-shot helpers
    compare, compare_hexdigests, hamming_distance: digest scoring
    LengthMismatch: digest of the wrong width
"""

from nilsimsa_lite.core.accumulator import (
    Nilsimsa,
    expected_total,
    nilsimsa_digest,
    nilsimsa_hexdigest,
    trigram_bins,
)
from nilsimsa_lite.core.comparator import (
    LengthMismatch,
    compare,
    compare_hexdigests,
    hamming_distance,
)
from nilsimsa_lite.core.tables import (
    DIGEST_SIZE,
    MAX_SCORE,
    MIN_SCORE,
    NUM_BINS,
    TRAN,
    WINDOW_SIZE,
)

__all__ = [
    "DIGEST_SIZE",
    "MAX_SCORE",
    "MIN_SCORE",
    "NUM_BINS",
    "TRAN",
    "WINDOW_SIZE",
    "LengthMismatch",
    "Nilsimsa",
    "compare",
    "compare_hexdigests",
    "expected_total",
    "hamming_distance",
    "nilsimsa_digest",
    "nilsimsa_hexdigest",
    "trigram_bins",
]
