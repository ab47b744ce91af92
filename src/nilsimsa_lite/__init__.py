"""nilsimsa-lite: locality-sensitive Nilsimsa digests in pure Python.

    from nilsimsa_lite import Nilsimsa, compare

    h = Nilsimsa()
    h.update(b"some input")
    score = compare(h.digest(), other_digest)
"""
from nilsimsa_lite.core import (
    DIGEST_SIZE,
    MAX_SCORE,
    MIN_SCORE,
    LengthMismatch,
    Nilsimsa,
    compare,
    compare_hexdigests,
    hamming_distance,
    nilsimsa_digest,
    nilsimsa_hexdigest,
)

__version__ = "0.1.0"

__all__ = [
    "DIGEST_SIZE",
    "MAX_SCORE",
    "MIN_SCORE",
    "LengthMismatch",
    "Nilsimsa",
    "compare",
    "compare_hexdigests",
    "hamming_distance",
    "nilsimsa_digest",
    "nilsimsa_hexdigest",
]
