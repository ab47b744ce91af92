"""Near-duplicate lookup and clustering over Nilsimsa digests."""

from nilsimsa_lite.dedup.index import DEFAULT_MIN_SCORE, DigestIndex, Match

__all__ = [
    "DEFAULT_MIN_SCORE",
    "DigestIndex",
    "Match",
]
