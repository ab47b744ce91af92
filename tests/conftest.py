"""Shared fixtures and known-answer vectors for nilsimsa-lite tests."""
from __future__ import annotations

import random

SEED = 42

# (input, hex digest) pairs. The first 4 bytes of any input only fill
# the window, so these differ from digests produced by implementations
# that count partial-window trigrams.
KNOWN_DIGESTS = [
    (b"test string",
     "42c824184080082040001004000000084e1043b0c0925829003e844860410010"),
    (b"best strong",
     "004804ba008108024080000004000008481091b088921e21003e840a20011016"),
    (b"abcde",
     "0000008000000000000000000000000000000020001200000000001200000050"),
    (b"Dear Bill, Please be ready to receive the money.",
     "51613b08c286b8054e09847c51928935289e223b63308db6b1606b0883804264"),
    (b"Dear Mark, I hope you are okay.",
     "1d94dd17fb93907f2dbb52a5d7dddc268f15545be7da0f75efcb0f9df7cc65b3"),
]

ZERO_DIGEST = bytes(32)


def random_bytes(n: int, seed: int = SEED) -> bytes:
    """Deterministic pseudo-random bytes."""
    rng = random.Random(seed)
    return bytes(rng.getrandbits(8) for _ in range(n))


def perturb(data: bytes, flips: int, seed: int = SEED) -> bytes:
    """Replace `flips` distinct interior bytes with different values."""
    rng = random.Random(seed)
    out = bytearray(data)
    margin = len(data) // 4
    for pos in rng.sample(range(margin, len(data) - margin), flips):
        out[pos] ^= 0x5A
    return bytes(out)
