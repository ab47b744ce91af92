"""Near-duplicate index over Nilsimsa digests.

Stores labelled digests and answers "which stored items look like this
one?" by scoring the query against every entry. That is a linear scan:
Nilsimsa scores are not a metric you can bucket cheaply the way SimHash
prefixes can, and at the sizes this index targets (thousands of files)
a scan of 32-byte compares is fast enough.

Clustering treats "score >= min_score" as an edge and returns the
connected components, found with a union-find over entry positions.
Note that the relation is not transitive: A~B and B~C puts A and C in
one cluster even when compare(A, C) is below the threshold.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator

from nilsimsa_lite.core.comparator import LengthMismatch, compare
from nilsimsa_lite.core.tables import DIGEST_SIZE

log = logging.getLogger(__name__)

DEFAULT_MIN_SCORE = 64


@dataclass(slots=True, frozen=True)
class Match:
    """A stored entry and its score against a query."""
    label: str
    score: int


class _DisjointSet:
    __slots__ = ("_parent",)

    def __init__(self, n: int) -> None:
        self._parent = list(range(n))

    def find(self, x: int) -> int:
        parent = self._parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]  # path halving
            x = parent[x]
        return x

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            # keep the smaller position as root so clusters order by insertion
            if rb < ra:
                ra, rb = rb, ra
            self._parent[rb] = ra


class DigestIndex:
    """In-memory collection of labelled digests.

    Labels are unique. Digests must be DIGEST_SIZE bytes; anything else
    raises LengthMismatch at add() time so bad data never reaches a
    comparison.
    """

    __slots__ = ("_labels", "_digests", "_positions")

    def __init__(self) -> None:
        self._labels: list[str] = []
        self._digests: list[bytes] = []
        self._positions: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._positions

    def add(self, label: str, digest: bytes) -> None:
        """Store a digest under a new label."""
        if label in self._positions:
            raise ValueError(f"Duplicate label: {label!r}")
        raw = memoryview(digest).tobytes()
        if len(raw) != DIGEST_SIZE:
            raise LengthMismatch("digest", len(raw))
        self._positions[label] = len(self._labels)
        self._labels.append(label)
        self._digests.append(raw)

    def get(self, label: str) -> bytes:
        """Return the digest stored under label (KeyError if absent)."""
        return self._digests[self._positions[label]]

    def query(self, digest: bytes, min_score: int = DEFAULT_MIN_SCORE) -> list[Match]:
        """All entries scoring >= min_score against digest, best first."""
        matches = [
            Match(label, score)
            for label, stored in zip(self._labels, self._digests)
            if (score := compare(digest, stored)) >= min_score
        ]
        matches.sort(key=lambda m: (-m.score, m.label))
        return matches

    def pairs(self, min_score: int = DEFAULT_MIN_SCORE) -> Iterator[tuple[str, str, int]]:
        """Yield (label_a, label_b, score) for every pair at or above min_score.

        label_a was added before label_b.
        """
        labels = self._labels
        digests = self._digests
        for i in range(len(digests)):
            for j in range(i + 1, len(digests)):
                score = compare(digests[i], digests[j])
                if score >= min_score:
                    yield labels[i], labels[j], score

    def clusters(self, min_score: int = DEFAULT_MIN_SCORE) -> list[list[str]]:
        """Group labels into connected components of the similarity graph.

        Singletons are included. Each cluster is sorted; clusters are
        ordered by the insertion position of their earliest member.
        """
        ds = _DisjointSet(len(self._labels))
        edges = 0
        for a, b, _ in self.pairs(min_score):
            ds.union(self._positions[a], self._positions[b])
            edges += 1

        groups: dict[int, list[str]] = {}
        for pos, label in enumerate(self._labels):
            groups.setdefault(ds.find(pos), []).append(label)

        result = [sorted(members) for _, members in sorted(groups.items())]
        log.debug(
            "clustered %d digests into %d groups (%d edges, min_score=%d)",
            len(self._labels), len(result), edges, min_score,
        )
        return result
