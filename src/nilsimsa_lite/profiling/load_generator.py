"""Synthetic document corpus for profiling and quality checks.

Corpus shape:
  - num_documents documents of document_size bytes each
  - text drawn from a fixed vocabulary with Zipf-like word weights,
    so documents look like prose rather than uniform noise
  - every document has a variant with `mutations` interior bytes
    replaced by random lowercase letters

Generation is seeded, so the same arguments always give the same
corpus. The harness uses the (document, variant) pairs to measure how
well scores separate near-duplicates from unrelated documents.
"""
from __future__ import annotations

import random
import string
from dataclasses import dataclass

_VOCABULARY = [
    "the", "of", "and", "to", "in", "is", "that", "for", "it", "as",
    "with", "was", "on", "be", "by", "this", "are", "from", "at", "or",
    "message", "account", "offer", "payment", "please", "confirm", "free",
    "invoice", "delivery", "update", "password", "security", "service",
    "customer", "order", "shipping", "report", "meeting", "schedule",
    "attached", "download", "verify", "limited", "discount", "request",
    "network", "server", "archive", "package", "release", "budget",
]
_PUNCTUATION = [".", ",", ";", "\n"]


@dataclass(slots=True)
class CorpusDocument:
    """A generated document and its perturbed near-duplicate."""
    doc_id: int
    original: bytes
    variant: bytes


class CorpusGenerator:
    """Generate a reproducible corpus of documents and variants."""

    __slots__ = (
        "_rng", "_num_documents", "_document_size", "_mutations",
        "_zipf_weights",
    )

    def __init__(
        self,
        num_documents: int = 50,
        document_size: int = 4096,
        mutations: int = 8,
        seed: int = 42,
    ) -> None:
        if num_documents < 1:
            raise ValueError(f"num_documents must be positive, got {num_documents}")
        if document_size < 16:
            raise ValueError(f"document_size must be >= 16, got {document_size}")
        if not (0 <= mutations <= document_size // 2):
            raise ValueError(
                f"mutations must be in [0, {document_size // 2}], got {mutations}"
            )
        self._rng = random.Random(seed)
        self._num_documents = num_documents
        self._document_size = document_size
        self._mutations = mutations
        # word i has weight 1/(i+1)
        self._zipf_weights = [1.0 / (i + 1) for i in range(len(_VOCABULARY))]

    @property
    def document_size(self) -> int:
        return self._document_size

    def _document(self) -> bytes:
        parts: list[str] = []
        size = 0
        while size <= self._document_size:
            word = self._rng.choices(_VOCABULARY, weights=self._zipf_weights, k=1)[0]
            if self._rng.random() < 0.1:
                word += self._rng.choice(_PUNCTUATION)
            parts.append(word)
            size += len(word) + 1
        return " ".join(parts).encode("ascii")[: self._document_size]

    def _mutate(self, doc: bytes) -> bytes:
        """Replace `mutations` distinct interior bytes, keeping the ends intact."""
        out = bytearray(doc)
        margin = len(doc) // 8
        positions = self._rng.sample(range(margin, len(doc) - margin), self._mutations)
        for pos in positions:
            replacement = ord(self._rng.choice(string.ascii_lowercase))
            if replacement == out[pos]:
                replacement = ord("z") if out[pos] != ord("z") else ord("q")
            out[pos] = replacement
        return bytes(out)

    def generate(self) -> list[CorpusDocument]:
        """Generate all documents as a list."""
        corpus = []
        for doc_id in range(self._num_documents):
            original = self._document()
            corpus.append(CorpusDocument(
                doc_id=doc_id,
                original=original,
                variant=self._mutate(original),
            ))
        return corpus
