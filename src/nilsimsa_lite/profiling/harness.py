"""Profiling harness for the Nilsimsa pipeline.

Hashes a synthetic corpus (see load_generator) and times the three
stages separately:

  1. update()  -- streaming accumulation, fed in chunk_size pieces
  2. digest()  -- thresholding the histogram into 32 bytes
  3. compare() -- all-pairs scoring across originals and variants

Alongside timing it records a quality signal: the mean score between
each document and its own perturbed variant, against the mean score
between unrelated documents. A healthy locality-sensitive digest keeps
the first close to 128 and the second close to 0.
"""
from __future__ import annotations

import cProfile
import io
import logging
import pstats
import time
from dataclasses import dataclass

from nilsimsa_lite.core.accumulator import Nilsimsa
from nilsimsa_lite.core.comparator import compare
from nilsimsa_lite.profiling.load_generator import CorpusGenerator

log = logging.getLogger(__name__)


@dataclass(slots=True)
class BenchmarkResult:
    """Timing and quality results from a single benchmark run."""
    num_documents: int
    total_bytes: int
    update_time_ms: float
    digest_time_ms: float
    compare_time_ms: float
    total_time_ms: float
    bytes_per_sec: float
    comparisons: int
    mean_variant_score: float
    mean_unrelated_score: float
    cprofile_stats: str | None = None


def _chunks(data: bytes, size: int):
    for start in range(0, len(data), size):
        yield data[start:start + size]


def run_benchmark(
    num_documents: int = 50,
    document_size: int = 4096,
    mutations: int = 8,
    chunk_size: int = 1024,
    seed: int = 42,
    profile: bool = False,
) -> BenchmarkResult:
    """Run the hash-and-compare pipeline over a generated corpus.

    If profile=True, wraps the run in cProfile and includes the top
    functions by cumulative time in the result.
    """
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    corpus = CorpusGenerator(
        num_documents=num_documents,
        document_size=document_size,
        mutations=mutations,
        seed=seed,
    ).generate()
    inputs = [doc.original for doc in corpus] + [doc.variant for doc in corpus]

    update_ms = 0.0
    digest_ms = 0.0
    compare_ms = 0.0
    variant_scores: list[int] = []
    unrelated_scores: list[int] = []

    def _run():
        nonlocal update_ms, digest_ms, compare_ms
        digests: list[bytes] = []
        for data in inputs:
            # 1. streaming accumulation
            t0 = time.perf_counter()
            hasher = Nilsimsa()
            for chunk in _chunks(data, chunk_size):
                hasher.update(chunk)
            update_ms += (time.perf_counter() - t0) * 1000

            # 2. finalization
            t0 = time.perf_counter()
            digests.append(hasher.digest())
            digest_ms += (time.perf_counter() - t0) * 1000

        # 3. scoring: originals are [0, n), variants are [n, 2n)
        n = len(corpus)
        t0 = time.perf_counter()
        for i in range(n):
            variant_scores.append(compare(digests[i], digests[n + i]))
            for j in range(i + 1, n):
                unrelated_scores.append(compare(digests[i], digests[j]))
        compare_ms += (time.perf_counter() - t0) * 1000

    cprofile_text = None
    t_total_start = time.perf_counter()
    if profile:
        pr = cProfile.Profile()
        pr.enable()
        _run()
        pr.disable()
        s = io.StringIO()
        ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
        ps.print_stats(30)
        cprofile_text = s.getvalue()
    else:
        _run()
    total_ms = (time.perf_counter() - t_total_start) * 1000

    total_bytes = sum(len(data) for data in inputs)
    hash_seconds = (update_ms + digest_ms) / 1000
    bps = total_bytes / hash_seconds if hash_seconds > 0 else 0.0

    def _mean(values: list[int]) -> float:
        return sum(values) / len(values) if values else 0.0

    result = BenchmarkResult(
        num_documents=num_documents,
        total_bytes=total_bytes,
        update_time_ms=update_ms,
        digest_time_ms=digest_ms,
        compare_time_ms=compare_ms,
        total_time_ms=total_ms,
        bytes_per_sec=bps,
        comparisons=len(variant_scores) + len(unrelated_scores),
        mean_variant_score=_mean(variant_scores),
        mean_unrelated_score=_mean(unrelated_scores),
        cprofile_stats=cprofile_text,
    )
    log.info(
        "benchmark: %d documents, %.1f ms total, %.0f bytes/sec",
        num_documents, total_ms, bps,
    )
    return result
