"""Benchmark harness and synthetic corpus for nilsimsa-lite."""

from nilsimsa_lite.profiling.harness import BenchmarkResult, run_benchmark
from nilsimsa_lite.profiling.load_generator import CorpusDocument, CorpusGenerator
from nilsimsa_lite.profiling.report import format_report

__all__ = [
    "BenchmarkResult",
    "CorpusDocument",
    "CorpusGenerator",
    "format_report",
    "run_benchmark",
]
