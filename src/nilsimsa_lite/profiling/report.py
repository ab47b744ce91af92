"""Report generation for benchmark results.

Formats BenchmarkResult data into human-readable tables for terminal
output.
"""
from __future__ import annotations

from nilsimsa_lite.profiling.harness import BenchmarkResult


def _share(part: float, total: float) -> str:
    if total <= 0:
        return "n/a"
    return f"{part / total * 100:.1f}%"


def format_report(result: BenchmarkResult, label: str = "Nilsimsa") -> str:
    """Format a BenchmarkResult as a readable report string."""
    lines = [
        f"=== {label} ===",
        f"Documents:         {result.num_documents:,} (+ {result.num_documents:,} variants)",
        f"Bytes hashed:      {result.total_bytes:,}",
        f"Total time:        {result.total_time_ms:.1f} ms",
        f"Throughput:        {result.bytes_per_sec:,.0f} bytes/sec",
        "",
        "Breakdown:",
        f"  update():        {result.update_time_ms:.1f} ms "
        f"({_share(result.update_time_ms, result.total_time_ms)})",
        f"  digest():        {result.digest_time_ms:.1f} ms "
        f"({_share(result.digest_time_ms, result.total_time_ms)})",
        f"  compare():       {result.compare_time_ms:.1f} ms "
        f"({_share(result.compare_time_ms, result.total_time_ms)})",
        f"  Comparisons:     {result.comparisons:,}",
        "",
        "Quality:",
        f"  Variant score:   {result.mean_variant_score:.1f} (mean, max 128)",
        f"  Unrelated score: {result.mean_unrelated_score:.1f} (mean)",
    ]
    return "\n".join(lines)
