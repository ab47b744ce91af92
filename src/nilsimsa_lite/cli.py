"""nilsimsa-lite CLI entry point.

Usage: uv run nilsimsa-lite [command]
"""
import argparse
import logging
import sys

from nilsimsa_lite.core.comparator import compare_hexdigests
from nilsimsa_lite.dedup.index import DEFAULT_MIN_SCORE, DigestIndex
from nilsimsa_lite.streams.reader import (
    DEFAULT_CHUNK_SIZE,
    ScanConfig,
    hash_stream,
    scan_paths,
)

log = logging.getLogger(__name__)

EXIT_IO_ERROR = 1
EXIT_USAGE = 2


def _add_scan_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-r", "--recursive", action="store_true",
        help="Descend into directories.",
    )
    p.add_argument(
        "--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes per read (default: {DEFAULT_CHUNK_SIZE})",
    )
    p.add_argument(
        "--skip-unreadable", action="store_true",
        help="Warn and continue when a file cannot be read.",
    )


def _add_digest_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "digest",
        help="Print the Nilsimsa digest of files (or stdin).",
    )
    p.add_argument("paths", nargs="*", help="Files to hash; '-' or none reads stdin.")
    _add_scan_options(p)


def _add_compare_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "compare",
        help="Score two hex digests (-128..128).",
    )
    p.add_argument("digest_a")
    p.add_argument("digest_b")


def _add_cluster_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "cluster",
        help="Group near-duplicate files.",
    )
    p.add_argument("paths", nargs="+")
    p.add_argument(
        "--min-score", type=int, default=DEFAULT_MIN_SCORE,
        help=f"Minimum score to link two files (default: {DEFAULT_MIN_SCORE})",
    )
    _add_scan_options(p)


def _add_profile_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "profile",
        help="Benchmark hashing and comparison on a synthetic corpus.",
    )
    p.add_argument(
        "--documents", type=int, default=50,
        help="Number of documents to generate (default: 50)",
    )
    p.add_argument(
        "--size", type=int, default=4096,
        help="Bytes per document (default: 4096)",
    )
    p.add_argument(
        "--mutations", type=int, default=8,
        help="Bytes changed in each near-duplicate variant (default: 8)",
    )
    p.add_argument(
        "--chunk-size", type=int, default=1024,
        help="Bytes per update() call (default: 1024)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )
    p.add_argument(
        "--cprofile", action="store_true",
        help="Enable cProfile and print top functions by cumulative time.",
    )


def _scan_config(args: argparse.Namespace) -> ScanConfig:
    return ScanConfig(
        chunk_size=args.chunk_size,
        recursive=args.recursive,
        skip_unreadable=args.skip_unreadable,
    )


def _run_digest(args: argparse.Namespace) -> None:
    config = _scan_config(args)
    paths = args.paths or ["-"]
    for path in paths:
        if path == "-":
            hasher = hash_stream(sys.stdin.buffer, config.chunk_size)
            print(f"{hasher.hexdigest()}  -")
            continue
        for name, digest in scan_paths([path], config):
            print(f"{digest.hex()}  {name}")


def _run_compare(args: argparse.Namespace) -> None:
    print(compare_hexdigests(args.digest_a, args.digest_b))


def _run_cluster(args: argparse.Namespace) -> None:
    index = DigestIndex()
    for name, digest in scan_paths(args.paths, _scan_config(args)):
        if name in index:
            log.info("ignoring repeated path %s", name)
            continue
        index.add(name, digest)

    groups = [g for g in index.clusters(args.min_score) if len(g) > 1]
    for n, group in enumerate(groups, start=1):
        print(f"# cluster {n} ({len(group)} files)")
        for name in group:
            print(name)
    log.info("%d files, %d near-duplicate clusters", len(index), len(groups))


def _run_profile(args: argparse.Namespace) -> None:
    from nilsimsa_lite.profiling.harness import run_benchmark
    from nilsimsa_lite.profiling.report import format_report

    result = run_benchmark(
        num_documents=args.documents,
        document_size=args.size,
        mutations=args.mutations,
        chunk_size=args.chunk_size,
        seed=args.seed,
        profile=args.cprofile,
    )
    print(format_report(result))
    if result.cprofile_stats:
        print()
        print("--- cProfile top functions ---")
        print(result.cprofile_stats)


_COMMANDS = {
    "digest": _run_digest,
    "compare": _run_compare,
    "cluster": _run_cluster,
    "profile": _run_profile,
}


def _configure_logging(verbosity: int) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="nilsimsa-lite",
        description="Locality-sensitive Nilsimsa digests -- pure Python.",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase log output (-v info, -vv debug).",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_digest_parser(subparsers)
    _add_compare_parser(subparsers)
    _add_cluster_parser(subparsers)
    _add_profile_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)
    try:
        _COMMANDS[args.command](args)
    except ValueError as exc:
        # LengthMismatch is a ValueError
        print(f"nilsimsa-lite: error: {exc}", file=sys.stderr)
        sys.exit(EXIT_USAGE)
    except OSError as exc:
        print(f"nilsimsa-lite: error: {exc}", file=sys.stderr)
        sys.exit(EXIT_IO_ERROR)
