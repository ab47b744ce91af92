"""File and stream input for the Nilsimsa accumulator."""

from nilsimsa_lite.streams.reader import (
    DEFAULT_CHUNK_SIZE,
    ScanConfig,
    hash_file,
    hash_stream,
    scan_paths,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "ScanConfig",
    "hash_file",
    "hash_stream",
    "scan_paths",
]
