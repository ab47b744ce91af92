"""Feed files and binary streams through the Nilsimsa accumulator.

Reads are chunked so arbitrarily large inputs never sit in memory at
once. The accumulator carries its window across update() calls, so
the chunk size has no effect on the resulting digest.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Iterator

from nilsimsa_lite.core.accumulator import Nilsimsa

log = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(slots=True, frozen=True)
class ScanConfig:
    """Options for scan_paths().

    Attributes:
        chunk_size: bytes per read() call
        recursive: descend into directories (otherwise they are skipped)
        skip_unreadable: log and continue on OSError instead of raising
        min_size: ignore files smaller than this many bytes
    """
    chunk_size: int = DEFAULT_CHUNK_SIZE
    recursive: bool = False
    skip_unreadable: bool = False
    min_size: int = 0

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.min_size < 0:
            raise ValueError(f"min_size must be >= 0, got {self.min_size}")


def hash_stream(stream: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Nilsimsa:
    """Consume a binary stream to EOF and return the filled accumulator."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be positive, got {chunk_size}")
    hasher = Nilsimsa()
    while True:
        chunk = stream.read(chunk_size)
        if not chunk:
            break
        hasher.update(chunk)
    return hasher


def hash_file(path: str | os.PathLike, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Nilsimsa:
    """Hash the contents of a file."""
    with open(path, "rb") as fh:
        hasher = hash_stream(fh, chunk_size)
    log.debug("hashed %s (%d bytes)", path, hasher.num_bytes)
    return hasher


def _iter_files(paths: Iterable[str], recursive: bool) -> Iterator[str]:
    for path in paths:
        if os.path.isdir(path):
            if not recursive:
                log.info("skipping directory %s (not recursive)", path)
                continue
            for root, dirs, files in os.walk(path):
                dirs.sort()
                for name in sorted(files):
                    yield os.path.join(root, name)
        else:
            yield path


def scan_paths(
    paths: Iterable[str],
    config: ScanConfig | None = None,
) -> Iterator[tuple[str, bytes]]:
    """Yield (path, digest) for every file reachable from paths.

    Directories are walked only when config.recursive is set. Files
    smaller than config.min_size are skipped. An OSError either
    propagates or, with skip_unreadable, is logged and the file skipped.
    """
    config = config or ScanConfig()
    for path in _iter_files(paths, config.recursive):
        try:
            if config.min_size and os.path.getsize(path) < config.min_size:
                log.debug("skipping %s (below min_size)", path)
                continue
            hasher = hash_file(path, config.chunk_size)
        except OSError as exc:
            if not config.skip_unreadable:
                raise
            log.warning("skipping unreadable file %s: %s", path, exc)
            continue
        yield path, hasher.digest()
