"""
Fingerprint Pipeline

Runs the two stages in sequence:
1. Chunk hashing: byte source -> ordered leaf digests (run to completion)
2. Merkle reduction: leaf digests -> root digest

The full leaf sequence is collected before reduction starts.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from chunkproof.chunking.chunk_hasher import (
    ChunkBuffer,
    aiter_chunk_digests,
    iter_chunk_digests,
    validate_chunk_size,
)
from chunkproof.config.runtime import get_default_config
from chunkproof.merkle.merkle_tree import build_merkle_root, compute_tree_depth
from chunkproof.schemas.errors import InvalidArgumentException
from chunkproof.schemas.fingerprint import FingerprintResult
from chunkproof.sources import open_file


logger = logging.getLogger(__name__)


def _resolve_chunk_size(chunk_size: Optional[int]) -> int:
    if chunk_size is None:
        return get_default_config().chunk_size
    return validate_chunk_size(chunk_size)


def _build_result(leaves: list[str], buffer: ChunkBuffer, label: str) -> FingerprintResult:
    byte_count = buffer.byte_count
    if not leaves:
        raise InvalidArgumentException(
            f"Source {label} is empty; an empty leaf sequence has no Merkle root",
            argument="source",
            details={"byte_count": byte_count},
        )

    root = build_merkle_root(leaves)
    result = FingerprintResult(
        merkle_root=root,
        leaves=leaves,
        chunk_size=buffer.chunk_size,
        byte_count=byte_count,
        tree_depth=compute_tree_depth(len(leaves)),
    )
    logger.info(
        f"Fingerprinted {label}: {byte_count} bytes, {len(leaves)} chunks, root={root}"
    )
    return result


def fingerprint_source(source: Any, chunk_size: Optional[int] = None) -> FingerprintResult:
    """
    Compute the chunk digests and Merkle root of a byte source.

    Args:
        source: Readable binary object, bytes-like buffer, or iterable of blocks
        chunk_size: Chunk size in bytes (None uses the configured default)

    Returns:
        FingerprintResult with root, leaves and counts

    Raises:
        InvalidArgumentException: If chunk_size is invalid or the source is empty
        SourceUnavailableException: If reading the source fails
    """
    buffer = ChunkBuffer(_resolve_chunk_size(chunk_size))
    leaves = list(iter_chunk_digests(source, buffer))
    return _build_result(leaves, buffer, type(source).__name__)


def fingerprint_file(path: str | Path, chunk_size: Optional[int] = None) -> FingerprintResult:
    """
    Compute the chunk digests and Merkle root of a file.

    Raises:
        InvalidArgumentException: If chunk_size is invalid or the file is empty
        SourceUnavailableException: If the file cannot be opened or read
    """
    buffer = ChunkBuffer(_resolve_chunk_size(chunk_size))
    with open_file(path) as handle:
        leaves = list(iter_chunk_digests(handle, buffer))
    return _build_result(leaves, buffer, str(path))


async def afingerprint_source(source: Any, chunk_size: Optional[int] = None) -> FingerprintResult:
    """
    Async counterpart of fingerprint_source().

    Args:
        source: Object with an awaitable ``read(n)`` or an async iterable of blocks
        chunk_size: Chunk size in bytes (None uses the configured default)
    """
    buffer = ChunkBuffer(_resolve_chunk_size(chunk_size))
    leaves = [digest async for digest in aiter_chunk_digests(source, buffer)]
    return _build_result(leaves, buffer, type(source).__name__)


__all__ = [
    "fingerprint_source",
    "fingerprint_file",
    "afingerprint_source",
]
