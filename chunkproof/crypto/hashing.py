"""
Hashing Utilities
SHA-256 primitives for chunk leaves, Merkle parents and whole-stream digests.

This module provides:
- SHA-256 hashing for raw bytes
- Parent hashing over concatenated raw digests
- Single-pass hashing of an entire byte source or file

Determinism Notes:
- Always hash raw bytes exactly as given
- Parent hashing concatenates decoded digest bytes, never hex text
"""
from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any

from chunkproof.sources import DEFAULT_READ_SIZE, iter_blocks, open_file


logger = logging.getLogger(__name__)

# The single digest algorithm used throughout
HASH_ALGORITHM: str = "sha256"

# Digest length in bytes
DIGEST_SIZE: int = hashlib.sha256().digest_size


def new_hasher() -> "hashlib._Hash":
    """Create a fresh incremental SHA-256 hasher."""
    return hashlib.sha256()


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for computing Merkle parent hashes:
    parent = sha256(left + right)

    Args:
        left: Left child digest (32 raw bytes)
        right: Right child digest (32 raw bytes)

    Returns:
        32-byte SHA-256 digest of concatenation
    """
    return sha256(left + right)


def hash_stream(source: Any, read_size: int = DEFAULT_READ_SIZE) -> str:
    """
    Hash an entire byte source in a single pass.

    The source is consumed block by block; only one block is held at a time.
    An empty source hashes to sha256(b"").

    Args:
        source: Readable object, bytes-like buffer, or iterable of blocks
        read_size: Bytes requested per read

    Returns:
        64-character lowercase hex digest

    Raises:
        SourceUnavailableException: If reading fails
    """
    hasher = new_hasher()
    total = 0
    for block in iter_blocks(source, read_size):
        hasher.update(block)
        total += len(block)
    logger.debug(f"Hashed {total} bytes in a single pass")
    return hasher.hexdigest()


def hash_file(path: str | Path, read_size: int = DEFAULT_READ_SIZE) -> str:
    """
    Hash the full content of a file with SHA-256.

    Args:
        path: Path to the file
        read_size: Bytes requested per read

    Returns:
        64-character lowercase hex digest

    Raises:
        SourceUnavailableException: If the file cannot be opened or read
    """
    with open_file(path) as handle:
        return hash_stream(handle, read_size)


__all__ = [
    "HASH_ALGORITHM",
    "DIGEST_SIZE",
    "new_hasher",
    "sha256",
    "hash_concat",
    "hash_stream",
    "hash_file",
]
