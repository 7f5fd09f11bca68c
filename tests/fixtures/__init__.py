"""
Test fixtures package for chunkproof tests.

Provides factory functions for byte sources and digests.

Usage:
    from fixtures import make_bytes, TrickleReader

    def test_something():
        reader = TrickleReader(make_bytes(100), step=7)
"""

from .common import (
    make_bytes,
    sha256_hex,
    expected_chunk_digests,
    make_leaf,
    split_blocks,
    TrickleReader,
    FailingReader,
    AsyncTrickleReader,
    async_blocks,
)

__all__ = [
    "make_bytes",
    "sha256_hex",
    "expected_chunk_digests",
    "make_leaf",
    "split_blocks",
    "TrickleReader",
    "FailingReader",
    "AsyncTrickleReader",
    "async_blocks",
]
