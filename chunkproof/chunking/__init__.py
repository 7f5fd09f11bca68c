"""
Chunk Hashing

Turns a byte source into an ordered sequence of fixed-size chunk digests
(the leaves of the Merkle tree).
"""
from .chunk_hasher import (
    DEFAULT_CHUNK_SIZE,
    CHUNK_SIZE_4MIB,
    validate_chunk_size,
    ChunkBuffer,
    iter_chunk_digests,
    aiter_chunk_digests,
    hash_chunks,
    hash_file_chunks,
    ahash_chunks,
    ChunkHasher,
)

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "CHUNK_SIZE_4MIB",
    "validate_chunk_size",
    "ChunkBuffer",
    "iter_chunk_digests",
    "aiter_chunk_digests",
    "hash_chunks",
    "hash_file_chunks",
    "ahash_chunks",
    "ChunkHasher",
]
