"""
chunkproof

Content fingerprints for byte streams: fixed-size chunk digests reduced
to a single SHA-256 Merkle root.

Usage:
    from chunkproof import hash_file_chunks, build_merkle_root

    leaves = list(hash_file_chunks("blob.bin", chunk_size=CHUNK_SIZE_4MIB))
    root = build_merkle_root(leaves)
"""

__version__ = "0.1.0"

from chunkproof.chunking import (
    CHUNK_SIZE_4MIB,
    DEFAULT_CHUNK_SIZE,
    ChunkHasher,
    ahash_chunks,
    hash_chunks,
    hash_file_chunks,
)
from chunkproof.crypto import (
    Digest,
    hash_file,
    hash_stream,
    normalize_hex_digest,
)
from chunkproof.merkle import (
    MerkleTreeBuilder,
    build_merkle_root,
    compute_tree_depth,
)
from chunkproof.pipeline import (
    afingerprint_source,
    fingerprint_file,
    fingerprint_source,
)
from chunkproof.schemas import (
    ChunkproofException,
    DigestFormatException,
    FingerprintResult,
    InvalidArgumentException,
    SourceUnavailableException,
)

__all__ = [
    # Chunk hashing
    "DEFAULT_CHUNK_SIZE",
    "CHUNK_SIZE_4MIB",
    "ChunkHasher",
    "hash_chunks",
    "hash_file_chunks",
    "ahash_chunks",
    # Digests
    "Digest",
    "normalize_hex_digest",
    "hash_stream",
    "hash_file",
    # Merkle reduction
    "MerkleTreeBuilder",
    "build_merkle_root",
    "compute_tree_depth",
    # Pipeline
    "fingerprint_source",
    "fingerprint_file",
    "afingerprint_source",
    "FingerprintResult",
    # Errors
    "ChunkproofException",
    "InvalidArgumentException",
    "DigestFormatException",
    "SourceUnavailableException",
]
