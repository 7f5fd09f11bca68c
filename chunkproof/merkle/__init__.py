"""
Merkle Tree Reduction

Reduces an ordered sequence of leaf digests to a single Merkle root.

Commitment Rules:
1. Parent hashing: sha256(raw(left) + raw(right))
2. Padding: Duplicate last node if odd number at any level
3. Empty input: InvalidArgumentException
4. Single leaf: root = leaf

Usage:
    from chunkproof.chunking import hash_file_chunks
    from chunkproof.merkle import build_merkle_root

    leaves = list(hash_file_chunks("blob.bin"))
    root = build_merkle_root(leaves)
"""
from .merkle_tree import (
    merkle_parent,
    build_next_level,
    reduce_to_root,
    build_merkle_root,
    compute_tree_depth,
)

from .merkle_builder import (
    MerkleTreeBuilder,
)


__all__ = [
    # Core functions
    "merkle_parent",
    "build_next_level",
    "reduce_to_root",
    "build_merkle_root",
    "compute_tree_depth",
    # Convenience classes
    "MerkleTreeBuilder",
]
