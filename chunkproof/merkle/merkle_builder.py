"""
Merkle Tree Builder
Thin class wrapper around the reduction functions in merkle_tree.py.
"""
from __future__ import annotations

from typing import Sequence

from chunkproof.crypto.digest import Digest
from chunkproof.merkle.merkle_tree import build_merkle_root, compute_tree_depth


class MerkleTreeBuilder:
    """
    Stateless builder reducing leaf digests to a Merkle root.

    Each call is an independent reduction; nothing is cached between calls.

    Example:
        >>> leaves = list(hash_chunks(open("blob.bin", "rb")))  # doctest: +SKIP
        >>> MerkleTreeBuilder.build_root(leaves)  # doctest: +SKIP
        '...'
    """

    @staticmethod
    def build_root(leaves: Sequence[str | Digest]) -> str:
        """Merkle root as canonical hex."""
        return build_merkle_root(leaves)

    @staticmethod
    def build_root_digest(leaves: Sequence[str | Digest]) -> Digest:
        """Merkle root as a Digest value."""
        return Digest.from_hex(build_merkle_root(leaves))

    @staticmethod
    def depth(leaves: Sequence[str | Digest]) -> int:
        """Number of levels the reduction of these leaves passes through."""
        return compute_tree_depth(len(leaves))


__all__ = [
    "MerkleTreeBuilder",
]
