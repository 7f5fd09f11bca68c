"""
Merkle Tree Reduction
Deterministic reduction of an ordered leaf-digest sequence to a Merkle root.

This module provides:
- Parent hashing over raw child digests
- Level-by-level reduction with the duplicate-last padding rule
- Validated hex-in / hex-out root computation
- Tree depth computation

Commitment Rules (Hard Contracts):
1. Parent hashing: parent = sha256(raw(left) + raw(right))
   - Concatenation is over the decoded 32-byte digests, never hex text
2. Padding rule: Duplicate last node if odd number at any level
3. Empty leaves: rejected with InvalidArgumentException
4. Single leaf: root = leaf (no hashing)

Determinism Notes:
- No randomness or non-deterministic ordering
- Pairing is left-to-right by index; this module never sorts leaves
- The caller's sequence is snapshotted and never mutated
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from chunkproof.crypto.digest import Digest, decode_digest
from chunkproof.crypto.hashing import hash_concat
from chunkproof.schemas.errors import InvalidArgumentException


logger = logging.getLogger(__name__)


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    Args:
        left: Left child digest (raw bytes)
        right: Right child digest (raw bytes)

    Returns:
        Parent digest (32 bytes)
    """
    return hash_concat(left, right)


def build_next_level(level: Sequence[bytes]) -> list[bytes]:
    """
    Build the parent level from one level of raw digests.

    If the level has an odd number of nodes, the last node is paired
    with itself.

    Example: [a, b, c] -> [parent(a,b), parent(c,c)]
    """
    nodes = list(level)
    if len(nodes) % 2 == 1:
        nodes.append(nodes[-1])

    return [merkle_parent(nodes[i], nodes[i + 1]) for i in range(0, len(nodes), 2)]


def reduce_to_root(leaves: Sequence[bytes]) -> bytes:
    """
    Reduce raw leaf digests to a raw Merkle root.

    Inputs are assumed to be validated 32-byte digests; use
    build_merkle_root() for untrusted input.

    Raises:
        InvalidArgumentException: If leaves is empty
    """
    if len(leaves) == 0:
        raise InvalidArgumentException(
            "Cannot build a Merkle root from an empty leaf sequence",
            argument="leaves",
        )

    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        current_level = build_next_level(current_level)

    return current_level[0]


def _snapshot_leaves(leaves: Any) -> list[bytes]:
    """Validate and decode every leaf before any hashing happens."""
    if isinstance(leaves, (str, bytes, bytearray, memoryview)) or not isinstance(leaves, Sequence):
        raise InvalidArgumentException(
            f"Leaves must be an ordered sequence of digests, got {type(leaves).__name__}",
            argument="leaves",
        )

    if len(leaves) == 0:
        raise InvalidArgumentException(
            "Cannot build a Merkle root from an empty leaf sequence",
            argument="leaves",
        )

    raw_leaves: list[bytes] = []
    for index, leaf in enumerate(leaves):
        if isinstance(leaf, Digest):
            raw_leaves.append(leaf.raw)
        else:
            raw_leaves.append(decode_digest(leaf, index=index))
    return raw_leaves


def build_merkle_root(leaves: Sequence[str | Digest]) -> str:
    """
    Build a Merkle root from an ordered sequence of leaf digests.

    Algorithm:
    1. Validate: non-empty ordered sequence, every element a 32-byte digest
       (hex of any case, or Digest). Nothing is hashed if validation fails.
    2. If single leaf: return it unchanged (canonical lowercase)
    3. Otherwise, iteratively build levels:
       - If odd number of nodes, duplicate the last node
       - Pair adjacent nodes and compute parent hashes
       - Repeat until single root remains

    Args:
        leaves: Leaf digests. Order matters and is preserved.

    Returns:
        Merkle root as 64 lowercase hex characters

    Raises:
        InvalidArgumentException: If leaves is not a sequence, is empty,
            or holds an element that is neither a string nor a Digest
        DigestFormatException: If any element is not a valid hex digest

    Example:
        >>> build_merkle_root(["a" * 64, "b" * 64, "c" * 64])  # doctest: +SKIP
        '...'  # 64-character hex string
    """
    raw_leaves = _snapshot_leaves(leaves)

    if len(raw_leaves) == 1:
        return raw_leaves[0].hex()

    root = reduce_to_root(raw_leaves)
    logger.debug(f"Reduced {len(raw_leaves)} leaves to Merkle root {root.hex()}")
    return root.hex()


def compute_tree_depth(num_leaves: int) -> int:
    """
    Compute the depth of a Merkle tree with given number of leaves.

    Depth is the number of levels from leaves to root (inclusive).
    A single leaf has depth 1, two leaves have depth 2, etc.

    Args:
        num_leaves: Number of leaves in the tree

    Returns:
        Tree depth (0 for empty tree)
    """
    if num_leaves < 0:
        raise InvalidArgumentException(
            f"Leaf count must be non-negative, got {num_leaves}",
            argument="num_leaves",
        )
    if num_leaves == 0:
        return 0

    depth = 1
    n = num_leaves
    while n > 1:
        # Account for padding
        n = (n + 1) // 2
        depth += 1

    return depth


__all__ = [
    "merkle_parent",
    "build_next_level",
    "reduce_to_root",
    "build_merkle_root",
    "compute_tree_depth",
]
