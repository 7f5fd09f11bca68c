"""
Merkle Tree Unit Tests
Tests for chunkproof/merkle/merkle_tree.py

Covers:
1. Root determinism - same leaves -> same root across runs and copies
2. Padding correctness - odd leaf count uses "duplicate last" rule
3. Raw-byte concatenation - parents hash decoded bytes, not hex text
4. Single leaf - root equals leaf
5. Validation - empty, non-sequence and malformed input fail before hashing
"""
import hashlib

import pytest

from chunkproof.crypto.digest import Digest
from chunkproof.crypto.hashing import sha256
from chunkproof.merkle.merkle_tree import (
    merkle_parent,
    build_next_level,
    reduce_to_root,
    build_merkle_root,
    compute_tree_depth,
)
from chunkproof.merkle.merkle_builder import MerkleTreeBuilder
from chunkproof.schemas.errors import (
    DigestFormatException,
    ErrorCodes,
    InvalidArgumentException,
)
from fixtures.common import make_leaf


def raw(hex_digest: str) -> bytes:
    return bytes.fromhex(hex_digest)


def parent_hex(left: str, right: str) -> str:
    return hashlib.sha256(raw(left) + raw(right)).hexdigest()


class TestSingleLeaf:
    """Tests for single leaf tree behavior."""

    def test_single_leaf_root_equals_leaf(self):
        """Root of single-leaf tree equals the leaf itself."""
        leaf = make_leaf("single leaf")
        assert build_merkle_root([leaf]) == leaf

    def test_single_uppercase_leaf_is_canonicalized(self):
        """A single leaf is returned in canonical lowercase form."""
        leaf = make_leaf("upper")
        assert build_merkle_root([leaf.upper()]) == leaf

    def test_single_digest_value(self):
        """Digest values are accepted as leaves."""
        leaf = Digest.from_hex(make_leaf("digest"))
        assert build_merkle_root([leaf]) == leaf.hex


class TestRootDeterminism:
    """Tests for deterministic root computation."""

    def test_same_leaves_same_root(self):
        """Same leaves produce same root across multiple calls."""
        leaves = [make_leaf("a"), make_leaf("b"), make_leaf("c")]

        roots = [build_merkle_root(leaves) for _ in range(10)]

        assert all(r == roots[0] for r in roots)

    def test_copy_yields_same_root(self):
        """Reducing a fresh copy gives the same root and leaves the input untouched."""
        leaves = [make_leaf(f"leaf{i}") for i in range(6)]
        snapshot = list(leaves)

        assert build_merkle_root(leaves) == build_merkle_root(list(leaves))
        assert leaves == snapshot

    def test_tuple_input_accepted(self):
        """Any ordered sequence works, not just lists."""
        leaves = [make_leaf(f"leaf{i}") for i in range(4)]
        assert build_merkle_root(tuple(leaves)) == build_merkle_root(leaves)

    def test_later_mutation_does_not_affect_returned_root(self):
        """The returned root is a value, unaffected by later changes to the input."""
        leaves = [make_leaf("a"), make_leaf("b")]
        root = build_merkle_root(leaves)
        leaves.append(make_leaf("c"))

        assert root == parent_hex(make_leaf("a"), make_leaf("b"))

    def test_leaf_order_matters(self):
        """Different leaf ordering produces different roots."""
        leaves1 = [make_leaf("a"), make_leaf("b"), make_leaf("c")]
        leaves2 = [make_leaf("c"), make_leaf("b"), make_leaf("a")]

        assert build_merkle_root(leaves1) != build_merkle_root(leaves2)

    def test_case_insensitive_input_same_root(self):
        """Uppercase and lowercase spellings of the same leaves agree."""
        leaves = [make_leaf(f"leaf{i}") for i in range(5)]
        upper = [leaf.upper() for leaf in leaves]

        assert build_merkle_root(upper) == build_merkle_root(leaves)


class TestPaddingCorrectness:
    """Tests for odd-number padding behavior."""

    def test_padding_rule_three_leaves(self):
        """Three leaves: root = H(H(a||b) || H(c||c))."""
        a, b, c = make_leaf("A"), make_leaf("B"), make_leaf("C")

        expected_root = parent_hex(parent_hex(a, b), parent_hex(c, c))

        assert build_merkle_root([a, b, c]) == expected_root

    def test_padding_rule_five_leaves(self):
        """Five leaves use duplicate-last padding at multiple levels."""
        a, b, c, d, e = [make_leaf(f"leaf{i}") for i in range(5)]

        # Level 0: [a, b, c, d, e, e]
        # Level 1: [ab, cd, ee, ee]
        # Level 2: [abcd, eeee]
        ab = parent_hex(a, b)
        cd = parent_hex(c, d)
        ee = parent_hex(e, e)
        expected_root = parent_hex(parent_hex(ab, cd), parent_hex(ee, ee))

        assert build_merkle_root([a, b, c, d, e]) == expected_root

    def test_even_leaves_no_padding_needed(self):
        """Even number of leaves needs no padding at leaf level."""
        a, b, c, d = [make_leaf(f"leaf{i}") for i in range(4)]

        expected_root = parent_hex(parent_hex(a, b), parent_hex(c, d))

        assert build_merkle_root([a, b, c, d]) == expected_root

    @pytest.mark.parametrize("count", [3, 5, 7, 9, 33])
    def test_odd_counts_terminate_with_hex_root(self, count):
        """Odd leaf counts reduce to a 64-character hex root."""
        root = build_merkle_root([make_leaf(str(i)) for i in range(count)])

        assert len(root) == 64
        assert root == root.lower()
        int(root, 16)

    def test_identical_leaves_root_differs_from_leaf(self):
        """Four identical leaves still produce a root distinct from the leaf."""
        leaf = make_leaf("same")
        root = build_merkle_root([leaf] * 4)

        assert root != leaf
        assert root == parent_hex(parent_hex(leaf, leaf), parent_hex(leaf, leaf))


class TestRawByteConcatenation:
    """Parent hashes are over decoded bytes, not over hex text."""

    def test_parent_uses_raw_bytes(self):
        a, b = make_leaf("x"), make_leaf("y")

        root = build_merkle_root([a, b])

        assert root == hashlib.sha256(raw(a) + raw(b)).hexdigest()
        assert root != hashlib.sha256((a + b).encode("ascii")).hexdigest()

    def test_merkle_parent_matches_sha256(self):
        left, right = sha256(b"l"), sha256(b"r")
        assert merkle_parent(left, right) == sha256(left + right)


class TestLevels:
    """Tests for the raw-bytes reduction primitives."""

    def test_build_next_level_duplicates_last(self):
        a, b, c = sha256(b"a"), sha256(b"b"), sha256(b"c")

        level = build_next_level([a, b, c])

        assert level == [merkle_parent(a, b), merkle_parent(c, c)]

    def test_build_next_level_does_not_mutate_input(self):
        level = [sha256(b"a"), sha256(b"b"), sha256(b"c")]
        build_next_level(level)
        assert len(level) == 3

    def test_reduce_to_root_empty_raises(self):
        with pytest.raises(InvalidArgumentException):
            reduce_to_root([])

    def test_reduce_to_root_matches_hex_api(self):
        leaves = [make_leaf(str(i)) for i in range(6)]
        assert reduce_to_root([raw(x) for x in leaves]).hex() == build_merkle_root(leaves)


class TestValidation:
    """Invalid input fails before any hashing."""

    def test_empty_raises_invalid_argument(self):
        with pytest.raises(InvalidArgumentException) as exc_info:
            build_merkle_root([])
        assert exc_info.value.code == ErrorCodes.INVALID_ARGUMENT

    def test_not_hex_raises_format_error(self):
        with pytest.raises(DigestFormatException) as exc_info:
            build_merkle_root(["not-hex"])
        assert exc_info.value.code == ErrorCodes.DIGEST_FORMAT_ERROR

    def test_too_short_raises_format_error(self):
        with pytest.raises(DigestFormatException):
            build_merkle_root(["abc123"])

    def test_non_hex_characters_raise_format_error(self):
        with pytest.raises(DigestFormatException):
            build_merkle_root(["Z" * 64])

    def test_malformed_leaf_aborts_whole_reduction(self, monkeypatch):
        """A bad leaf anywhere aborts before any parent is hashed."""
        calls = []
        monkeypatch.setattr(
            "chunkproof.merkle.merkle_tree.hash_concat",
            lambda left, right: calls.append((left, right)) or sha256(left + right),
        )
        leaves = [make_leaf("a"), make_leaf("b"), "g" * 64]

        with pytest.raises(DigestFormatException) as exc_info:
            build_merkle_root(leaves)

        assert exc_info.value.details["index"] == 2
        assert calls == []

    @pytest.mark.parametrize("bad_input", [
        "a" * 64,
        b"\x00" * 32,
        {"a": 1},
        {make_leaf("a")},
        None,
        42,
    ])
    def test_non_sequence_raises_invalid_argument(self, bad_input):
        with pytest.raises(InvalidArgumentException):
            build_merkle_root(bad_input)

    def test_generator_rejected(self):
        with pytest.raises(InvalidArgumentException):
            build_merkle_root(make_leaf(str(i)) for i in range(2))

    def test_non_string_element_rejected(self):
        with pytest.raises(InvalidArgumentException) as exc_info:
            build_merkle_root([make_leaf("a"), 123])
        assert not isinstance(exc_info.value, DigestFormatException)


class TestTreeDepth:
    """Tests for compute_tree_depth."""

    @pytest.mark.parametrize("num_leaves,expected", [
        (0, 0), (1, 1), (2, 2), (3, 3), (4, 3), (5, 4), (8, 4), (9, 5),
    ])
    def test_depth(self, num_leaves, expected):
        assert compute_tree_depth(num_leaves) == expected

    def test_negative_rejected(self):
        with pytest.raises(InvalidArgumentException):
            compute_tree_depth(-1)


class TestMerkleTreeBuilder:
    """Tests for the class wrapper."""

    def test_build_root_matches_function(self):
        leaves = [make_leaf(str(i)) for i in range(7)]
        assert MerkleTreeBuilder.build_root(leaves) == build_merkle_root(leaves)

    def test_build_root_digest(self):
        leaves = [make_leaf(str(i)) for i in range(3)]
        digest = MerkleTreeBuilder.build_root_digest(leaves)

        assert isinstance(digest, Digest)
        assert str(digest) == build_merkle_root(leaves)

    def test_depth(self):
        assert MerkleTreeBuilder.depth([make_leaf("a")] * 4) == 3
