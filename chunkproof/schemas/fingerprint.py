"""
Schemas - Fingerprint
File: fingerprint.py

Purpose: Result record returned by the chunk-hash + Merkle-root pipeline.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


HEX_DIGEST_PATTERN = r"^[0-9a-f]{64}$"


class FingerprintResult(BaseModel):
    """
    Fingerprint of a byte source.

    Carries the Merkle root together with the ordered leaf digests it was
    reduced from, so a second party can recompute and compare.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    algorithm: Literal["sha256"] = Field(
        default="sha256",
        description="Hash function used for leaves and parents",
    )
    merkle_root: str = Field(
        ...,
        description="Merkle root as 64 lowercase hex characters",
        pattern=HEX_DIGEST_PATTERN,
    )
    leaves: list[str] = Field(
        ...,
        description="Ordered chunk digests (tree level 0)",
        min_length=1,
    )
    chunk_size: int = Field(
        ...,
        description="Configured chunk size in bytes",
        gt=0,
    )
    byte_count: int = Field(
        ...,
        description="Total number of bytes consumed from the source",
        ge=0,
    )
    tree_depth: int = Field(
        ...,
        description="Number of tree levels including the leaf level",
        ge=1,
    )

    @property
    def chunk_count(self) -> int:
        """Number of chunks (leaves) in the source."""
        return len(self.leaves)

    @model_validator(mode="after")
    def _check_counts(self) -> "FingerprintResult":
        expected = -(-self.byte_count // self.chunk_size)
        if expected != len(self.leaves):
            raise ValueError(
                f"{len(self.leaves)} leaves do not match {self.byte_count} bytes "
                f"at chunk size {self.chunk_size} (expected {expected})"
            )
        return self

    def summary(self) -> dict:
        """Compact dict without the leaf list, for CLI output."""
        data = self.model_dump(exclude={"leaves"})
        data["chunk_count"] = self.chunk_count
        return data
