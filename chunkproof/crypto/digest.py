"""
Digest Encoding
The Digest value type and hex normalization/validation helpers.

A digest crosses every interface boundary as exactly 64 lowercase hex
characters and is held internally as 32 raw bytes.

Normalization Rule:
- Lowercase first, then validate. Uppercase or mixed-case input that is
  otherwise valid hex is accepted and canonicalized.
- Wrong length or non-hex characters are rejected, never truncated or padded.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from chunkproof.crypto.hashing import DIGEST_SIZE
from chunkproof.schemas.errors import (
    DigestFormatException,
    InvalidArgumentException,
)


HEX_DIGEST_LENGTH: int = DIGEST_SIZE * 2

_HEX_DIGEST_RE = re.compile(rf"[0-9a-f]{{{HEX_DIGEST_LENGTH}}}")


def _preview(value: str, limit: int = 16) -> str:
    return value if len(value) <= limit else value[:limit] + "..."


def normalize_hex_digest(value: Any, index: int | None = None) -> str:
    """
    Canonicalize a textual digest to lowercase and validate it.

    Args:
        value: Candidate hex digest (any case)
        index: Position of the value in a leaf sequence, for error details

    Returns:
        64-character lowercase hex string

    Raises:
        InvalidArgumentException: If value is not a string
        DigestFormatException: If value is not 64 hex characters
    """
    if not isinstance(value, str):
        where = f" at index {index}" if index is not None else ""
        raise InvalidArgumentException(
            f"Digest{where} must be a hex string, got {type(value).__name__}",
            argument="digest",
            details={"index": index} if index is not None else None,
        )

    normalized = value.lower()
    if not _HEX_DIGEST_RE.fullmatch(normalized):
        where = f" at index {index}" if index is not None else ""
        raise DigestFormatException(
            f"Invalid SHA-256 hex digest{where}: {_preview(value)!r} "
            f"(expected {HEX_DIGEST_LENGTH} hex characters, got {len(value)} characters)",
            index=index,
        )
    return normalized


def decode_digest(value: Any, index: int | None = None) -> bytes:
    """Decode a textual digest into its 32 raw bytes."""
    return bytes.fromhex(normalize_hex_digest(value, index))


def encode_digest(raw: bytes) -> str:
    """
    Encode 32 raw digest bytes as canonical lowercase hex.

    Raises:
        DigestFormatException: If raw is not exactly 32 bytes
    """
    if len(raw) != DIGEST_SIZE:
        raise DigestFormatException(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(raw)}"
        )
    return bytes(raw).hex()


@dataclass(frozen=True)
class Digest:
    """
    A 256-bit digest value.

    Attributes:
        raw: The 32 digest bytes
    """
    raw: bytes

    def __post_init__(self) -> None:
        """Validate digest length."""
        if not isinstance(self.raw, bytes):
            raise InvalidArgumentException(
                f"Digest bytes must be bytes, got {type(self.raw).__name__}",
                argument="raw",
            )
        if len(self.raw) != DIGEST_SIZE:
            raise DigestFormatException(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(self.raw)}"
            )

    @classmethod
    def from_hex(cls, value: str) -> "Digest":
        """Build a Digest from hex text of any case."""
        return cls(decode_digest(value))

    @classmethod
    def from_bytes(cls, raw: bytes | bytearray | memoryview) -> "Digest":
        """Build a Digest from 32 raw bytes."""
        return cls(bytes(raw))

    @property
    def hex(self) -> str:
        """Canonical 64-character lowercase hex form."""
        return self.raw.hex()

    def __str__(self) -> str:
        return self.hex


__all__ = [
    "HEX_DIGEST_LENGTH",
    "Digest",
    "normalize_hex_digest",
    "decode_digest",
    "encode_digest",
]
