"""
Schemas

Purpose: Export error models, exceptions and result records.
"""

from .errors import (
    ChunkproofError,
    ChunkproofException,
    DigestFormatException,
    ErrorCodes,
    InvalidArgumentException,
    SourceUnavailableException,
)
from .fingerprint import FingerprintResult

__all__ = [
    # Errors
    "ErrorCodes",
    "ChunkproofError",
    "ChunkproofException",
    "InvalidArgumentException",
    "DigestFormatException",
    "SourceUnavailableException",
    # Results
    "FingerprintResult",
]
