"""
Cryptographic utilities.

SHA-256 hashing primitives and the Digest value type.
"""
from .hashing import (
    HASH_ALGORITHM,
    DIGEST_SIZE,
    sha256,
    hash_concat,
    hash_stream,
    hash_file,
)
from .digest import (
    HEX_DIGEST_LENGTH,
    Digest,
    normalize_hex_digest,
    decode_digest,
    encode_digest,
)

__all__ = [
    "HASH_ALGORITHM",
    "DIGEST_SIZE",
    "HEX_DIGEST_LENGTH",
    "sha256",
    "hash_concat",
    "hash_stream",
    "hash_file",
    "Digest",
    "normalize_hex_digest",
    "decode_digest",
    "encode_digest",
]
