"""
Chunk Hasher
Partitions a byte source into fixed-size chunks and emits one SHA-256
digest per chunk, in source order.

Chunking Rules (Hard Contracts):
1. Boundaries are byte-exact: every chunk covers exactly ``chunk_size``
   consecutive bytes, whatever block sizes the source delivers.
   Blocks are re-accumulated into a buffer of at most ``chunk_size`` bytes.
2. The final chunk may be shorter; it is hashed as-is, never padded and
   never merged into the previous chunk.
3. A source whose length is an exact multiple of ``chunk_size`` produces
   no trailing empty chunk.
4. An empty source yields no digests.

Chunk size is validated when the hashing call is made, not when the
returned iterator is first advanced.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, AsyncIterator, Iterator

from chunkproof.crypto.hashing import new_hasher
from chunkproof.schemas.errors import InvalidArgumentException
from chunkproof.sources import aiter_blocks, iter_blocks, open_file


logger = logging.getLogger(__name__)

# 1 MiB: default chunk size
DEFAULT_CHUNK_SIZE: int = 1024 * 1024

# 4 MiB: the other widely used chunk size
CHUNK_SIZE_4MIB: int = 4 * 1024 * 1024


def validate_chunk_size(chunk_size: Any) -> int:
    """
    Check that a chunk size is a strictly positive integer.

    Raises:
        InvalidArgumentException: If chunk_size is not a positive int
    """
    if isinstance(chunk_size, bool) or not isinstance(chunk_size, int):
        raise InvalidArgumentException(
            f"Chunk size must be a positive integer, got {type(chunk_size).__name__}",
            argument="chunk_size",
        )
    if chunk_size <= 0:
        raise InvalidArgumentException(
            f"Chunk size must be a positive integer, got {chunk_size}",
            argument="chunk_size",
        )
    return chunk_size


class ChunkBuffer:
    """
    Accumulation buffer holding at most one chunk of pending bytes.

    Also tracks the total number of bytes fed, and how many bytes the
    current chunk still needs (the size of the next read).
    """

    def __init__(self, chunk_size: int) -> None:
        self.chunk_size = validate_chunk_size(chunk_size)
        self.byte_count = 0
        self.digest_count = 0
        self._pending = bytearray()

    @property
    def pending(self) -> int:
        """Bytes held for the current, incomplete chunk."""
        return len(self._pending)

    def missing(self) -> int:
        """Bytes still needed to complete the current chunk."""
        return self.chunk_size - len(self._pending)

    def feed(self, block: bytes | bytearray | memoryview) -> Iterator[str]:
        """Absorb a block, yielding a digest for every chunk it completes."""
        view = memoryview(block).cast("B")
        self.byte_count += len(view)
        offset = 0
        while offset < len(view):
            piece = view[offset:offset + self.missing()]
            self._pending += piece
            offset += len(piece)

            if len(self._pending) == self.chunk_size:
                yield self._flush()

    def finish(self) -> Iterator[str]:
        """Yield the digest of a trailing partial chunk, if any."""
        if self._pending:
            yield self._flush()
        logger.debug(
            f"Emitted {self.digest_count} chunk digests "
            f"({self.byte_count} bytes, chunk_size={self.chunk_size})"
        )

    def _flush(self) -> str:
        hasher = new_hasher()
        hasher.update(self._pending)
        self._pending.clear()
        self.digest_count += 1
        return hasher.hexdigest()


def iter_chunk_digests(source: Any, buffer: ChunkBuffer) -> Iterator[str]:
    """
    Feed a synchronous byte source through a buffer, yielding chunk digests.

    Readable sources are asked only for the bytes the current chunk is
    missing, so no read returns more than one chunk of data.
    """
    for block in iter_blocks(source, buffer.missing):
        yield from buffer.feed(block)
    yield from buffer.finish()


async def aiter_chunk_digests(source: Any, buffer: ChunkBuffer) -> AsyncIterator[str]:
    """Async counterpart of iter_chunk_digests()."""
    async for block in aiter_blocks(source, buffer.missing):
        for digest in buffer.feed(block):
            yield digest
    for digest in buffer.finish():
        yield digest


def hash_chunks(source: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[str]:
    """
    Lazily hash a byte source in fixed-size chunks.

    Args:
        source: Readable binary object, bytes-like buffer, or iterable of
                bytes blocks of any size
        chunk_size: Chunk size in bytes (default 1 MiB)

    Returns:
        Iterator of 64-character lowercase hex digests, one per chunk

    Raises:
        InvalidArgumentException: If chunk_size is not a positive integer
            (raised immediately), or the source yields non-bytes
        SourceUnavailableException: If reading the source fails

    Example:
        >>> list(hash_chunks(b"abcdef", chunk_size=4))  # doctest: +SKIP
        [sha256(b"abcd").hex(), sha256(b"ef").hex()]
    """
    return iter_chunk_digests(source, ChunkBuffer(chunk_size))


def hash_file_chunks(path: str | Path, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[str]:
    """
    Lazily hash a file in fixed-size chunks.

    The file is opened when iteration starts and closed when it ends.

    Raises:
        InvalidArgumentException: If chunk_size is not a positive integer
        SourceUnavailableException: If the file cannot be opened or read
    """
    validate_chunk_size(chunk_size)
    return _hash_opened_file(Path(path), chunk_size)


def _hash_opened_file(path: Path, chunk_size: int) -> Iterator[str]:
    with open_file(path) as handle:
        yield from iter_chunk_digests(handle, ChunkBuffer(chunk_size))


def ahash_chunks(source: Any, chunk_size: int = DEFAULT_CHUNK_SIZE) -> AsyncIterator[str]:
    """
    Async counterpart of hash_chunks().

    Suspends only while awaiting the next block from the source; each
    digest is computed without yielding control.

    Args:
        source: Object with an awaitable ``read(n)`` (e.g. asyncio.StreamReader)
                or an async iterable of bytes blocks
        chunk_size: Chunk size in bytes (default 1 MiB)

    Returns:
        Async iterator of 64-character lowercase hex digests
    """
    return aiter_chunk_digests(source, ChunkBuffer(chunk_size))


class ChunkHasher:
    """
    Chunk hasher bound to one chunk size.

    Example:
        >>> hasher = ChunkHasher(chunk_size=CHUNK_SIZE_4MIB)
        >>> leaves = list(hasher.hash_file("blob.bin"))  # doctest: +SKIP
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self.chunk_size = validate_chunk_size(chunk_size)

    def hash(self, source: Any) -> Iterator[str]:
        """Chunk digests of a synchronous byte source."""
        return hash_chunks(source, self.chunk_size)

    def hash_file(self, path: str | Path) -> Iterator[str]:
        """Chunk digests of a file."""
        return hash_file_chunks(path, self.chunk_size)

    def ahash(self, source: Any) -> AsyncIterator[str]:
        """Chunk digests of an asynchronous byte source."""
        return ahash_chunks(source, self.chunk_size)

    def __repr__(self) -> str:
        return f"ChunkHasher(chunk_size={self.chunk_size})"


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
