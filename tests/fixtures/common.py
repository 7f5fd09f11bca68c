"""
Common test fixtures - base factories for byte sources and digests.

These factories create deterministic sources that deliver bytes in
controlled block sizes, so chunk boundaries can be checked independently
of how the bytes arrive.
"""
from __future__ import annotations

import hashlib
from typing import AsyncIterator, Iterable


def make_bytes(length: int, fill: int | None = None) -> bytes:
    """Deterministic content: a repeated byte if fill is given, else a cycling pattern."""
    if fill is not None:
        return bytes([fill]) * length
    return bytes(i % 251 for i in range(length))


def sha256_hex(data: bytes) -> str:
    """Reference SHA-256 hex digest."""
    return hashlib.sha256(data).hexdigest()


def expected_chunk_digests(data: bytes, chunk_size: int) -> list[str]:
    """Reference chunk digests computed by slicing."""
    return [
        sha256_hex(data[i:i + chunk_size])
        for i in range(0, len(data), chunk_size)
    ]


def make_leaf(label: str) -> str:
    """A valid leaf digest derived from a label."""
    return sha256_hex(label.encode("utf-8"))


def split_blocks(data: bytes, sizes: Iterable[int]) -> list[bytes]:
    """Split data into blocks following sizes cyclically."""
    sizes = list(sizes)
    blocks: list[bytes] = []
    offset = 0
    i = 0
    while offset < len(data):
        size = sizes[i % len(sizes)]
        blocks.append(data[offset:offset + size])
        offset += size
        i += 1
    return blocks


class TrickleReader:
    """Readable source that returns at most ``step`` bytes per read()."""

    def __init__(self, data: bytes, step: int) -> None:
        self._data = data
        self._step = step
        self._offset = 0
        self.read_calls = 0
        self.requested: list[int] = []

    def read(self, n: int = -1) -> bytes:
        self.read_calls += 1
        self.requested.append(n)
        size = self._step if n is None or n < 0 else min(n, self._step)
        block = self._data[self._offset:self._offset + size]
        self._offset += len(block)
        return block


class FailingReader:
    """Readable source that raises OSError after ``good_reads`` successful reads."""

    def __init__(self, data: bytes, good_reads: int = 1, step: int = 4) -> None:
        self._inner = TrickleReader(data, step)
        self._good_reads = good_reads

    def read(self, n: int = -1) -> bytes:
        if self._good_reads <= 0:
            raise ConnectionResetError("connection reset by peer")
        self._good_reads -= 1
        return self._inner.read(n)


class AsyncTrickleReader:
    """Async readable source (StreamReader-like) returning small blocks."""

    def __init__(self, data: bytes, step: int, fail_after: int | None = None) -> None:
        self._inner = TrickleReader(data, step)
        self._fail_after = fail_after

    @property
    def requested(self) -> list[int]:
        return self._inner.requested

    async def read(self, n: int = -1) -> bytes:
        if self._fail_after is not None:
            if self._fail_after <= 0:
                raise TimeoutError("read timed out")
            self._fail_after -= 1
        return self._inner.read(n)


async def async_blocks(blocks: Iterable[bytes]) -> AsyncIterator[bytes]:
    """Async iterable over pre-split blocks."""
    for block in blocks:
        yield block
