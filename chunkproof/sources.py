"""
Byte Sources

Adapters that turn caller-supplied byte sources into a stream of blocks.

Accepted synchronous sources:
- readable binary objects exposing ``read(n)`` (files, ``io.BytesIO``, socket files)
- in-memory ``bytes`` / ``bytearray`` / ``memoryview`` buffers
- any iterable of bytes-like blocks (transport deliveries of arbitrary size)

Accepted asynchronous sources:
- objects with an awaitable ``read(n)`` (``asyncio.StreamReader``)
- async iterables of bytes-like blocks

Block sizes are whatever the source delivers; callers that need fixed
boundaries re-accumulate on top of these iterators.

Read failures (OSError) surface as SourceUnavailableException chained to
the original error. Nothing is retried here.
"""
from __future__ import annotations

import io
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, AsyncIterator, BinaryIO, Callable, Iterator, Union

from chunkproof.schemas.errors import (
    InvalidArgumentException,
    SourceUnavailableException,
)


logger = logging.getLogger(__name__)

# Block size used when reading readable sources without a chunk boundary
DEFAULT_READ_SIZE: int = 64 * 1024

_BYTES_LIKE = (bytes, bytearray, memoryview)

# Fixed request size, or a callable returning the size of the next request
ReadSize = Union[int, Callable[[], int]]


def describe_source(source: Any) -> str:
    """Short human-readable label for a source, used in error details."""
    name = getattr(source, "name", None)
    if isinstance(name, (str, bytes, Path)):
        return str(name)
    return type(source).__name__


def is_readable(source: Any) -> bool:
    """True if the source exposes a callable ``read``."""
    return callable(getattr(source, "read", None))


def _as_block(block: Any, source: Any) -> bytes | bytearray | memoryview:
    if not isinstance(block, _BYTES_LIKE):
        raise InvalidArgumentException(
            f"Byte source yielded {type(block).__name__}, expected bytes",
            argument="source",
            details={"source": describe_source(source)},
        )
    if isinstance(block, memoryview) and (block.ndim != 1 or block.itemsize != 1):
        # Count and slice bytes, not items
        return block.cast("B") if block.c_contiguous and block.ndim else memoryview(block.tobytes())
    return block


def _next_read_size(read_size: ReadSize) -> int:
    return read_size() if callable(read_size) else read_size


def _no_data(source: Any) -> InvalidArgumentException:
    return InvalidArgumentException(
        "Byte source returned None from read(); non-blocking sources are not supported",
        argument="source",
        details={"source": describe_source(source)},
    )


def _unavailable(source: Any, exc: OSError) -> SourceUnavailableException:
    return SourceUnavailableException(
        f"Failed to read from byte source: {exc}",
        source=describe_source(source),
    )


def iter_blocks(source: Any, read_size: ReadSize = DEFAULT_READ_SIZE) -> Iterator[bytes]:
    """
    Yield non-empty blocks from a synchronous byte source, in source order.

    Args:
        source: Readable object, bytes-like buffer, or iterable of blocks
        read_size: Maximum bytes requested per ``read`` call, or a callable
                   consulted before each call

    Raises:
        InvalidArgumentException: If the source is not a byte source
        SourceUnavailableException: If reading fails
    """
    if isinstance(source, _BYTES_LIKE):
        source = io.BytesIO(bytes(source))

    if is_readable(source):
        while True:
            try:
                block = source.read(_next_read_size(read_size))
            except OSError as e:
                raise _unavailable(source, e) from e
            if block is None:
                raise _no_data(source)
            if not block:
                return
            yield _as_block(block, source)
        return

    if isinstance(source, str):
        raise InvalidArgumentException(
            "Text is not a byte source; encode it or pass a path to hash_file_chunks()",
            argument="source",
        )

    try:
        iterator = iter(source)
    except TypeError as e:
        raise InvalidArgumentException(
            f"Unsupported byte source: {type(source).__name__}",
            argument="source",
        ) from e

    while True:
        try:
            block = next(iterator)
        except StopIteration:
            return
        except OSError as e:
            raise _unavailable(source, e) from e
        block = _as_block(block, source)
        if block:
            yield block


async def aiter_blocks(source: Any, read_size: ReadSize = DEFAULT_READ_SIZE) -> AsyncIterator[bytes]:
    """
    Async counterpart of iter_blocks().

    Suspends only while awaiting the next block from the source.

    Args:
        source: Object with an awaitable ``read(n)``, or an async iterable of blocks
        read_size: Maximum bytes requested per ``read`` call, or a callable
                   consulted before each call
    """
    if is_readable(source):
        while True:
            try:
                block = await source.read(_next_read_size(read_size))
            except OSError as e:
                raise _unavailable(source, e) from e
            if block is None:
                raise _no_data(source)
            if not block:
                return
            yield _as_block(block, source)
        return

    if not hasattr(source, "__aiter__"):
        raise InvalidArgumentException(
            f"Unsupported async byte source: {type(source).__name__}",
            argument="source",
        )

    iterator = source.__aiter__()
    while True:
        try:
            block = await iterator.__anext__()
        except StopAsyncIteration:
            return
        except OSError as e:
            raise _unavailable(source, e) from e
        block = _as_block(block, source)
        if block:
            yield block


@contextmanager
def open_file(path: str | Path) -> Iterator[BinaryIO]:
    """
    Open a file for binary reading.

    Raises:
        SourceUnavailableException: If the file cannot be opened
    """
    path = Path(path)
    try:
        handle = open(path, "rb")
    except OSError as e:
        raise SourceUnavailableException(
            f"Cannot open {path}: {e.strerror or e}",
            source=str(path),
        ) from e

    logger.debug(f"Opened byte source {path}")
    with handle:
        yield handle
