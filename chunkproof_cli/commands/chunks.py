"""
CLI Chunks Command

List the per-chunk SHA-256 digests (Merkle leaves) of a file.

Usage:
    chunkproof chunks FILE [--chunk-size SIZE] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from chunkproof.chunking.chunk_hasher import hash_file_chunks
from chunkproof_cli.commands.common import EXIT_SUCCESS, print_json


logger = logging.getLogger(__name__)


def chunks_cmd(args: Namespace) -> int:
    """Handle chunks command."""
    chunk_size = args.chunk_size if args.chunk_size is not None else args.cli_config.chunk_size
    logger.info(f"Hashing {args.file} in chunks of {chunk_size} bytes")

    leaves = list(hash_file_chunks(args.file, chunk_size))

    if args.json:
        print_json({
            "path": args.file,
            "chunk_size": chunk_size,
            "leaves": leaves,
        })
    else:
        for index, leaf in enumerate(leaves):
            print(f"{index}\t{leaf}")
    return EXIT_SUCCESS
