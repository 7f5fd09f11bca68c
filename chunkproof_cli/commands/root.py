"""
CLI Root Command

Compute the Merkle root of a file's chunk digests.

Usage:
    chunkproof root FILE [--chunk-size SIZE] [--leaves] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from chunkproof.pipeline import fingerprint_file
from chunkproof_cli.commands.common import EXIT_SUCCESS, print_json


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """Handle root command."""
    chunk_size = args.chunk_size if args.chunk_size is not None else args.cli_config.chunk_size

    result = fingerprint_file(args.file, chunk_size)

    if args.json:
        data = result.model_dump() if args.leaves else result.summary()
        data["path"] = args.file
        print_json(data)
        return EXIT_SUCCESS

    print(f"merkle_root: {result.merkle_root}")
    print(f"chunks: {result.chunk_count}")
    print(f"chunk_size: {result.chunk_size}")
    print(f"bytes: {result.byte_count}")
    print(f"depth: {result.tree_depth}")
    if args.leaves:
        print("leaves:")
        for index, leaf in enumerate(result.leaves):
            print(f"  {index}\t{leaf}")
    return EXIT_SUCCESS
