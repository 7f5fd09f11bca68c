"""
CLI Hash Command

Whole-file SHA-256 in a single pass.

Usage:
    chunkproof hash FILE [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from chunkproof.crypto.hashing import HASH_ALGORITHM, hash_file
from chunkproof_cli.commands.common import EXIT_SUCCESS, print_json


logger = logging.getLogger(__name__)


def hash_cmd(args: Namespace) -> int:
    """Handle hash command."""
    config = args.cli_config
    logger.info(f"Hashing {args.file}")

    file_digest = hash_file(args.file, read_size=config.read_size)

    if args.json:
        print_json({
            "path": args.file,
            "algorithm": HASH_ALGORITHM,
            "digest": file_digest,
        })
    else:
        print(f"{file_digest}  {args.file}")
    return EXIT_SUCCESS
