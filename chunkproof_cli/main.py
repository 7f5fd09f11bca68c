"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m chunkproof_cli hash FILE [--json]
    python -m chunkproof_cli chunks FILE [--chunk-size SIZE] [--json]
    python -m chunkproof_cli root FILE [--chunk-size SIZE] [--leaves] [--json]
    python -m chunkproof_cli config --init
    python -m chunkproof_cli config --show

Environment Variables:
    CHUNKPROOF_CHUNK_SIZE       Chunk size in bytes (default: 1048576)
    CHUNKPROOF_READ_SIZE        Read block size for whole-file hashing (default: 65536)
    CHUNKPROOF_LOG_LEVEL        Log level (default: INFO)
    CHUNKPROOF_LOG_FILE         Optional log file
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from chunkproof.config.runtime import (
    DEFAULT_CONFIG_PATHS,
    get_default_config_template,
    load_config,
)
from chunkproof.schemas.errors import (
    ChunkproofException,
    InvalidArgumentException,
)
from chunkproof_cli import __version__
from chunkproof_cli.commands import chunks, digest, root
from chunkproof_cli.commands.common import (
    EXIT_INVALID_ARGUMENT,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    parse_size,
    print_json,
)


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _add_chunk_size(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--chunk-size", "-s",
        type=parse_size,
        default=None,
        help="Chunk size in bytes, units allowed (e.g. 1MiB, 4MiB). Default: from config (1MiB)",
    )


def _add_json(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="chunkproof",
        description="Chunk-level SHA-256 digests and Merkle roots for files.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./chunkproof.json or ~/.config/chunkproof/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- hash command ---
    hash_parser = subparsers.add_parser(
        "hash",
        help="SHA-256 of a whole file",
        description="Hash the full content of a file in a single pass.",
    )
    hash_parser.add_argument("file", type=str, help="File to hash")
    _add_json(hash_parser)
    hash_parser.set_defaults(func=digest.hash_cmd)

    # --- chunks command ---
    chunks_parser = subparsers.add_parser(
        "chunks",
        help="Per-chunk SHA-256 digests of a file",
        description="Split a file into fixed-size chunks and print one digest per chunk.",
    )
    chunks_parser.add_argument("file", type=str, help="File to hash")
    _add_chunk_size(chunks_parser)
    _add_json(chunks_parser)
    chunks_parser.set_defaults(func=chunks.chunks_cmd)

    # --- root command ---
    root_parser = subparsers.add_parser(
        "root",
        help="Merkle root of a file's chunk digests",
        description="Hash a file in fixed-size chunks and reduce the digests to a Merkle root.",
    )
    root_parser.add_argument("file", type=str, help="File to fingerprint")
    _add_chunk_size(root_parser)
    root_parser.add_argument(
        "--leaves",
        action="store_true",
        default=False,
        help="Also print the leaf digests",
    )
    _add_json(root_parser)
    root_parser.set_defaults(func=root.root_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default=str(DEFAULT_CONFIG_PATHS[0]),
        help="Path for config file (default: chunkproof.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR

        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("You can also use environment variables (CHUNKPROOF_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        print(json.dumps(args.cli_config.to_dict(), indent=2))
        return EXIT_SUCCESS

    # Default: show help
    print("Usage: chunkproof config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def _report_error(args: argparse.Namespace, exc: ChunkproofException) -> None:
    if getattr(args, "json", False):
        print_json({"error": exc.to_error_model().model_dump()})
    else:
        print(f"Error: {exc.message}", file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=runtime error, 2=invalid argument)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    # Load configuration
    try:
        config = load_config(args.config)
    except InvalidArgumentException as e:
        print(f"Invalid configuration: {e.message}", file=sys.stderr)
        return EXIT_INVALID_ARGUMENT
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    # Setup logging
    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except InvalidArgumentException as e:
        _report_error(args, e)
        return EXIT_INVALID_ARGUMENT
    except ChunkproofException as e:
        _report_error(args, e)
        return EXIT_RUNTIME_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.log_level == "DEBUG":
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
