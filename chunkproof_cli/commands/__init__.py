"""
CLI command modules.
"""

from chunkproof_cli.commands import chunks, digest, root

__all__ = ["chunks", "digest", "root"]
