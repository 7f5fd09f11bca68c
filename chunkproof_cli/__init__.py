"""
chunkproof CLI

Command-line interface for chunk hashing and Merkle roots.

Usage:
    python -m chunkproof_cli hash blob.bin
    python -m chunkproof_cli chunks blob.bin --chunk-size 4MiB
    python -m chunkproof_cli root blob.bin --json
    python -m chunkproof_cli config --show
"""

__version__ = "0.1.0"
