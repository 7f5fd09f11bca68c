"""
Module execution entry point.

Allows running with: python -m chunkproof_cli
"""

import sys
from chunkproof_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
