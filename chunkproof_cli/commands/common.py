"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import argparse
import json
import re
from typing import Any


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_INVALID_ARGUMENT = 2


_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kmg]i?b?|b)?\s*$", re.IGNORECASE)

_SIZE_UNITS = {
    "": 1,
    "b": 1,
    "k": 1024, "kb": 1024, "kib": 1024, "ki": 1024,
    "m": 1024 ** 2, "mb": 1024 ** 2, "mib": 1024 ** 2, "mi": 1024 ** 2,
    "g": 1024 ** 3, "gb": 1024 ** 3, "gib": 1024 ** 3, "gi": 1024 ** 3,
}


def parse_size(text: str) -> int:
    """
    Parse a byte size such as ``65536``, ``64KiB``, ``1MiB`` or ``4M``.

    Units are binary (1 KiB = 1024 bytes). Positivity is checked by the
    chunk hasher, not here.
    """
    match = _SIZE_RE.match(text)
    if not match:
        raise argparse.ArgumentTypeError(f"invalid size: {text!r}")
    number, unit = match.groups()
    return int(number) * _SIZE_UNITS[(unit or "").lower()]


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout."""
    print(json.dumps(data, indent=2, sort_keys=True))
