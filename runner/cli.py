from __future__ import annotations

import argparse
import os


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse CLI arguments for the smoke runner."""
    parser = argparse.ArgumentParser(description="Files manager route smoke runner")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://127.0.0.1:5000"))
    parser.add_argument("--prefix", default=os.getenv("API_PREFIX", ""))
    parser.add_argument("--timeout", type=float, default=20.0)
    parser.add_argument("--retries", type=_positive_int, default=2)
    return parser.parse_args(argv)
