#!/usr/bin/env python3
"""Smoke runner checking a live server's route table.

Steps:
- wait for GET /status
- probe every registered route and a few unregistered ones
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

import httpx

from files_manager.api.dispatch import normalize_prefix
from files_manager.logging_conf import get_logger, setup_logging
from runner.cli import parse_args
from runner.client import probe_routes, wait_for_status
from runner.utils import DEFAULT_PROBES, summarize

setup_logging()
logger = get_logger("runner")


async def run_smoke(
    *,
    base_url: str,
    prefix: str = "",
    timeout_s: float = 20.0,
    retries: int = 2,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    prefix = normalize_prefix(prefix)
    async with httpx.AsyncClient(base_url=base_url, timeout=10.0, transport=transport) as client:
        await wait_for_status(client, prefix, timeout_s=timeout_s)
        results = await probe_routes(client, DEFAULT_PROBES, prefix, retries=retries)
    summary, exit_code = summarize(results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    code = asyncio.run(
        run_smoke(
            base_url=args.base_url,
            prefix=args.prefix,
            timeout_s=args.timeout,
            retries=args.retries,
        )
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()
