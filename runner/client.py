from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

import httpx

from files_manager.logging_conf import get_logger
from runner.types import Probe, ProbeError, ProbeResult, SmokeError

logger = get_logger("runner.client")


def _error_code(response: httpx.Response) -> str | None:
    """Pull `detail.error_code` out of a JSON error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    detail = body.get("detail") if isinstance(body, dict) else None
    if isinstance(detail, dict):
        return detail.get("error_code")
    return None


async def wait_for_status(
    client: httpx.AsyncClient, prefix: str = "", timeout_s: float = 20.0, interval_s: float = 0.25
) -> None:
    """Poll GET {prefix}/status until it returns 200 or raise after a timeout."""
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        try:
            r = await client.get(f"{prefix}/status")
            if r.status_code == 200:
                logger.info("status.ok", extra={"event": "status_ok"})
                return
        except httpx.TransportError as e:
            logger.debug("status.wait", extra={"event": "status_wait", "error": str(e)})
        await asyncio.sleep(interval_s)
    raise SmokeError("GET /status did not succeed within timeout")


async def probe_one(
    client: httpx.AsyncClient, probe: Probe, prefix: str = "", *, retries: int = 2
) -> ProbeResult:
    """Send one probe and classify the response, retrying transport errors."""
    kwargs = {"json": {}} if probe.method == "POST" else {}
    last_err: Exception | None = None
    for attempt in range(max(1, retries)):
        try:
            r = await client.request(probe.method, f"{prefix}{probe.path}", **kwargs)
            return ProbeResult(probe=probe, status_code=r.status_code, error_code=_error_code(r))
        except httpx.TransportError as e:
            last_err = e
            logger.warning(
                "probe.retry",
                extra={
                    "event": "probe_retry",
                    "method": probe.method,
                    "path": probe.path,
                    "attempt": attempt + 1,
                    "error": str(e),
                },
            )
    raise ProbeError(f"probe failed for {probe.method} {probe.path}: {last_err}")


async def probe_routes(
    client: httpx.AsyncClient, probes: Iterable[Probe], prefix: str = "", *, retries: int = 2
) -> list[ProbeResult]:
    """Run probes concurrently; probes that never get a response are dropped."""
    probes = list(probes)
    results = await asyncio.gather(
        *(probe_one(client, p, prefix, retries=retries) for p in probes),
        return_exceptions=True,
    )
    out = [res for res in results if isinstance(res, ProbeResult)]
    logger.info(
        "probe.summary",
        extra={
            "event": "probe_summary",
            "requested": len(probes),
            "answered": len(out),
            "failed": len(probes) - len(out),
        },
    )
    return out
