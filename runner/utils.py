from __future__ import annotations

from runner.types import Probe, ProbeResult

REGISTERED_PROBES: tuple[Probe, ...] = (
    Probe("GET", "/status", True),
    Probe("GET", "/stats", True),
    Probe("GET", "/connect", True),
    Probe("GET", "/disconnect", True),
    Probe("GET", "/users/me", True),
    Probe("POST", "/users", True),
)

UNREGISTERED_PROBES: tuple[Probe, ...] = (
    Probe("GET", "/users", False),
    Probe("DELETE", "/users", False),
    Probe("GET", "/unknown", False),
)

DEFAULT_PROBES = REGISTERED_PROBES + UNREGISTERED_PROBES


def summarize(results: list[ProbeResult], expected: int = len(DEFAULT_PROBES)) -> tuple[dict, int]:
    """Compute a summary dict and an exit code from probe results.

    Exit code is 0 only when every expected probe was answered and matched
    its routed/unrouted expectation.
    """
    failures = [
        {
            "method": r.probe.method,
            "path": r.probe.path,
            "expect_routed": r.probe.expect_routed,
            "status_code": r.status_code,
            "error_code": r.error_code,
        }
        for r in results
        if not r.ok
    ]
    summary = {
        "component": "runner",
        "event": "summary",
        "probed": len(results),
        "expected": expected,
        "routed": sum(1 for r in results if r.routed),
        "unrouted": sum(1 for r in results if not r.routed),
        "failures": failures,
    }
    exit_code = 0 if (len(results) == expected and not failures) else 1
    return summary, exit_code
