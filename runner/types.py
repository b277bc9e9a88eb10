from __future__ import annotations

from dataclasses import dataclass

ROUTE_NOT_FOUND = "route_not_found"


@dataclass(frozen=True)
class Probe:
    """One request to send and whether the server should route it."""

    method: str
    path: str
    expect_routed: bool


@dataclass
class ProbeResult:
    """Outcome of a single probe against a live server."""

    probe: Probe
    status_code: int
    error_code: str | None = None

    @property
    def routed(self) -> bool:
        return not (self.status_code == 404 and self.error_code == ROUTE_NOT_FOUND)

    @property
    def ok(self) -> bool:
        return self.routed == self.probe.expect_routed


class SmokeError(RuntimeError):
    """Raised when the smoke flow cannot proceed (e.g., /status never ready)."""


class ProbeError(SmokeError):
    """Raised when a probe fails at the transport level after retries."""
