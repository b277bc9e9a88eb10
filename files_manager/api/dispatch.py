from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request, Response

from ..routing import NoRouteMatch, RouteTable

__all__ = ["literal_path", "mount", "normalize_prefix", "openapi_paths"]


def normalize_prefix(prefix: str | None) -> str:
    """Return `prefix` as "" or "/segment[/segment...]" without a trailing slash."""
    p = (prefix or "").strip().strip("/")
    return f"/{p}" if p else ""


def literal_path(request: Request, prefix: str = "") -> str:
    """Return the request path as sent on the wire, minus the mount prefix.

    Percent-escapes are kept as-is, so `/stat%75s` never matches `/status`.

    Raises:
        NoRouteMatch: if the raw path does not start with `prefix`.
    """
    raw = request.scope.get("raw_path")
    if raw is None:
        return "/" + request.path_params.get("path", "")

    path = raw.decode("latin-1").split("?", 1)[0]
    if not prefix:
        return path
    if not path.startswith(f"{prefix}/"):
        raise NoRouteMatch(request.method, path)
    return path[len(prefix):]


def mount(table: RouteTable, prefix: str | None = "") -> APIRouter:
    """Expose `table` as a FastAPI router under `prefix`.

    A single catch-all route accepting every method looks the request up in
    the table; a miss raises NoRouteMatch, which the host translates into a
    404. The catch-all is hidden from OpenAPI; `openapi_paths` documents the
    table's entries instead.
    """
    prefix = normalize_prefix(prefix)
    router = APIRouter()

    async def dispatch(request: Request) -> Response:
        handler = table.match(request.method, literal_path(request, prefix))
        return await handler(request)

    router.add_route(f"{prefix}/{{path:path}}", dispatch, methods=None, include_in_schema=False)
    return router


def openapi_paths(table: RouteTable, prefix: str | None = "") -> dict[str, Any]:
    """OpenAPI `paths` object describing every entry of `table`."""
    prefix = normalize_prefix(prefix)
    paths: dict[str, Any] = {}
    for entry in table:
        paths.setdefault(f"{prefix}{entry.path}", {})[entry.method.value.lower()] = {
            "summary": entry.summary or entry.name,
            "operationId": entry.name.replace(".", "_"),
            "responses": {
                "200": {"description": "Handler response"},
                "404": {"description": "No route for this method and path"},
            },
        }
    return paths
