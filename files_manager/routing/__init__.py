"""Pure routing primitives: HTTP methods and the immutable route table.

Nothing here imports FastAPI, so the table can be unit-tested and reused
by both the server and the smoke runner.
"""
from .methods import HttpMethod
from .table import NoRouteMatch, RouteEntry, RouteTable

__all__ = ["HttpMethod", "NoRouteMatch", "RouteEntry", "RouteTable"]
