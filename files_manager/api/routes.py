from __future__ import annotations

from ..logging_conf import get_logger
from ..routing import HttpMethod, RouteEntry, RouteTable
from .controllers import AppController, AuthController, UsersController

__all__ = ["build"]

logger = get_logger("api.routes")


def build(
    *,
    app_controller: AppController,
    auth_controller: AuthController,
    users_controller: UsersController,
) -> RouteTable:
    """Bind the public endpoints to their controller handlers.

    Construction cannot fail at runtime; a controller missing one of its
    handlers is a programming error and surfaces as AttributeError/TypeError.
    """
    table = RouteTable.from_entries(
        [
            RouteEntry(
                HttpMethod.GET, "/status", app_controller.get_status, "Report process health"
            ),
            RouteEntry(
                HttpMethod.GET, "/stats", app_controller.get_stats, "Report aggregate counts"
            ),
            RouteEntry(
                HttpMethod.GET,
                "/connect",
                auth_controller.get_connect,
                "Establish an authenticated session",
            ),
            RouteEntry(
                HttpMethod.GET,
                "/disconnect",
                auth_controller.get_disconnect,
                "Terminate an authenticated session",
            ),
            RouteEntry(
                HttpMethod.GET,
                "/users/me",
                users_controller.get_me,
                "Return the identity of the current session",
            ),
            RouteEntry(
                HttpMethod.POST, "/users", users_controller.post_new, "Create a new user record"
            ),
        ]
    )
    logger.debug("routes.built", extra={"event": "routes_built", "count": len(table)})
    return table
