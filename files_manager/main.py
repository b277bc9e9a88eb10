"""FastAPI app factory hosting the route table."""
from __future__ import annotations

import os
import time
from collections.abc import Callable
from uuid import uuid4

from fastapi import FastAPI, Request, Response, status
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from .api import build, mount
from .api.controllers import AppController, AuthController, UsersController
from .api.dispatch import openapi_paths
from .api.models import ErrorDetail, ErrorResponse
from .logging_conf import get_logger, setup_logging
from .routing import NoRouteMatch

setup_logging()
logger = get_logger("app")


def get_prefix_from_env() -> str:
    """Return API_PREFIX from environment; empty means the table is mounted at root."""
    return os.getenv("API_PREFIX", "")


async def route_not_found(request: Request, exc: NoRouteMatch) -> JSONResponse:
    body = ErrorResponse(
        detail=ErrorDetail(error_code=exc.code, error_message=str(exc)),
    )
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content=body.model_dump())


def create_app(
    *,
    app_controller: AppController,
    auth_controller: AuthController,
    users_controller: UsersController,
    prefix: str | None = None,
) -> FastAPI:
    table = build(
        app_controller=app_controller,
        auth_controller=auth_controller,
        users_controller=users_controller,
    )
    if prefix is None:
        prefix = get_prefix_from_env()

    app = FastAPI(
        title="Files Manager",
        version=os.getenv("APP_VERSION", "0.1.0"),
    )
    app.state.route_table = table

    @app.on_event("startup")
    async def _on_startup() -> None:
        logger.info(
            "startup",
            extra={"event": "startup", "routes": len(table), "prefix": prefix},
        )

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        logger.info("shutdown", extra={"event": "shutdown"})

    @app.middleware("http")
    async def request_logger(request: Request, call_next: Callable[[Request], Response]):
        """JSON request logging with correlation id.

        - Propagates the client's X-Request-ID or mints one
        - Logs start and end events with method/path/status/elapsed_ms
        - Echoes X-Request-ID on the response
        """
        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        request.state.request_id = request_id

        start = time.perf_counter()
        logger.info(
            "request.start",
            extra={
                "event": "request_start",
                "method": request.method,
                "path": request.url.path,
                "request_id": request_id,
            },
        )
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "request.error",
                extra={
                    "event": "request_error",
                    "method": request.method,
                    "path": request.url.path,
                    "request_id": request_id,
                },
            )
            raise
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0

        response.headers["X-Request-ID"] = request_id
        logger.info(
            "request.end",
            extra={
                "event": "request_end",
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "elapsed_ms": round(elapsed_ms, 2),
                "request_id": request_id,
            },
        )
        return response

    def _openapi() -> dict:
        if app.openapi_schema is None:
            schema = get_openapi(title=app.title, version=app.version, routes=app.routes)
            schema.setdefault("paths", {}).update(openapi_paths(table, prefix))
            app.openapi_schema = schema
        return app.openapi_schema

    app.add_exception_handler(NoRouteMatch, route_not_found)
    app.include_router(mount(table, prefix))
    app.openapi = _openapi  # type: ignore[method-assign]

    return app
