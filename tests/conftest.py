from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

import pytest
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from files_manager.api import build
from files_manager.main import create_app
from files_manager.routing import RouteTable


class _Recorder:
    """Fake controller base: remembers which handler ran and echoes its name."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def _respond(self, name: str) -> Response:
        self.calls.append(name)
        return JSONResponse({"handler": name})


class FakeAppController(_Recorder):
    async def get_status(self, request: Request) -> Response:
        return self._respond("get_status")

    async def get_stats(self, request: Request) -> Response:
        return self._respond("get_stats")


class FakeAuthController(_Recorder):
    async def get_connect(self, request: Request) -> Response:
        return self._respond("get_connect")

    async def get_disconnect(self, request: Request) -> Response:
        self.calls.append("get_disconnect")
        return Response(status_code=204)


class FakeUsersController(_Recorder):
    async def get_me(self, request: Request) -> Response:
        return self._respond("get_me")

    async def post_new(self, request: Request) -> Response:
        body = await request.json()
        self.calls.append("post_new")
        return JSONResponse({"handler": "post_new", "email": body.get("email")}, status_code=201)


@dataclass
class Controllers:
    app: FakeAppController
    auth: FakeAuthController
    users: FakeUsersController

    def kwargs(self) -> dict:
        return {
            "app_controller": self.app,
            "auth_controller": self.auth,
            "users_controller": self.users,
        }


# (method, path, controller attribute, handler name)
REGISTERED = [
    ("GET", "/status", "app", "get_status"),
    ("GET", "/stats", "app", "get_stats"),
    ("GET", "/connect", "auth", "get_connect"),
    ("GET", "/disconnect", "auth", "get_disconnect"),
    ("GET", "/users/me", "users", "get_me"),
    ("POST", "/users", "users", "post_new"),
]


@pytest.fixture()
def controllers() -> Controllers:
    return Controllers(FakeAppController(), FakeAuthController(), FakeUsersController())


@pytest.fixture()
def table(controllers: Controllers) -> RouteTable:
    return build(**controllers.kwargs())


@pytest.fixture()
def client(controllers: Controllers) -> Iterator[TestClient]:
    app = create_app(**controllers.kwargs(), prefix="")
    with TestClient(app) as c:
        yield c
