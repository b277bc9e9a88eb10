from __future__ import annotations

import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from files_manager.api.dispatch import normalize_prefix
from files_manager.main import create_app
from tests.conftest import REGISTERED, Controllers


@pytest.mark.parametrize(("method", "path", "owner", "name"), REGISTERED)
def test_registered_routes_reach_their_handler(
    client: TestClient, controllers: Controllers, method, path, owner, name
) -> None:
    kwargs = {"json": {"email": "bob@dylan.com", "password": "toto1234!"}} if method == "POST" else {}
    r = client.request(method, path, **kwargs)

    assert r.status_code < 400
    assert getattr(controllers, owner).calls == [name]


def test_post_users_sees_request_body(client: TestClient) -> None:
    r = client.post("/users", json={"email": "bob@dylan.com", "password": "toto1234!"})
    assert r.status_code == 201
    assert r.json() == {"handler": "post_new", "email": "bob@dylan.com"}


def test_handler_response_is_returned_verbatim(client: TestClient) -> None:
    r = client.get("/disconnect")
    assert r.status_code == 204


@pytest.mark.parametrize(
    ("method", "path"),
    [("GET", "/users"), ("DELETE", "/users"), ("GET", "/unknown"), ("PUT", "/status")],
)
def test_unregistered_routes_are_not_found(client: TestClient, controllers, method, path) -> None:
    r = client.request(method, path)

    assert r.status_code == 404
    assert r.json() == {
        "detail": {
            "error_code": "route_not_found",
            "error_message": f"No route for {method} {path}",
        }
    }
    assert controllers.users.calls == []
    assert controllers.app.calls == []


def test_request_id_is_propagated(client: TestClient) -> None:
    r = client.get("/status", headers={"X-Request-ID": "req-123"})
    assert r.headers["X-Request-ID"] == "req-123"


def test_request_id_is_minted(client: TestClient) -> None:
    r = client.get("/unknown")
    assert r.headers["X-Request-ID"]


def test_table_is_exposed_on_app_state(client: TestClient) -> None:
    table = client.app.state.route_table  # type: ignore[attr-defined]
    assert len(table) == 6
    assert ("POST", "/users") in table


def test_routes_are_mounted_under_prefix(controllers: Controllers) -> None:
    app = create_app(**controllers.kwargs(), prefix="/api/")
    with TestClient(app) as c:
        assert c.get("/api/status").status_code == 200
        assert c.get("/status").status_code == 404
        miss = c.get("/api/users")
        assert miss.status_code == 404
        assert miss.json()["detail"]["error_code"] == "route_not_found"
    assert controllers.app.calls == ["get_status"]


def test_prefix_defaults_to_environment(monkeypatch, controllers: Controllers) -> None:
    monkeypatch.setenv("API_PREFIX", "v1")
    app = create_app(**controllers.kwargs())
    with TestClient(app) as c:
        assert c.get("/v1/stats").json() == {"handler": "get_stats"}


def test_handler_errors_propagate(controllers: Controllers) -> None:
    async def broken(request: Request):
        raise RuntimeError("db down")

    controllers.app.get_status = broken  # type: ignore[method-assign]
    app = create_app(**controllers.kwargs(), prefix="")
    with TestClient(app) as c:
        with pytest.raises(RuntimeError, match="db down"):
            c.get("/status")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [(None, ""), ("", ""), ("/", ""), ("api", "/api"), ("/api/", "/api"), ("/a/b", "/a/b")],
)
def test_normalize_prefix(raw, expected) -> None:
    assert normalize_prefix(raw) == expected


@pytest.mark.parametrize("method", ["TRACE", "PROPFIND", "BREW"])
def test_unknown_verbs_are_not_found(client: TestClient, controllers, method) -> None:
    r = client.request(method, "/status")

    assert r.status_code == 404
    assert r.json()["detail"] == {
        "error_code": "route_not_found",
        "error_message": f"No route for {method} /status",
    }
    assert controllers.app.calls == []


@pytest.mark.parametrize("path", ["/stat%75s", "/users%2Fme", "/%73tatus"])
def test_percent_encoded_paths_are_matched_literally(client: TestClient, controllers, path) -> None:
    r = client.get(path)

    assert r.status_code == 404
    assert r.json()["detail"]["error_message"] == f"No route for GET {path}"
    assert controllers.app.calls == []
    assert controllers.users.calls == []


def test_query_string_is_not_part_of_the_path(client: TestClient, controllers) -> None:
    assert client.get("/status?verbose=1").status_code == 200
    assert controllers.app.calls == ["get_status"]


def test_encoded_prefix_is_not_found(controllers: Controllers) -> None:
    app = create_app(**controllers.kwargs(), prefix="/api")
    with TestClient(app) as c:
        r = c.get("/ap%69/status")
        assert r.status_code == 404
        assert r.json()["detail"]["error_code"] == "route_not_found"
        assert c.get("/api/status").status_code == 200
    assert controllers.app.calls == ["get_status"]


def test_openapi_documents_table_entries(controllers: Controllers) -> None:
    app = create_app(**controllers.kwargs(), prefix="/api")
    schema = app.openapi()

    assert set(schema["paths"]) == {
        "/api/status",
        "/api/stats",
        "/api/connect",
        "/api/disconnect",
        "/api/users/me",
        "/api/users",
    }
    assert schema["paths"]["/api/users"]["post"]["summary"] == "Create a new user record"
    assert schema["paths"]["/api/status"]["get"]["summary"] == "Report process health"
    assert "get" not in schema["paths"]["/api/users"]
    assert app.openapi() is schema
