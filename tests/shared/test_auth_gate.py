"""
Test Authorization Gate

This module tests the session gate in isolation:
- Rejection of unauthenticated requests
- Pass-through of authenticated requests
- Custom predicates
- Apps without session support
- Gate checked before the request body
"""

import pytest
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.testclient import TestClient
from starlette.middleware.sessions import SessionMiddleware

from pydantic import BaseModel

from careadmin.shared.auth import AuthorizationGate, GatedRoute, SESSION_USER_KEY, require_auth
from careadmin.shared.exceptions import UNAUTHORIZED_MESSAGE, register_exception_handlers


def build_app(gate=require_auth, with_sessions=True):
    """Mini app with a sentinel handler behind the gate"""
    app = FastAPI()
    app.state.calls = 0
    register_exception_handlers(app)

    @app.post("/session")
    async def start_session(request: Request):
        request.session[SESSION_USER_KEY] = "user-1"
        return {"ok": True}

    @app.get("/protected", dependencies=[Depends(gate)])
    async def protected(request: Request):
        request.app.state.calls += 1
        return {"handled": True}

    if with_sessions:
        app.add_middleware(SessionMiddleware, secret_key="test-secret")
    return app


def test_unauthenticated_request_is_rejected():
    app = build_app()
    client = TestClient(app)

    response = client.get("/protected")

    assert response.status_code == 401
    assert response.json() == {"error": UNAUTHORIZED_MESSAGE}
    assert app.state.calls == 0


def test_rejection_message_is_exact():
    assert UNAUTHORIZED_MESSAGE == "Unauthorized. Please log in to access this resource."


def test_authenticated_request_reaches_handler():
    app = build_app()
    client = TestClient(app)
    client.post("/session")

    response = client.get("/protected")

    assert response.status_code == 200
    assert response.json() == {"handled": True}
    assert app.state.calls == 1


def test_custom_predicate():
    gate = AuthorizationGate(lambda request: request.headers.get("x-test-auth") == "yes")
    app = build_app(gate=gate)
    client = TestClient(app)

    assert client.get("/protected").status_code == 401
    assert client.get("/protected", headers={"x-test-auth": "yes"}).status_code == 200
    assert app.state.calls == 1


def test_app_without_sessions_fails_closed():
    app = build_app(with_sessions=False)
    client = TestClient(app)

    response = client.get("/protected")

    assert response.status_code == 401
    assert app.state.calls == 0


@pytest.mark.asyncio
async def test_gate_returns_none_when_allowed():
    gate = AuthorizationGate(lambda request: True)
    assert await gate(request=None) is None


class Item(BaseModel):
    name: str


def build_body_app():
    """Mini app whose gated route takes a JSON body"""
    app = build_app()
    router = APIRouter(route_class=GatedRoute)

    @router.post("/items", dependencies=[Depends(require_auth)])
    async def create_item(item: Item, request: Request):
        request.app.state.calls += 1
        return {"name": item.name}

    @router.post("/echo")
    async def echo(item: Item):
        return {"name": item.name}

    app.include_router(router)
    return app


@pytest.mark.parametrize("body", ["{bad", '{"name": 5}', "{}"])
def test_gate_runs_before_body_validation(body):
    app = build_body_app()
    client = TestClient(app)

    response = client.post("/items", content=body, headers={"Content-Type": "application/json"})

    assert response.status_code == 401
    assert response.json() == {"error": UNAUTHORIZED_MESSAGE}
    assert app.state.calls == 0


def test_authenticated_invalid_body_still_validated():
    app = build_body_app()
    client = TestClient(app)
    client.post("/session")

    assert client.post("/items", content="{bad", headers={"Content-Type": "application/json"}).status_code == 400
    assert client.post("/items", json={"name": "ok"}).json() == {"name": "ok"}
    assert app.state.calls == 1


def test_ungated_route_is_untouched():
    client = TestClient(build_body_app())

    assert client.post("/echo", json={"name": "ok"}).json() == {"name": "ok"}
    assert client.post("/echo", json={}).status_code == 400
