import time
from dataclasses import dataclass

import jwt
import pytest

from admin_console import create_app
from admin_console.api_client import ApiClient

BASE = "http://backend.test/api"


def make_token(role="ADMIN", sub="admin-1", exp_in=3600, **extra):
    payload = {"id": sub, "role": role, "email": f"{sub}@example.com", **extra}
    if exp_in is not None:
        payload["exp"] = int(time.time()) + exp_in
    return jwt.encode(payload, "not-checked-by-the-console", algorithm="HS256")


class FakeResponse:
    def __init__(self, status=200, body=None):
        self.status_code = status
        self._body = body
        self.headers = {"content-type": "application/json"} if body is not None else {}
        self.content = b"{}" if body is not None else b""
        self.text = str(body or "")

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._body


@dataclass
class Call:
    method: str
    path: str
    params: dict | None
    json: dict | None
    headers: dict


class FakeHttp:
    """Stands in for requests.Session; routes are (METHOD, path) → body or callable."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method, path, body=None, status=200):
        self.routes[(method, path)] = (status, body)

    def on(self, method, path, handler):
        self.routes[(method, path)] = handler

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(BASE):] if url.startswith(BASE) else url
        call = Call(method, path, params, json, headers or {})
        self.calls.append(call)
        route = self.routes.get((method, path))
        if route is None:
            return FakeResponse(404, {"message": f"no route {method} {path}"})
        if callable(route):
            result = route(call)
            if isinstance(result, FakeResponse):
                return result
            return FakeResponse(200, result)
        status, body = route
        return FakeResponse(status, body)

    def sent(self, method, path=None):
        return [c for c in self.calls if c.method == method and (path is None or c.path == path)]


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def api(http):
    return ApiClient(BASE, token_provider=lambda: "tok", http=http)


@pytest.fixture
def app(http):
    app = create_app({"TESTING": True, "API_BASE_URL": BASE, "SECRET_KEY": "test"}, http=http)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    client.set_cookie("token", make_token("ADMIN"))
    return client


@pytest.fixture
def superadmin_client(client):
    client.set_cookie("token", make_token("SUPERADMIN", sub="root-1"))
    return client


def page_body(items, total, page=1, limit=5):
    return {"data": items, "total": total, "page": page, "limit": limit}
