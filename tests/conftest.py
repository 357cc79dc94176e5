import json
from typing import Any, Dict, List, Optional

import pytest

from shared import config, graph

GRAPH_ENV = {
    "GRAPH_TENANT_ID": "contoso-tenant",
    "GRAPH_CLIENT_ID": "client-123",
    "GRAPH_CLIENT_SECRET": "s3cret",
    "SHAREPOINT_SITE_ID": "contoso.sharepoint.com,site-guid,web-guid",
    "SHAREPOINT_LIST_ID": "list-guid",
}

NOT_JSON = object()


class FakeResponse:
    def __init__(self, status_code: int, payload: Any = None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._payload is NOT_JSON:
            raise json.JSONDecodeError("Expecting value", "<html>", 0)
        return self._payload


class FakeGraph:
    """Stands in for requests.post / requests.get inside shared.graph and records each call."""

    def __init__(self, token_response: FakeResponse, list_response: Optional[FakeResponse] = None):
        self.token_response = token_response
        self.list_response = list_response
        self.calls: List[Dict[str, Any]] = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"method": "POST", "url": url, "data": data, "headers": headers, "timeout": timeout})
        return self.token_response

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"method": "GET", "url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.list_response is None:
            raise AssertionError("list endpoint should not have been called")
        return self.list_response


class StubContext:
    invocation_id = "inv-0001"


@pytest.fixture(autouse=True)
def _fresh_settings():
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


@pytest.fixture
def graph_env(monkeypatch):
    for key, value in GRAPH_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("GRAPH_SCOPE", raising=False)
    monkeypatch.delenv("GRAPH_HTTP_TIMEOUT", raising=False)
    return GRAPH_ENV


@pytest.fixture
def settings():
    return config.load_settings(GRAPH_ENV)


@pytest.fixture
def fake_graph(monkeypatch):
    """Install a FakeGraph; call the returned function with the token and list responses."""

    def install(token_response: FakeResponse, list_response: Optional[FakeResponse] = None) -> FakeGraph:
        fake = FakeGraph(token_response, list_response)
        monkeypatch.setattr(graph.requests, "post", fake.post)
        monkeypatch.setattr(graph.requests, "get", fake.get)
        return fake

    return install


@pytest.fixture
def context():
    return StubContext()


def token_ok(token: str = "eyJ0eXAi.fake.token") -> FakeResponse:
    return FakeResponse(200, {"token_type": "Bearer", "expires_in": 3599, "access_token": token})
