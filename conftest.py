"""Shared fixtures for the grammr test suite."""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

import analysis_client
import cache
import ratelimit


@pytest.fixture(autouse=True)
def clean_state():
    """Caches and rate-limit buckets are module globals; reset them per test."""
    cache.cache_clear()
    ratelimit.rate_limit_reset()
    yield
    cache.cache_clear()
    ratelimit.rate_limit_reset()


@pytest.fixture()
def backend_stub(monkeypatch):
    """Route analysis_client traffic to canned responses.

    Usage:
        backend_stub.respond("/api/v1/translation", 200, {...})
    Every request seen is appended to backend_stub.requests.
    """
    class _Stub:
        def __init__(self):
            self.routes = {}
            self.requests = []

        def respond(self, path, status_code, body):
            self.routes[path] = (status_code, body)

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            if request.url.path not in self.routes:
                return httpx.Response(404, json={"error": "not found"})
            status_code, body = self.routes[request.url.path]
            if isinstance(body, (dict, list)):
                return httpx.Response(status_code, json=body)
            return httpx.Response(status_code, content=body)

        def last_json(self):
            return json.loads(self.requests[-1].content)

    stub = _Stub()
    monkeypatch.setattr(analysis_client, "_transport", httpx.MockTransport(stub.handler))
    monkeypatch.setattr(analysis_client, "BACKEND_HOST", "http://backend.test")
    monkeypatch.setattr(analysis_client, "MOCK_BACKEND", False)
    return stub


@pytest.fixture()
def client():
    from backend import app
    with TestClient(app) as test_client:
        yield test_client
