"""Shared test fixtures for cloudinv tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

SESSION_ID = "b00db39f948d13ea1e59b4d6fce11ecf"


@pytest.fixture()
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


class RecordingHandler:
    """httpx MockTransport handler that records requests and serves canned routes.

    Routes map ``(method, path)`` to a response factory or a JSON body. The
    session endpoint is answered automatically unless overridden.
    """

    def __init__(self, routes: dict[tuple[str, str], object] | None = None) -> None:
        self.session_id = SESSION_ID
        self.routes: dict[tuple[str, str], object] = {
            ("POST", "/api/session"): lambda request: httpx.Response(200, json=SESSION_ID),
            ("DELETE", "/api/session"): lambda request: httpx.Response(204),
        }
        self.routes.update(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error_type": "NOT_FOUND"})
        if callable(route):
            return route(request)
        return httpx.Response(200, content=json.dumps(route).encode())

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        """Return recorded requests matching method and path."""
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture()
def make_handler() -> Callable[..., RecordingHandler]:
    """Factory for recording mock handlers."""
    return RecordingHandler


@pytest.fixture()
def mock_azure_credential():
    """Replace the azure-identity credential with a fake issuing a fixed token."""
    token = MagicMock()
    token.token = "fake-arm-token"
    credential = MagicMock()
    credential.get_token = AsyncMock(return_value=token)
    credential.__aenter__ = AsyncMock(return_value=credential)
    credential.__aexit__ = AsyncMock(return_value=None)
    with patch("cloudinv.api.auth.ClientSecretCredential", return_value=credential) as cls:
        yield cls
