"""Shared fixtures: a scripted fake of the wallet API behind httpx.MockTransport."""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from earnlearn.client import WalletClient
from earnlearn.config import ClientConfig
from earnlearn.session import Session

TOKEN = "test-token"


def make_tx(
    tx_id: str = "tx1",
    status: str = "funded",
    is_provider: bool = False,
    amount: Any = 100,
    **extra: Any,
) -> dict:
    tx = {
        "id": tx_id,
        "title": f"Job {tx_id}",
        "jobType": "job",
        "amount": amount,
        "status": status,
        "clientName": "Alice Client",
        "clientEmail": "alice@example.com",
        "providerName": "John Developer",
        "providerEmail": "john@example.com",
        "createdAt": "2025-06-01T10:00:00Z",
        "updatedAt": "2025-06-02T10:00:00Z",
        "description": "Website development",
        "isProvider": is_provider,
    }
    tx.update(extra)
    return tx


class FakeWalletApi:
    """
    Records every request and answers from ``routes``.

    A route value is either a ``(status, body)`` tuple or a callable taking the
    request and returning an ``httpx.Response``.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], Any] = {}

    def on(self, method: str, path: str, response: Any) -> None:
        self.routes[(method, path)] = response

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [
            r for r in self.requests if r.method == method and r.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, json=body)

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


@pytest.fixture
def api() -> FakeWalletApi:
    return FakeWalletApi()


@pytest.fixture
def session() -> Session:
    return Session.with_token(TOKEN)


@pytest.fixture
async def client(api, session):
    wallet = WalletClient(session, ClientConfig(), transport=httpx.MockTransport(api.handler))
    yield wallet
    await wallet.close()
