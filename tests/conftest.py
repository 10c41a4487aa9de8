"""Pytest fixtures and configuration."""

import os

# Widgets must render without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import json
from typing import Any, Optional

import httpx
import pytest

from playledger.app import ApplicationContext
from playledger.data.api_client import ApiClient
from playledger.domain.models import Game, Member, Transaction
from playledger.state.persistence import SettingsStore

BASE_URL = "http://lounge.test/api"


class FakeBackend:
    """In-memory stand-in for the lounge REST server.

    Serves /transactions, /members and /games over httpx.MockTransport,
    records every request, and can be told to fail specific calls.
    """

    def __init__(self):
        self.transactions: list[dict[str, Any]] = []
        self.members: list[dict[str, Any]] = [
            {"memberId": 1, "name": "Ana"},
            {"memberId": 2, "name": "Ben"},
        ]
        self.games: list[dict[str, Any]] = [
            {"gameId": 7, "gameName": "Chess"},
            {"gameId": 8, "gameName": "Go"},
        ]
        self.transactions_key = "data"
        self.requests: list[tuple[str, str, Any]] = []
        self._failures: dict[tuple[str, str], Any] = {}
        self._next_id = 1

    def add_transaction(self, **fields: Any) -> dict[str, Any]:
        record = {
            "transactionId": self._next_id,
            "memberId": 1,
            "gameId": 7,
            "playTimeHrs": 2,
            "cost": 10,
            "transactionDate": "2024-01-01T10:00:00",
        }
        record.update(fields)
        self._next_id = max(self._next_id, record["transactionId"]) + 1
        self.transactions.append(record)
        return record

    def fail(
        self,
        method: str,
        path: str,
        status: int = 500,
        body: Any = None,
        exc: Optional[Exception] = None,
    ) -> None:
        """Make the next `method path` call fail with a status or exception."""
        self._failures[(method, path)] = exc if exc is not None else (status, body)

    def writes(self) -> list[tuple[str, str, Any]]:
        """Recorded non-GET requests."""
        return [r for r in self.requests if r[0] != "GET"]

    def handle(self, request: httpx.Request) -> httpx.Response:
        method = request.method
        path = request.url.path.removeprefix("/api")
        body = json.loads(request.content) if request.content else None
        self.requests.append((method, path, body))

        failure = self._failures.pop((method, path), None)
        if isinstance(failure, Exception):
            raise failure
        if failure is not None:
            status, fail_body = failure
            return httpx.Response(status, json=fail_body)

        if method == "GET" and path == "/transactions":
            return httpx.Response(200, json={self.transactions_key: self.transactions})
        if method == "GET" and path == "/members":
            return httpx.Response(200, json={"data": self.members})
        if method == "GET" and path == "/games":
            return httpx.Response(200, json={"data": self.games})
        if method == "POST" and path == "/transactions":
            record = self.add_transaction(**body)
            return httpx.Response(201, json=record)

        if path.startswith("/transactions/"):
            transaction_id = int(path.rsplit("/", 1)[1])
            existing = [t for t in self.transactions if t["transactionId"] == transaction_id]
            if not existing:
                return httpx.Response(404, json={"message": "Transaction not found"})
            if method == "PUT":
                existing[0].update(body)
                return httpx.Response(200, json=existing[0])
            if method == "DELETE":
                self.transactions.remove(existing[0])
                return httpx.Response(204)

        return httpx.Response(404, json={"message": f"No route {method} {path}"})


@pytest.fixture
def backend():
    """Fresh fake backend for each test."""
    return FakeBackend()


@pytest.fixture
async def api_client(backend):
    """ApiClient talking to the fake backend."""
    client = ApiClient(BASE_URL, transport=httpx.MockTransport(backend.handle))
    yield client
    await client.close()


@pytest.fixture
async def context(backend, tmp_path):
    """ApplicationContext wired to the fake backend (not yet refreshed)."""
    ctx = ApplicationContext(
        SettingsStore(tmp_path / "settings.json"),
        base_url=BASE_URL,
        transport=httpx.MockTransport(backend.handle),
    )
    yield ctx
    await ctx.close()


@pytest.fixture
def make_transaction():
    """Factory fixture for creating test transactions."""

    def _make(**kwargs):
        defaults = {
            "transactionId": 1,
            "memberId": 1,
            "gameId": 7,
            "playTimeHrs": 1.5,
            "cost": 9.99,
            "transactionDate": "2024-01-01T10:00:00",
        }
        defaults.update(kwargs)
        return Transaction.from_wire(defaults)

    return _make


@pytest.fixture
def members():
    return [Member(member_id=1, name="Ana"), Member(member_id=2, name="Ben")]


@pytest.fixture
def games():
    return [Game(game_id=7, game_name="Chess"), Game(game_id=8, game_name="Go")]
