"""Tests for the HTTP transport."""

import httpx
import pytest

from playledger.data.api_client import ApiClient
from playledger.data.errors import ApiError


class TestApiClient:
    """Tests for ApiClient against the fake backend."""

    @pytest.mark.asyncio
    async def test_get_returns_decoded_body(self, api_client):
        body = await api_client.get("/members")
        assert body["data"][0] == {"memberId": 1, "name": "Ana"}

    @pytest.mark.asyncio
    async def test_post_sends_json(self, api_client, backend):
        await api_client.post("/transactions", {"memberId": 2, "gameId": 8})

        method, path, body = backend.requests[-1]
        assert (method, path) == ("POST", "/transactions")
        assert body == {"memberId": 2, "gameId": 8}

    @pytest.mark.asyncio
    async def test_empty_body_decodes_to_none(self, api_client, backend):
        """A 204 No Content delete returns None."""
        backend.add_transaction(transactionId=4)

        assert await api_client.delete("/transactions/4") is None

    @pytest.mark.asyncio
    async def test_status_error_carries_server_message(self, api_client):
        with pytest.raises(ApiError) as exc_info:
            await api_client.put("/transactions/99", {"cost": 1})

        error = exc_info.value
        assert error.status_code == 404
        assert error.server_message == "Transaction not found"
        assert error.payload == {"message": "Transaction not found"}

    @pytest.mark.asyncio
    async def test_status_error_without_message(self, api_client, backend):
        backend.fail("GET", "/games", status=503, body={"error": "down"})

        with pytest.raises(ApiError) as exc_info:
            await api_client.get("/games")

        assert exc_info.value.status_code == 503
        assert exc_info.value.server_message is None
        assert "503" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, api_client, backend):
        """Connection failures surface as ApiError with no status."""
        backend.fail("GET", "/members", exc=httpx.ConnectError("connection refused"))

        with pytest.raises(ApiError) as exc_info:
            await api_client.get("/members")

        assert exc_info.value.status_code is None
        assert "connection refused" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_trailing_slash_is_stripped(self):
        client = ApiClient("http://lounge.test/api/")
        try:
            assert client.base_url == "http://lounge.test/api"
        finally:
            await client.close()
