"""
Async HTTP Client Tests
"""

import httpx
import pytest

from shared.network import GaugeHTTP, GaugeHTTPError


def _client(handler, **kwargs):
    kwargs.setdefault("backoff_base", 0.0)
    return GaugeHTTP(
        base_url="https://range.test",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


class TestGaugeHTTP:
    """Tests for retry and error mapping."""

    @pytest.mark.asyncio
    async def test_success_returns_body(self):
        async with _client(lambda request: httpx.Response(200, text="ok")) as http:
            assert await http.fetch_text("/range/abcde") == "ok"

    @pytest.mark.asyncio
    async def test_retries_transient_status(self):
        statuses = iter([503, 200])
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(next(statuses), text="done")

        async with _client(handler, max_retries=1) as http:
            assert await http.fetch_text("/x") == "done"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        async with _client(handler, max_retries=3) as http:
            with pytest.raises(GaugeHTTPError) as exc_info:
                await http.fetch("/x")

        assert exc_info.value.status_code == 404
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_transport_error_exhausts_retries(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler, max_retries=2) as http:
            with pytest.raises(GaugeHTTPError):
                await http.fetch("/x")
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_headers_sent(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200)

        async with _client(handler, user_agent="Test/1.0") as http:
            await http.fetch("/x", headers={"Add-Padding": "true"})

        assert seen["user-agent"] == "Test/1.0"
        assert seen["add-padding"] == "true"
