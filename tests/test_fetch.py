"""Tests for page fetching (mocked HTTP)."""

import httpx
import pytest
import respx

from precondecks.config import Settings
from precondecks.scrapers.fetch import FetchError, create_client, fetch_page

URL = "https://mtg.wtf/deck/znc/land-s-wrath"


class TestFetchPage:
    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_markup(self) -> None:
        """Successful responses return the body text."""
        respx.get(URL).mock(return_value=httpx.Response(200, text="<html></html>"))

        async with httpx.AsyncClient() as client:
            html = await fetch_page(client, URL)

        assert html == "<html></html>"

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_server_errors(self) -> None:
        """5xx responses are retried."""
        route = respx.get(URL).mock(
            side_effect=[httpx.Response(503), httpx.Response(200, text="ok")]
        )

        async with httpx.AsyncClient() as client:
            html = await fetch_page(client, URL, retries=2, backoff=0)

        assert html == "ok"
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_timeouts(self) -> None:
        """Timeouts are retried and reported once attempts run out."""
        route = respx.get(URL).mock(side_effect=httpx.ConnectTimeout)

        async with httpx.AsyncClient() as client:
            with pytest.raises(FetchError, match="timed out"):
                await fetch_page(client, URL, retries=1, backoff=0)

        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_retries_transport_errors(self) -> None:
        """Connection failures are retried."""
        route = respx.get(URL).mock(
            side_effect=[httpx.ConnectError, httpx.Response(200, text="ok")]
        )

        async with httpx.AsyncClient() as client:
            assert await fetch_page(client, URL, retries=1, backoff=0) == "ok"

        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_client_errors_fail_immediately(self) -> None:
        """4xx responses other than 429 are not retried."""
        route = respx.get(URL).mock(return_value=httpx.Response(404))

        async with httpx.AsyncClient() as client:
            with pytest.raises(FetchError, match="HTTP 404"):
                await fetch_page(client, URL, retries=3, backoff=0)

        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_gives_up_after_retries(self) -> None:
        """Persistent server errors raise FetchError."""
        route = respx.get(URL).mock(return_value=httpx.Response(500))

        async with httpx.AsyncClient() as client:
            with pytest.raises(FetchError, match="HTTP 500"):
                await fetch_page(client, URL, retries=2, backoff=0)

        assert route.call_count == 3

    @pytest.mark.asyncio
    @respx.mock
    async def test_redirect_loop_is_not_retried(self) -> None:
        """Other request errors become FetchError on the first attempt."""
        route = respx.get(URL).mock(side_effect=httpx.TooManyRedirects)

        async with httpx.AsyncClient() as client:
            with pytest.raises(FetchError, match="Failed to fetch"):
                await fetch_page(client, URL, retries=3, backoff=0)

        assert route.call_count == 1


class TestCreateClient:
    @pytest.mark.asyncio
    @respx.mock
    async def test_sends_user_agent(self) -> None:
        """The configured user agent is sent with every request."""
        route = respx.get(URL).mock(return_value=httpx.Response(200, text=""))
        config = Settings(user_agent="TestAgent/2.0", fetch_timeout=5.0)

        async with create_client(config) as client:
            await fetch_page(client, URL)

        assert route.calls.last.request.headers["User-Agent"] == "TestAgent/2.0"
