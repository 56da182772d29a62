"""
HTTP fetching for index and deck pages.

Pages are fetched as markup text. Timeouts, transport errors, HTTP 429 and
5xx responses are retried with linear backoff; other error statuses fail
immediately.
"""

import asyncio
import logging

import httpx

from precondecks.config import Settings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class FetchError(Exception):
    """Raised when a page cannot be fetched."""

    pass


def create_client(settings: Settings) -> httpx.AsyncClient:
    """
    Build the shared HTTP client for one run.

    Args:
        settings: Pipeline settings (user agent, timeout, concurrency)

    Returns:
        Client with redirects enabled and a per-request timeout
    """
    return httpx.AsyncClient(
        headers={"User-Agent": settings.user_agent},
        follow_redirects=True,
        timeout=settings.fetch_timeout,
        limits=httpx.Limits(max_connections=settings.fetch_concurrency),
    )


async def fetch_page(
    client: httpx.AsyncClient,
    url: str,
    *,
    retries: int = 3,
    backoff: float = 0.5,
) -> str:
    """
    Fetch a page and return its markup.

    Args:
        client: HTTP client for connection reuse
        url: Absolute page URL
        retries: Extra attempts after the first failure
        backoff: Base delay in seconds, multiplied by the attempt number

    Returns:
        Raw markup text

    Raises:
        FetchError: If the page could not be fetched
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            response = await client.get(url)
            response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status not in RETRYABLE_STATUS_CODES or attempt > retries:
                raise FetchError(f"Failed to fetch {url}: HTTP {status}") from e
            reason = f"HTTP {status}"
        except httpx.TimeoutException as e:
            if attempt > retries:
                raise FetchError(f"Failed to fetch {url}: timed out") from e
            reason = "timed out"
        except httpx.TransportError as e:
            if attempt > retries:
                raise FetchError(f"Failed to fetch {url}: {e}") from e
            reason = str(e) or type(e).__name__
        except httpx.RequestError as e:
            # Redirect loops and decoding errors fail without retry
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        delay = backoff * attempt
        logger.warning(
            "Fetch of %s failed (%s), attempt %d/%d; retrying in %.1fs",
            url,
            reason,
            attempt,
            retries + 1,
            delay,
        )
        await asyncio.sleep(delay)
