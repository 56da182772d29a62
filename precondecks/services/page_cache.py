"""
Local copy of deck pages.

Each deck page is fetched once and stored under the temp directory with a
name derived from its URL. An existing file is never re-fetched; there is no
freshness check.
"""

import asyncio
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TypedDict

import httpx

from precondecks.models.entities import DeckListEntry
from precondecks.scrapers.fetch import FetchError, fetch_page
from precondecks.services.files import sanitize_filename, write_text_atomic

logger = logging.getLogger(__name__)


class CacheResult(TypedDict):
    """Result of building the local copy."""

    cached: list[str]
    failed: dict[str, str]


def cache_path(temp_dir: Path, source_url: str) -> Path:
    """
    Local path for a cached page.

    "https://mtg.wtf/deck/znc/land-s-wrath" -> temp_dir / "httpsmtg.wtfdeckzncland-s-wrath"
    """
    return temp_dir / sanitize_filename(source_url)


async def ensure_cached(
    client: httpx.AsyncClient,
    entry: DeckListEntry,
    temp_dir: Path,
    *,
    retries: int = 3,
    backoff: float = 0.5,
) -> Path:
    """
    Make sure the entry's page exists in the cache.

    Args:
        client: HTTP client for connection reuse
        entry: Deck whose source page is cached
        temp_dir: Cache directory
        retries: Retry attempts per fetch
        backoff: Base retry delay in seconds

    Returns:
        Path of the cached page

    Raises:
        FetchError: If the page is not cached and cannot be fetched
    """
    path = cache_path(temp_dir, entry.source_url)
    if path.exists():
        return path

    html = await fetch_page(client, entry.source_url, retries=retries, backoff=backoff)
    await asyncio.to_thread(write_text_atomic, path, html)
    return path


async def build_local_copy(
    entries: list[DeckListEntry],
    temp_dir: Path,
    client: httpx.AsyncClient,
    *,
    concurrency: int = 4,
    retries: int = 3,
    backoff: float = 0.5,
    on_progress: Callable[[DeckListEntry], None] | None = None,
) -> CacheResult:
    """
    Cache every entry's page, fetching at most ``concurrency`` at a time.

    Continues on individual failures.

    Args:
        entries: Decks to cache
        temp_dir: Cache directory (must exist)
        client: HTTP client shared by all fetches
        concurrency: Maximum fetches in flight
        retries: Retry attempts per fetch
        backoff: Base retry delay in seconds
        on_progress: Called once per entry when it is done, success or not

    Returns:
        Dict with 'cached' (entry ids) and 'failed' (entry id -> error)
    """
    semaphore = asyncio.Semaphore(concurrency)
    cached: list[str] = []
    failed: dict[str, str] = {}

    async def cache_one(entry: DeckListEntry) -> None:
        async with semaphore:
            try:
                await ensure_cached(client, entry, temp_dir, retries=retries, backoff=backoff)
                cached.append(entry.id)
            except (FetchError, OSError) as e:
                logger.error("Could not cache %r from %s: %s", entry.id, entry.source_url, e)
                failed[entry.id] = str(e)
        if on_progress:
            on_progress(entry)

    await asyncio.gather(*(cache_one(entry) for entry in entries))
    return {"cached": cached, "failed": failed}
