"""
Build deck list files from the precon deck index.

Stages run in sequence:
1. Parse the index page into sets, types, and deck stubs
2. Cache every deck page locally (bounded concurrency)
3. Parse each cached page and write its .dck file

Usage:
    python -m precondecks.jobs.build_decklists --clean --out-dir decks
"""

import argparse
import asyncio
import logging
import shutil
import sys
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from precondecks.config import Settings, settings
from precondecks.models.store import Repository
from precondecks.scrapers.deck_page import DeckPageError, parse_deck_page
from precondecks.scrapers.fetch import FetchError, create_client, fetch_page
from precondecks.scrapers.index_page import IndexLayoutError, parse_index_page
from precondecks.services.decklist_writer import write_decklist
from precondecks.services.page_cache import build_local_copy, cache_path

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one run."""

    listed: int = 0
    written: list[Path] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


def _progress(*_args: object) -> None:
    print(".", end="", flush=True)


def prepare_directory(path: Path, clean: bool) -> None:
    """
    Create a working directory, emptying it first when clean is set.

    Raises:
        OSError: If the directory cannot be removed or created
    """
    if clean and path.exists():
        shutil.rmtree(path)
    path.mkdir(parents=True, exist_ok=True)


async def build_repository(
    url: str, client: httpx.AsyncClient, config: Settings
) -> Repository:
    """
    Fetch and parse the index page.

    Raises:
        FetchError: If the index page cannot be fetched
        IndexLayoutError: If the page structure changed
    """
    repository = Repository()
    html = await fetch_page(
        client, url, retries=config.fetch_retries, backoff=config.fetch_backoff
    )
    print("Parsing index.")
    parse_index_page(html, url, repository)
    return repository


def build_decklists(repository: Repository, config: Settings, result: PipelineResult) -> None:
    """Parse each cached page and write its deck list, skipping failed entries."""
    for entry in repository.entries:
        if entry.id in result.failed:
            _progress()
            continue

        try:
            html = cache_path(config.temp_dir, entry.source_url).read_text(encoding="utf-8")
            parse_deck_page(html, entry)
            result.written.append(write_decklist(entry, config.out_dir))
            logger.debug("Wrote %r with %d cards", entry.id, entry.card_count)
        except (DeckPageError, OSError, UnicodeDecodeError) as e:
            logger.error("Could not build %r from %s: %s", entry.id, entry.source_url, e)
            result.failed[entry.id] = str(e)

        _progress()


async def run_pipeline(config: Settings | None = None) -> PipelineResult:
    """
    Run all stages.

    Args:
        config: Settings for this run. Defaults to environment settings.

    Returns:
        Counts of listed, written, and failed decks

    Raises:
        FetchError: If the index page cannot be fetched
        IndexLayoutError: If the index page structure changed
        OSError: If the working directories cannot be prepared
    """
    config = config or settings
    result = PipelineResult()

    async with create_client(config) as client:
        repository = await build_repository(config.source_url, client, config)
        entries = repository.entries.all()
        result.listed = len(entries)

        prepare_directory(config.temp_dir, config.clean)
        print(f"{result.listed} decks listed, create local copy.")
        cache_result = await build_local_copy(
            entries,
            config.temp_dir,
            client,
            concurrency=config.fetch_concurrency,
            retries=config.fetch_retries,
            backoff=config.fetch_backoff,
            on_progress=_progress,
        )
        result.failed.update(cache_result["failed"])

    prepare_directory(config.out_dir, config.clean)
    print("\nBuilding decks.")
    build_decklists(repository, config, result)
    print()

    logger.info(
        "Built %d of %d decks (%d failed)",
        len(result.written),
        result.listed,
        len(result.failed),
    )
    return result


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build deck list files from the precon index")
    parser.add_argument(
        "--clean",
        action="store_true",
        default=None,
        help="Delete temp and output directories before running",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Print every parsed card",
    )
    parser.add_argument("--out-dir", type=Path, help="Deck list directory (default: ./decks)")
    parser.add_argument("--temp-dir", type=Path, help="Page cache directory (default: ./temp)")
    parser.add_argument("--source-url", help="Index page URL")
    parser.add_argument(
        "--concurrency",
        type=int,
        choices=range(1, 9),
        metavar="{1..8}",
        help="Maximum concurrent page fetches (default: 4)",
    )
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace, base: Settings = settings) -> Settings:
    """Overlay command line flags on the environment settings."""
    overrides = {
        "clean": args.clean,
        "debug": args.debug,
        "out_dir": args.out_dir,
        "temp_dir": args.temp_dir,
        "source_url": args.source_url,
        "fetch_concurrency": args.concurrency,
    }
    return base.model_copy(update={k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    config = settings_from_args(parse_args(argv))

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    try:
        result = asyncio.run(run_pipeline(config))
    except IndexLayoutError as e:
        logger.error("Index page layout changed: %s", e)
        sys.exit(1)
    except FetchError as e:
        logger.error("Index page unavailable: %s", e)
        sys.exit(1)
    except OSError as e:
        logger.error("Cannot prepare working directories: %s", e)
        sys.exit(1)

    print(f"{len(result.written)} decks built.")
    if not result.ok:
        print(f"\nFailed {len(result.failed)} decks:")
        for entry_id, error in result.failed.items():
            print(f"  {entry_id}: {error}")
        sys.exit(1)


if __name__ == "__main__":
    main()
