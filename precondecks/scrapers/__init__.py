from precondecks.scrapers.deck_page import DeckPageError, parse_deck_page
from precondecks.scrapers.fetch import FetchError, create_client, fetch_page
from precondecks.scrapers.index_page import (
    IndexLayoutError,
    extract_parenthesized,
    parse_index_page,
)

__all__ = [
    "DeckPageError",
    "FetchError",
    "IndexLayoutError",
    "create_client",
    "extract_parenthesized",
    "fetch_page",
    "parse_deck_page",
    "parse_index_page",
]
