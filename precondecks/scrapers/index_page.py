"""
Deck index page parser.

The index lists each set as a bare ``div`` heading followed by a bare ``ul``
of deck links, both direct children of the body's container ``div``:

    <div>Zendikar Rising Commander (ZNC)</div>
    <ul>
      <li><a href="/deck/znc/land-s-wrath">Land's Wrath</a> (Commander Deck, 100 cards)</li>
    </ul>

Blocks carrying an ``id`` or ``class`` attribute are page layout, not content.

Note: Web scraping is inherently fragile. If the heading and list counts
disagree the layout has changed and nothing on the page can be trusted.
"""

import logging
import re
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, NavigableString, Tag

from precondecks.models.entities import DeckListEntry, DeckSet, DeckType
from precondecks.models.store import Repository

logger = logging.getLogger(__name__)

SET_GROUP_SELECTOR = "html > body > div > div:not([id]):not([class])"
DECKLIST_GROUP_SELECTOR = "html > body > div > ul:not([id]):not([class])"

# Lazily matches the first "(...)" group, without the parentheses
CONTENT_IN_PARENTHESES = re.compile(r"(?<=\().+?(?=\))")


class IndexLayoutError(Exception):
    """Raised when the index page no longer has the expected structure."""

    pass


def extract_parenthesized(text: str) -> str:
    """
    Return the content of the first parenthesized group in text.

    Examples:
        "Zendikar Rising Commander (ZNC)" -> "ZNC"
        "(Commander Deck, 100 cards)" -> "Commander Deck, 100 cards"
        "no group" -> ""
    """
    match = CONTENT_IN_PARENTHESES.search(text)
    return match.group(0) if match else ""


def origin_of(url: str) -> str:
    """Scheme and host of a URL, e.g. "https://mtg.wtf/"."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}/"


def _sibling_text(anchor: Tag) -> str:
    sibling = anchor.next_sibling
    if sibling is None:
        return ""
    if isinstance(sibling, NavigableString):
        return str(sibling)
    return sibling.get_text()


def parse_set_heading(text: str) -> DeckSet:
    """
    Build a set from its heading text.

    The code is the parenthesized part; the friendly name is the rest.
    """
    text = text.strip()
    code = extract_parenthesized(text)
    friendly_name = text.replace(f"({code})", "").strip()
    return DeckSet(id=code, friendly_name=friendly_name)


def parse_deck_type(meta: str) -> str:
    """
    Extract the deck type from the text trailing a deck link.

    " (Commander Deck, 100 cards)" -> "Commander Deck"
    """
    return extract_parenthesized(meta).split(",")[0].strip()


def parse_index_page(html: str, page_url: str, repository: Repository) -> None:
    """
    Populate the repository with sets, types, and deck stubs from an index page.

    Args:
        html: Raw markup of the index page
        page_url: URL the page was fetched from; deck links resolve against
            its origin
        repository: Store for this run, updated in place

    Raises:
        IndexLayoutError: If set headings and deck lists don't pair up
    """
    soup = BeautifulSoup(html, "html.parser")
    set_groups = soup.select(SET_GROUP_SELECTOR)
    decklist_groups = soup.select(DECKLIST_GROUP_SELECTOR)

    if len(set_groups) != len(decklist_groups):
        raise IndexLayoutError(
            f"sets and decklists count mismatch: {len(set_groups)} set headings, "
            f"{len(decklist_groups)} deck lists"
        )

    base_url = origin_of(page_url)

    for set_group, decklist_group in zip(set_groups, decklist_groups, strict=True):
        deck_set = repository.sets.upsert(parse_set_heading(set_group.get_text()))

        for anchor in decklist_group.select(":scope > li > a"):
            type_id = parse_deck_type(_sibling_text(anchor))
            if not type_id:
                logger.warning("No deck type found for %r", anchor.get_text().strip())
            deck_type = repository.types.get_or_create(type_id, DeckType)

            entry = DeckListEntry(
                id=anchor.get_text().strip(),
                deck_set=deck_set,
                deck_type=deck_type,
                source_url=urljoin(base_url, anchor.get("href", "")),
            )
            if repository.entries.add(entry) is not entry:
                logger.debug("Duplicate deck %r ignored", entry.id)

    logger.info(
        "Parsed index: %d sets, %d types, %d decks",
        len(repository.sets),
        len(repository.types),
        len(repository.entries),
    )
