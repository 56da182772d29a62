"""
Deck page parser.

Each card is a ``div.card_entry`` holding the quantity as leading text and a
name link whose href encodes the printing:

    <div class="card_entry">
      1
      <span><a href="/card/znc/4/Anowon-the-Ruin-Thief">Anowon, the Ruin Thief</a></span>
    </div>

Sideboard cards sit inside a ``div.card_group`` whose heading says
"Sideboard". Commander decks list the commander first; it is treated as a
sideboard entry.
"""

import logging
import re

from bs4 import BeautifulSoup, Tag

from precondecks.models.entities import Card, DeckListEntry

logger = logging.getLogger(__name__)

CARD_ENTRY_SELECTOR = "div.card_entry"
CARD_LINK_SELECTOR = ":scope > span > a"

# Substituted when a card link has no usable href
FALLBACK_CARD_HREF = "/err/000/_/_"

QUANTITY_PATTERN = re.compile(r"\d+")


class DeckPageError(Exception):
    """Raised when a deck page is missing the nodes a card needs."""

    pass


def is_commander_type(entry: DeckListEntry) -> bool:
    return "Commander" in entry.deck_type.id


def parse_printing(href: str | None) -> tuple[str, str]:
    """
    Extract (set_code, set_id) from a card href.

    "/card/znr/123/Llanowar-Elves" -> ("znr", "123")

    Hrefs that are absent or too short fall back to FALLBACK_CARD_HREF.
    """
    segments = (href or "").split("/")
    if len(segments) < 4:
        logger.warning("Malformed card href %r, using placeholder", href)
        segments = FALLBACK_CARD_HREF.split("/")
    return segments[2], segments[3]


def _in_sideboard_group(card_entry: Tag) -> bool:
    parent = card_entry.parent
    if parent is None or "card_group" not in (parent.get("class") or []):
        return False
    return "Sideboard" in parent.get_text()


def parse_card_entry(card_entry: Tag, pending_sideboard: bool = False) -> Card:
    """
    Parse one ``card_entry`` node.

    Args:
        card_entry: The card's node
        pending_sideboard: Force the sideboard flag (commander first card)

    Returns:
        Parsed card

    Raises:
        DeckPageError: If the quantity or name link is missing
    """
    quantity_match = QUANTITY_PATTERN.search(card_entry.get_text())
    if quantity_match is None:
        raise DeckPageError(f"No quantity in card entry {card_entry.get_text()!r}")

    link = card_entry.select_one(CARD_LINK_SELECTOR)
    if link is None:
        raise DeckPageError(f"No card link in card entry {card_entry.get_text()!r}")

    set_code, set_id = parse_printing(link.get("href"))

    return Card(
        name=link.get_text().split("\n")[0],
        set_code=set_code,
        set_id=set_id,
        quantity=int(quantity_match.group(0)),
        in_sideboard=pending_sideboard or _in_sideboard_group(card_entry),
    )


def parse_deck_page(html: str, entry: DeckListEntry) -> list[Card]:
    """
    Parse every card on a deck page and append them to the entry.

    Cards keep page order. If any card fails to parse the entry is left
    untouched.

    Args:
        html: Raw markup of the cached deck page
        entry: Deck the page belongs to

    Returns:
        Cards parsed from this page

    Raises:
        DeckPageError: If the page has no cards or a card entry is malformed
    """
    soup = BeautifulSoup(html, "html.parser")
    card_entries = soup.select(CARD_ENTRY_SELECTOR)
    if not card_entries:
        raise DeckPageError(f"No card entries found for {entry.id!r}")

    pending_sideboard = is_commander_type(entry)
    cards: list[Card] = []

    for card_entry in card_entries:
        card = parse_card_entry(card_entry, pending_sideboard)
        logger.debug("%dx %s (%s:%s)", card.quantity, card.name, card.set_code, card.set_id)
        cards.append(card)
        pending_sideboard = False

    entry.cards.extend(cards)
    return cards
