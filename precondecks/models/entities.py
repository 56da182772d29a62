from dataclasses import dataclass, field


@dataclass
class DeckSet:
    """
    A card set grouping decks on the index page.

    Attributes:
        id: Short set code (e.g., "ZNC")
        friendly_name: Display name with the code removed
    """

    id: str
    friendly_name: str = ""


@dataclass
class DeckType:
    """A deck category label, e.g. "Commander Deck"."""

    id: str


@dataclass(frozen=True, slots=True)
class Card:
    """
    One line item of a deck list.

    Attributes:
        name: Card name as printed on the deck page
        set_code: Printing set code (lowercase on the source site)
        set_id: Collector number within the set
        quantity: Number of copies
        in_sideboard: Rendered with an "SB: " prefix
    """

    name: str
    set_code: str
    set_id: str
    quantity: int
    in_sideboard: bool = False


@dataclass
class DeckListEntry:
    """
    A named preconstructed deck.

    Set and type are shared with the repository; cards are appended in page
    order while the deck page is parsed.
    """

    id: str
    deck_set: DeckSet
    deck_type: DeckType
    source_url: str
    cards: list[Card] = field(default_factory=list)

    @property
    def card_count(self) -> int:
        """Total copies across main deck and sideboard."""
        return sum(card.quantity for card in self.cards)
