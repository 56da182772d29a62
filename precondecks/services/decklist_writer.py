"""
Deck list text output.

One line per card:
    [SB: ]<quantity> [<SETCODE>:<set id>] <name>

Example:
    SB: 1 [ZNC:4] Anowon, the Ruin Thief
    1 [ZNC:45] Sol Ring
"""

from pathlib import Path

from precondecks.models.entities import Card, DeckListEntry
from precondecks.services.files import sanitize_filename, write_text_atomic

SIDEBOARD_PREFIX = "SB: "
DECKLIST_SUFFIX = ".dck"


def format_card_line(card: Card) -> str:
    """Format a single card line."""
    prefix = SIDEBOARD_PREFIX if card.in_sideboard else ""
    return f"{prefix}{card.quantity} [{card.set_code.upper()}:{card.set_id}] {card.name}"


def format_decklist(entry: DeckListEntry) -> str:
    """Render all cards in order, each line newline-terminated."""
    return "".join(f"{format_card_line(card)}\n" for card in entry.cards)


def output_path(out_dir: Path, entry: DeckListEntry) -> Path:
    """
    Output file for a deck.

    DeckListEntry(set "ZNR", type "Commander", id "Test Deck")
        -> out_dir / "[ZNR - Commander] Test Deck.dck"
    """
    name = f"[{entry.deck_set.id} - {entry.deck_type.id}] {entry.id}{DECKLIST_SUFFIX}"
    return out_dir / sanitize_filename(name)


def write_decklist(entry: DeckListEntry, out_dir: Path) -> Path:
    """
    Write the deck list file.

    Returns:
        Path of the written file

    Raises:
        OSError: If the file cannot be written
    """
    path = output_path(out_dir, entry)
    write_text_atomic(path, format_decklist(entry))
    return path
