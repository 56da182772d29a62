"""Tests for deck list output."""

from pathlib import Path

from precondecks.models.entities import Card, DeckListEntry, DeckSet, DeckType
from precondecks.services.decklist_writer import (
    format_card_line,
    format_decklist,
    output_path,
    write_decklist,
)

ELVES = Card(name="Llanowar Elves", set_code="znr", set_id="123", quantity=2)


def _entry(deck_id: str = "Test Deck", type_id: str = "Commander") -> DeckListEntry:
    return DeckListEntry(
        id=deck_id,
        deck_set=DeckSet(id="ZNR"),
        deck_type=DeckType(id=type_id),
        source_url="https://mtg.wtf/deck/znr/test-deck",
    )


class TestFormatCardLine:
    def test_main_deck_line(self) -> None:
        """Set code is uppercased, number kept as parsed."""
        assert format_card_line(ELVES) == "2 [ZNR:123] Llanowar Elves"

    def test_sideboard_line(self) -> None:
        """Sideboard cards carry the SB prefix."""
        card = Card(
            name="Llanowar Elves", set_code="znr", set_id="123", quantity=2, in_sideboard=True
        )

        assert format_card_line(card) == "SB: 2 [ZNR:123] Llanowar Elves"


class TestFormatDecklist:
    def test_lines_in_card_order(self) -> None:
        """Every card gets a newline-terminated line, in order."""
        entry = _entry()
        entry.cards.extend(
            [
                Card("Obuun, Mul Daya Ancestor", "znc", "4", 1, in_sideboard=True),
                ELVES,
            ]
        )

        assert format_decklist(entry) == (
            "SB: 1 [ZNC:4] Obuun, Mul Daya Ancestor\n2 [ZNR:123] Llanowar Elves\n"
        )

    def test_empty_deck(self) -> None:
        """A deck without cards renders as empty text."""
        assert format_decklist(_entry()) == ""


class TestOutputPath:
    def test_filename_format(self, tmp_path: Path) -> None:
        """Filename is "[set - type] name.dck"."""
        assert output_path(tmp_path, _entry()) == tmp_path / "[ZNR - Commander] Test Deck.dck"

    def test_invalid_characters_stripped(self, tmp_path: Path) -> None:
        """Path separators and reserved characters are removed."""
        path = output_path(tmp_path, _entry(deck_id="Yes/No: Maybe?"))

        assert path.name == "[ZNR - Commander] YesNo Maybe.dck"
        assert path.parent == tmp_path


class TestWriteDecklist:
    def test_writes_file(self, tmp_path: Path) -> None:
        """The rendered deck list is written to the output path."""
        entry = _entry()
        entry.cards.append(ELVES)

        path = write_decklist(entry, tmp_path)

        assert path.read_text(encoding="utf-8") == "2 [ZNR:123] Llanowar Elves\n"

    def test_leaves_no_partial_files(self, tmp_path: Path) -> None:
        """Only the final file remains in the directory."""
        write_decklist(_entry(), tmp_path)

        assert [p.name for p in tmp_path.iterdir()] == ["[ZNR - Commander] Test Deck.dck"]
