from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def index_html() -> str:
    """Index page with three sets, a duplicate deck name and a layout list."""
    return _read_fixture("index.html")


@pytest.fixture
def commander_deck_html() -> str:
    return _read_fixture("deck_commander.html")


@pytest.fixture
def sideboard_deck_html() -> str:
    return _read_fixture("deck_sideboard.html")
