from precondecks.models.entities import Card, DeckListEntry, DeckSet, DeckType
from precondecks.models.store import EntityStore, Repository

__all__ = [
    "Card",
    "DeckListEntry",
    "DeckSet",
    "DeckType",
    "EntityStore",
    "Repository",
]
