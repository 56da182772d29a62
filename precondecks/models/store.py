"""
In-memory entity store.

Records are kept in insertion order and keyed by their ``id`` attribute.
Three write policies exist because the index page is parsed incrementally:

- get_or_create: first wins, used for deck types
- upsert: last wins, used for sets whose friendly name may be re-derived
- add: first wins, the given record is discarded if the id is taken
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

from precondecks.models.entities import DeckListEntry, DeckSet, DeckType


class Identified(Protocol):
    id: str


T = TypeVar("T", bound=Identified)


class EntityStore(Generic[T]):
    """Keyed collection of records sharing an ``id`` attribute."""

    def __init__(self) -> None:
        self._records: dict[str, T] = {}

    def get(self, record_id: str) -> T | None:
        return self._records.get(record_id)

    def get_or_create(self, record_id: str, factory: Callable[[str], T]) -> T:
        """Return the record with this id, creating it from the id if absent."""
        record = self._records.get(record_id)
        if record is None:
            record = factory(record_id)
            self._records[record_id] = record
        return record

    def upsert(self, record: T) -> T:
        """Replace any record with the same id; the new record moves to the end."""
        self._records.pop(record.id, None)
        self._records[record.id] = record
        return record

    def add(self, record: T) -> T:
        """
        Insert the record unless its id is already stored.

        Returns:
            The canonical stored record, which is not ``record`` on conflict.
        """
        return self._records.setdefault(record.id, record)

    def all(self) -> list[T]:
        return list(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[T]:
        return iter(self._records.values())


@dataclass
class Repository:
    """All entities discovered during one pipeline run."""

    sets: EntityStore[DeckSet] = field(default_factory=EntityStore)
    types: EntityStore[DeckType] = field(default_factory=EntityStore)
    entries: EntityStore[DeckListEntry] = field(default_factory=EntityStore)
