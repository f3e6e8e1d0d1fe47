"""
In-memory record tables.

Each table keys its records by an autoincrement integer id. Ids are never
reused, including after a delete.
"""

import itertools
from datetime import datetime, timezone
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecordTable(Generic[T]):
    def __init__(self, name: str):
        self.name = name
        self._rows: Dict[int, T] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def insert(self, record: T) -> T:
        self._rows[record.id] = record
        return record

    def get(self, record_id: int) -> Optional[T]:
        return self._rows.get(record_id)

    def get_many(self, record_ids: Iterable[int]) -> List[T]:
        return [self._rows[rid] for rid in record_ids if rid in self._rows]

    def delete(self, record_id: int) -> Optional[T]:
        return self._rows.pop(record_id, None)

    def all(self) -> List[T]:
        return list(self._rows.values())

    def filter(self, predicate: Callable[[T], bool]) -> List[T]:
        return [row for row in self._rows.values() if predicate(row)]

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: int) -> bool:
        return record_id in self._rows
