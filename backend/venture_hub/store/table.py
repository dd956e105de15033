"""Keyed, indexed in-memory table."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable
from datetime import timedelta
from typing import Any, Generic, TypeVar

from venture_hub.store.models import Record, utc_now

RecordT = TypeVar("RecordT", bound=Record)


class Table(Generic[RecordT]):
    """One entity kind held in insertion order.

    Ids come from a per-table counter rendered as ``{id_prefix}-{n}`` when a
    prefix is given, otherwise from UUID4. An optional owner field is indexed
    so per-user listings do not scan the whole table.
    """

    def __init__(
        self,
        name: str,
        model: type[RecordT],
        *,
        id_prefix: str | None = None,
        owner_field: str | None = None,
        search_fields: Iterable[str] = (),
    ):
        self.name = name
        self.model = model
        self.id_prefix = id_prefix
        self.owner_field = owner_field
        self.search_fields = tuple(search_fields)
        self._rows: dict[str, RecordT] = {}
        # owner id -> ordered set of record ids
        self._owner_index: dict[str, dict[str, None]] = {}
        self._counter = 0

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._rows

    def _next_id(self) -> str:
        if self.id_prefix is None:
            return str(uuid.uuid4())
        self._counter += 1
        candidate = f"{self.id_prefix}-{self._counter}"
        while candidate in self._rows:
            self._counter += 1
            candidate = f"{self.id_prefix}-{self._counter}"
        return candidate

    def _index(self, record: RecordT) -> None:
        if self.owner_field is None:
            return
        owner = getattr(record, self.owner_field)
        if owner is not None:
            self._owner_index.setdefault(owner, {})[record.id] = None

    def _unindex(self, record: RecordT) -> None:
        if self.owner_field is None:
            return
        owner = getattr(record, self.owner_field)
        ids = self._owner_index.get(owner)
        if ids is not None:
            ids.pop(record.id, None)
            if not ids:
                del self._owner_index[owner]

    def create(self, data: dict[str, Any], *, record_id: str | None = None) -> RecordT:
        """Insert a new record, assigning id and timestamps."""
        now = utc_now()
        fields = {k: v for k, v in data.items() if k not in ("id", "created_at", "updated_at")}
        record = self.model.model_validate({
            **fields,
            "id": record_id or self._next_id(),
            "created_at": now,
            "updated_at": now,
        })
        if record.id in self._rows:
            raise KeyError(f"{self.name} '{record.id}' already exists")
        self._rows[record.id] = record
        self._index(record)
        return record

    def get(self, record_id: str) -> RecordT | None:
        return self._rows.get(record_id)

    def update(self, record_id: str, changes: dict[str, Any]) -> RecordT | None:
        """Merge supplied fields into a record. Returns None when it is missing.

        ``updated_at`` always moves strictly forward, even when the clock has
        not ticked since the previous write.
        """
        existing = self._rows.get(record_id)
        if existing is None:
            return None

        now = utc_now()
        if now <= existing.updated_at:
            now = existing.updated_at + timedelta(microseconds=1)

        protected = ("id", "created_at", "updated_at")
        merged = {
            **existing.model_dump(),
            **{k: v for k, v in changes.items() if k not in protected},
            "updated_at": now,
        }
        record = self.model.model_validate(merged)

        self._unindex(existing)
        self._rows[record_id] = record
        self._index(record)
        return record

    def delete(self, record_id: str) -> bool:
        record = self._rows.pop(record_id, None)
        if record is None:
            return False
        self._unindex(record)
        return True

    def list(self, offset: int = 0, limit: int | None = None) -> list[RecordT]:
        rows = list(self._rows.values())
        if limit is None:
            return rows[offset:]
        return rows[offset:offset + limit]

    def by_owner(self, owner_id: str) -> list[RecordT]:
        if self.owner_field is None:
            raise TypeError(f"Table '{self.name}' has no owner index")
        return [self._rows[i] for i in self._owner_index.get(owner_id, {})]

    def filter(self, predicate: Callable[[RecordT], bool]) -> list[RecordT]:
        return [r for r in self._rows.values() if predicate(r)]

    def search(self, query: str) -> list[RecordT]:
        """Case-insensitive substring match over the table's search fields."""
        term = query.lower()
        if not term:
            return []

        def matches(record: RecordT) -> bool:
            for field in self.search_fields:
                value = getattr(record, field, None)
                if isinstance(value, str) and term in value.lower():
                    return True
            return False

        return self.filter(matches)

    def clear(self) -> None:
        self._rows.clear()
        self._owner_index.clear()
        self._counter = 0
