"""Generic document collection over a SQLAlchemy model.

The storage boundary used by the concepts. Documents are plain dicts keyed by
column name; filters are equality mappings and sort specs map a column to
1 (ascending) or -1 (descending):

```python
events = DocumentCollection(sessions, EventRecord)

event_id = await events.create_one({"host": host, "title": "Picnic"})
doc = await events.read_one({"id": event_id})
docs = await events.read_many({"host": host}, sort={"updated_at": -1})
await events.update_one({"id": event_id}, {"title": "Potluck"})
await events.delete_one({"id": event_id})
```

Each call runs in its own session and commits before returning, so a single
document write is atomic. There is no locking or version check across calls.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Generic, Mapping, TypeVar

from sqlalchemy import Select, inspect, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_planner.database.connection import open_session
from event_planner.database.models import Base, utcnow

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

Document = dict[str, Any]
Filter = Mapping[str, Any]
SortSpec = Mapping[str, int]


class DocumentCollection(Generic[ModelT]):
    """Dict-in, dict-out CRUD over one mapped table."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[ModelT],
    ):
        self._session_factory = session_factory
        self.model = model
        self._columns = [attr.key for attr in inspect(model).column_attrs]

    @property
    def name(self) -> str:
        return self.model.__tablename__

    def _to_document(self, record: ModelT) -> Document:
        return {key: getattr(record, key) for key in self._columns}

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        unknown = set(fields) - set(self._columns)
        if unknown:
            raise KeyError(f"Unknown {self.name} field(s): {', '.join(sorted(unknown))}")

    def _select(self, filter: Filter | None) -> Select[tuple[ModelT]]:
        filter = filter or {}
        self._check_fields(filter)
        return select(self.model).filter_by(**filter)

    async def create_one(self, fields: Mapping[str, Any]) -> uuid.UUID:
        """Insert a document and return its id."""
        self._check_fields(fields)
        async with open_session(self._session_factory) as session:
            record = self.model(**fields)
            session.add(record)
            await session.commit()
            return record.id

    async def read_one(self, filter: Filter) -> Document | None:
        """Return the first document matching the filter, or None."""
        async with open_session(self._session_factory) as session:
            result = await session.execute(self._select(filter).limit(1))
            record = result.scalars().first()
            return self._to_document(record) if record is not None else None

    async def read_many(
        self,
        filter: Filter | None = None,
        sort: SortSpec | None = None,
    ) -> list[Document]:
        """Return all documents matching the filter in the given order."""
        stmt = self._select(filter)
        for key, direction in (sort or {}).items():
            self._check_fields({key: None})
            column = getattr(self.model, key)
            stmt = stmt.order_by(column.desc() if direction < 0 else column.asc())

        async with open_session(self._session_factory) as session:
            result = await session.execute(stmt)
            return [self._to_document(record) for record in result.scalars()]

    async def update_one(self, filter: Filter, fields: Mapping[str, Any]) -> bool:
        """Overwrite fields on the first matching document.

        Returns:
            True if a document matched and was written
        """
        self._check_fields(fields)
        async with open_session(self._session_factory) as session:
            result = await session.execute(self._select(filter).limit(1))
            record = result.scalars().first()
            if record is None:
                return False

            for key, value in fields.items():
                setattr(record, key, value)
            if "updated_at" in self._columns and "updated_at" not in fields:
                # Bump even when the written values equal the stored ones
                record.updated_at = utcnow()

            await session.commit()
            return True

    async def delete_one(self, filter: Filter) -> bool:
        """Delete the first matching document.

        Returns:
            True if a document was deleted
        """
        async with open_session(self._session_factory) as session:
            result = await session.execute(self._select(filter).limit(1))
            record = result.scalars().first()
            if record is None:
                return False

            await session.delete(record)
            await session.commit()
            return True
