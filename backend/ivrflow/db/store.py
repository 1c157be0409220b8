"""Generic criteria-based record store.

RecordStore wraps an injected AsyncSession and exposes the primitive
operations every entity repository is built on:

    find_many(**criteria)          -> list[Model]
    find_unique(**criteria)        -> Model | None
    find_in(column, values)        -> list[Model]
    create(**fields)               -> Model
    update(criteria, fields)       -> Model | None
    update_where(criteria, fields) -> int
    delete(**criteria)             -> bool

Criteria are an exact-match conjunction over mapped column names. Each call
flushes before returning, so a single call either applies fully or raises
StorageError. Committing is left to the session owner (the request).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import delete as sa_delete
from sqlalchemy import inspect, select
from sqlalchemy import update as sa_update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ivrflow.core.exceptions import StorageError
from ivrflow.core.logging import get_logger
from ivrflow.models.base import Base

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class RecordStore(Generic[ModelT]):
    """Criteria store for one ORM model.

    Example:
        >>> store = RecordStore(db, Project)
        >>> project = await store.create(name="Bank IVR", user_id=user.id)
        >>> await store.find_many(user_id=user.id)
        [<Project ...>]
    """

    def __init__(self, db: AsyncSession, model: type[ModelT]) -> None:
        self.db = db
        self.model = model
        self._columns = frozenset(inspect(model).column_attrs.keys())

    @property
    def entity(self) -> str:
        return self.model.__name__

    # =========================================================================
    # Internal helpers
    # =========================================================================

    def _check_names(self, names: Mapping[str, Any] | Sequence[str]) -> None:
        unknown = sorted(set(names) - self._columns)
        if unknown:
            raise StorageError(
                f"Unknown {self.entity} field(s): {', '.join(unknown)}",
                details={"entity": self.entity, "fields": unknown},
            )

    def _where(self, criteria: Mapping[str, Any]) -> list[Any]:
        self._check_names(criteria)
        return [getattr(self.model, name) == value for name, value in criteria.items()]

    def _wrap(self, action: str, error: SQLAlchemyError) -> StorageError:
        logger.error(
            f"Record store {action} failed for {self.entity}",
            extra={
                "context": {
                    "entity": self.entity,
                    "action": action,
                    "error_type": type(error).__name__,
                    "status": "failed",
                }
            },
        )
        return StorageError(
            f"Storage failure during {action} on {self.entity}",
            details={"entity": self.entity, "action": action},
        )

    # =========================================================================
    # Operations
    # =========================================================================

    async def find_many(
        self,
        order_by: Sequence[str] | None = None,
        **criteria: Any,
    ) -> list[ModelT]:
        """Return every record matching all criteria (all records if none).

        Args:
            order_by: Column names to sort by. Defaults to created_at when
                the model has one.
            **criteria: Exact-match column filters.
        """
        if order_by is None:
            order_by = ["created_at"] if "created_at" in self._columns else []
        self._check_names(order_by)

        query = select(self.model).where(*self._where(criteria))
        if order_by:
            query = query.order_by(*(getattr(self.model, name) for name in order_by))

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("find_many", e) from e
        return list(result.scalars().all())

    async def find_unique(self, **criteria: Any) -> ModelT | None:
        """Return the first record matching all criteria, or None."""
        query = select(self.model).where(*self._where(criteria)).limit(1)
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("find_unique", e) from e
        return result.scalar_one_or_none()

    async def find_in(
        self,
        column: str,
        values: Sequence[Any],
        order_by: Sequence[str] | None = None,
    ) -> list[ModelT]:
        """Return every record whose ``column`` is one of ``values``."""
        if order_by is None:
            order_by = ["created_at"] if "created_at" in self._columns else []
        self._check_names([column, *order_by])
        if not values:
            return []

        query = select(self.model).where(getattr(self.model, column).in_(list(values)))
        if order_by:
            query = query.order_by(*(getattr(self.model, name) for name in order_by))

        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("find_in", e) from e
        return list(result.scalars().all())

    async def reload(self, **criteria: Any) -> ModelT | None:
        """Like find_unique, but overwrite any copy already held by the session."""
        query = (
            select(self.model)
            .where(*self._where(criteria))
            .limit(1)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db.execute(query)
        except SQLAlchemyError as e:
            raise self._wrap("reload", e) from e
        return result.scalar_one_or_none()

    async def create(self, **fields: Any) -> ModelT:
        """Insert a record. Ids and timestamps are assigned by the model."""
        self._check_names(fields)
        record = self.model(**fields)
        self.db.add(record)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise self._wrap("create", e) from e
        return record

    async def create_many(self, rows: Sequence[Mapping[str, Any]]) -> list[ModelT]:
        """Insert several records in one flush."""
        records = []
        for fields in rows:
            self._check_names(fields)
            records.append(self.model(**fields))
        self.db.add_all(records)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise self._wrap("create_many", e) from e
        return records

    async def update(
        self,
        criteria: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> ModelT | None:
        """Merge ``fields`` into the first record matching ``criteria``.

        Returns:
            The updated record, or None when nothing matched.
        """
        self._check_names(fields)
        record = await self.find_unique(**criteria)
        if record is None:
            return None

        for name, value in fields.items():
            setattr(record, name, value)
        if "updated_at" in self._columns:
            record.updated_at = datetime.now(UTC)

        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            raise self._wrap("update", e) from e
        return record

    async def update_where(
        self,
        criteria: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> int:
        """Apply ``fields`` to every matching row in a single UPDATE.

        The match and the write are one statement, so criteria can guard
        against concurrent writers. Values may be SQL expressions such as
        ``Model.counter + 1``. Copies held by the session are not refreshed;
        use reload() afterwards.

        Returns:
            The number of rows updated.
        """
        self._check_names(fields)
        values = dict(fields)
        if "updated_at" in self._columns:
            values["updated_at"] = datetime.now(UTC)

        stmt = sa_update(self.model).where(*self._where(criteria)).values(**values)
        try:
            result = await self.db.execute(stmt.execution_options(synchronize_session=False))
        except SQLAlchemyError as e:
            raise self._wrap("update_where", e) from e
        return result.rowcount

    async def delete(self, **criteria: Any) -> bool:
        """Remove every record matching all criteria.

        Returns:
            True when at least one record was removed.
        """
        stmt = sa_delete(self.model).where(*self._where(criteria))
        try:
            result = await self.db.execute(stmt.execution_options(synchronize_session="fetch"))
        except SQLAlchemyError as e:
            raise self._wrap("delete", e) from e
        return bool(result.rowcount)


__all__ = [
    "RecordStore",
]
