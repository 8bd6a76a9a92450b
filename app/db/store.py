"""Typed repository over the brokerage tables.

Every write goes through :class:`EntityStore` so timestamps are stamped in one
place and database constraint failures surface as domain errors. The store
only flushes; the caller decides when the unit of work commits.
"""
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import (
    DanglingReference,
    DuplicateKey,
    InvalidInput,
    NotFound,
    ReferencedByDependents,
    StoreUnavailable,
)
from app.core.metrics import track_db_operation
from app.models.base import utcnow

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
PROTECTED_FIELDS = {"id", "created_at", "updated_at"}
FK_DETAIL = re.compile(r"Key \((\w+)\)=\(([^)]*)\) is not present")


def kind_of(model) -> str:
    return model.__name__


def primary_key(model):
    return model.__mapper__.primary_key[0]


def _coerce_id(raw: str) -> Any:
    return int(raw) if raw.isdigit() else raw


def _error_text(orig) -> str:
    # asyncpg keeps the detail line off the message, psycopg2 appends it
    cause = getattr(orig, "__cause__", None)
    parts = [str(orig), getattr(orig, "detail", None), getattr(cause, "detail", None)]
    return " ".join(part for part in parts if isinstance(part, str))


def translate_integrity_error(
    exc: IntegrityError,
    kind: str,
    entity_id: Any = None,
    deleting: bool = False,
) -> Exception:
    """Map a constraint failure caught at flush onto a domain error.

    Missing references are normally caught earlier by
    ``check_references``; a foreign-key failure here means the target was
    deleted concurrently. Postgres names the column and value in its detail
    line; SQLite does not, so the field falls back to ``"reference"``.
    """
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    message = str(orig).lower()

    if sqlstate == UNIQUE_VIOLATION or "unique" in message:
        return DuplicateKey(kind)
    if sqlstate == FOREIGN_KEY_VIOLATION or "foreign key" in message:
        if deleting:
            return ReferencedByDependents(kind, entity_id, "dependent", 0)
        match = FK_DETAIL.search(_error_text(orig))
        if match:
            return DanglingReference(match.group(1), _coerce_id(match.group(2)))
        return DanglingReference("reference", entity_id)
    if sqlstate == NOT_NULL_VIOLATION or "not null" in message:
        return InvalidInput(f"{kind} is missing a required field")
    return exc


class EntityStore:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, stmt):
        try:
            return await self.session.execute(stmt)
        except (OperationalError, DBAPIError) as e:
            if isinstance(e, IntegrityError):
                raise
            logger.error(f"Store query failed: {e}")
            raise StoreUnavailable(f"Database error: {e.__class__.__name__}")

    async def _flush(self, model, entity_id: Any = None, deleting: bool = False) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.warning(f"Integrity error on {kind_of(model)} {entity_id}: {exc.orig}")
            raise translate_integrity_error(exc, kind_of(model), entity_id, deleting)

    async def _check_unique(self, model, values: Dict[str, Any], exclude_id: Any = None) -> None:
        # the unique index is the real guard; this names the offending field
        for column in model.__table__.columns:
            if not column.unique or values.get(column.key) is None:
                continue
            stmt = select(func.count()).select_from(model).where(column == values[column.key])
            if exclude_id is not None:
                stmt = stmt.where(primary_key(model) != exclude_id)
            if (await self._execute(stmt)).scalar_one():
                raise DuplicateKey(kind_of(model), column.key, values[column.key])

    @track_db_operation("create")
    async def create(self, model, values: Dict[str, Any]):
        now = utcnow()
        values = {k: v for k, v in values.items() if k not in ("created_at", "updated_at")}
        values.update(created_at=now, updated_at=now)

        await self._check_unique(model, values)
        entity = model(**values)
        self.session.add(entity)
        await self._flush(model)
        return entity

    @track_db_operation("get")
    async def find(self, model, entity_id: Any):
        stmt = (
            select(model)
            .where(primary_key(model) == entity_id)
            .execution_options(populate_existing=True)
        )
        return (await self._execute(stmt)).scalars().first()

    async def get(self, model, entity_id: Any):
        entity = await self.find(model, entity_id)
        if entity is None:
            raise NotFound(kind_of(model), entity_id)
        return entity

    async def exists(self, model, entity_id: Any) -> bool:
        return await self.count_where(model, primary_key(model) == entity_id) > 0

    @track_db_operation("list")
    async def list(
        self,
        model,
        *criteria,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Sequence] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Any]:
        stmt = select(model).where(*criteria)
        for field, value in (filters or {}).items():
            stmt = stmt.where(getattr(model, field) == value)
        stmt = stmt.order_by(*(order_by or [primary_key(model)]))
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self._execute(stmt.execution_options(populate_existing=True))
        return list(result.scalars().all())

    @track_db_operation("update")
    async def update(self, model, entity_id: Any, changes: Dict[str, Any]):
        """Apply a partial update: only keys present in ``changes`` are written.

        A key mapped to ``None`` clears the column; an absent key is untouched.
        """
        entity = await self.get(model, entity_id)
        changes = {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}

        await self._check_unique(model, changes, exclude_id=entity_id)
        for field, value in changes.items():
            setattr(entity, field, value)
        entity.updated_at = utcnow()
        await self._flush(model, entity_id)
        return entity

    @track_db_operation("update_where")
    async def update_where(self, model, criteria: Sequence, values: Dict[str, Any]) -> int:
        values = dict(values)
        if "updated_at" in model.__table__.columns:
            values["updated_at"] = utcnow()
        stmt = update(model).where(*criteria).values(**values).execution_options(synchronize_session=False)
        try:
            result = await self._execute(stmt)
        except IntegrityError as exc:
            await self.session.rollback()
            raise translate_integrity_error(exc, kind_of(model))
        return result.rowcount or 0

    @track_db_operation("delete")
    async def delete(self, model, entity_id: Any) -> None:
        entity = await self.get(model, entity_id)
        await self.session.delete(entity)
        await self._flush(model, entity_id, deleting=True)

    @track_db_operation("count")
    async def count_where(self, model, *criteria) -> int:
        stmt = select(func.count()).select_from(model).where(*criteria)
        return int((await self._execute(stmt)).scalar_one())

    @track_db_operation("sum")
    async def sum_where(self, model, field: str, *criteria) -> Decimal:
        """Sum a numeric or decimal-text column; 0 when nothing matches.

        Values that do not parse as decimals contribute 0 and are logged.
        """
        column = getattr(model, field)
        stmt = select(primary_key(model), column).where(*criteria)
        total = Decimal("0")
        for row_id, raw in (await self._execute(stmt)).all():
            if raw is None:
                continue
            try:
                value = Decimal(str(raw).strip())
                if not value.is_finite():
                    raise InvalidOperation(raw)
            except InvalidOperation:
                logger.warning(f"Ignoring unparseable {kind_of(model)}.{field} {raw!r} on row {row_id}")
                continue
            total += value
        return total

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise translate_integrity_error(exc, "unit of work")

    async def rollback(self) -> None:
        await self.session.rollback()
