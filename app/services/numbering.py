"""Server-side allocation of human-facing document numbers"""
import time
import uuid

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from app.db.store import EntityStore
from app.models.sequence import NumberSequence

ORDER_PREFIX = "ORD"
QUOTE_PREFIX = "QTE"
INVOICE_PREFIX = "INV"

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def format_number(prefix: str, sequence: int, epoch: int) -> str:
    return f"{prefix}-{epoch}-{sequence:04d}"


async def next_sequence(store: EntityStore, prefix: str) -> int:
    """Increment and return the counter for ``prefix`` inside the caller's transaction.

    The UPDATE takes the row lock, so concurrent allocations for the same
    prefix serialize until the surrounding transaction ends.
    """
    session = store.session
    insert = _UPSERT_INSERTS[session.bind.dialect.name]

    await session.execute(
        insert(NumberSequence)
        .values(prefix=prefix, value=0)
        .on_conflict_do_nothing(index_elements=["prefix"])
    )
    await session.execute(
        update(NumberSequence)
        .where(NumberSequence.prefix == prefix)
        .values(value=NumberSequence.value + 1)
        .execution_options(synchronize_session=False)
    )
    result = await session.execute(
        select(NumberSequence.value).where(NumberSequence.prefix == prefix)
    )
    return int(result.scalar_one())


async def allocate_number(store: EntityStore, prefix: str) -> str:
    sequence = await next_sequence(store, prefix)
    return format_number(prefix, sequence, int(time.time()))


def new_user_id() -> str:
    return f"user-{uuid.uuid4().hex}"
