"""
Database CRUD operations.

Provides async functions for listing, inserting, updating, and deleting
user-owned rows of any synchronized resource. Rows are returned as plain
dicts keyed by column name, the same shape the hosted backend returns.
"""

from typing import Any, cast

from sqlalchemy import Table, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from deckledger.models.db import RESOURCE_MODELS, Base

# Columns the store owns; callers may never write them
PROTECTED_COLUMNS = frozenset({"id", "user_id"})


class UnknownColumnError(ValueError):
    """A write or ordering referenced a column the table does not have."""


def get_model(resource: str) -> type[Base]:
    """Look up the ORM model for a resource name."""
    try:
        return RESOURCE_MODELS[resource]
    except KeyError:
        raise ValueError(f"Unknown resource: {resource}") from None


def _table(model: type[Base]) -> Table:
    return cast(Table, model.__table__)


def _check_columns(model: type[Base], values: dict[str, Any]) -> None:
    table = _table(model)
    unknown = set(values) - set(table.columns.keys())
    protected = set(values) & PROTECTED_COLUMNS
    if unknown or protected:
        bad = ", ".join(sorted(unknown | protected))
        raise UnknownColumnError(f"Cannot write column(s) {bad} on {table.name}")


def row_to_dict(row: Base) -> dict[str, Any]:
    """Convert an ORM row to a record dict (owner column omitted)."""
    table = _table(type(row))
    return {key: getattr(row, key) for key in table.columns.keys() if key != "user_id"}


async def list_rows(
    session: AsyncSession,
    resource: str,
    user_id: str,
    order_by: str,
    descending: bool = True,
) -> list[dict[str, Any]]:
    """Get every row the user owns, ordered by one column."""
    model = get_model(resource)
    table = _table(model)
    if order_by not in table.columns:
        raise UnknownColumnError(f"Cannot order {table.name} by {order_by}")

    column = table.columns[order_by]
    result = await session.execute(
        select(model)
        .where(table.columns["user_id"] == user_id)
        .order_by(column.desc() if descending else column.asc())
    )
    return [row_to_dict(row) for row in result.scalars().all()]


async def insert_row(
    session: AsyncSession,
    resource: str,
    user_id: str,
    values: dict[str, Any],
) -> dict[str, Any]:
    """
    Insert a row owned by the user.

    The id and any unset defaults (timestamps) are assigned here.
    Raises UnknownColumnError for columns the table does not have.
    """
    model = get_model(resource)
    _check_columns(model, values)

    row = model(**values, user_id=user_id)
    session.add(row)
    await session.flush()
    return row_to_dict(row)


async def update_row(
    session: AsyncSession,
    resource: str,
    user_id: str,
    record_id: str,
    values: dict[str, Any],
) -> bool:
    """
    Apply a partial update to one of the user's rows.

    Returns True if the row exists, False if not found.
    """
    model = get_model(resource)
    _check_columns(model, values)
    table = _table(model)
    owned = (table.columns["id"] == record_id, table.columns["user_id"] == user_id)

    if not values:
        found = await session.execute(select(table.columns["id"]).where(*owned))
        return found.first() is not None

    result = await session.execute(update(table).where(*owned).values(**values))
    # rowcount is available on UPDATE results; type stubs incomplete for async
    return int(result.rowcount) > 0  # type: ignore[attr-defined]


async def delete_row(
    session: AsyncSession,
    resource: str,
    user_id: str,
    record_id: str,
) -> bool:
    """
    Delete one of the user's rows.

    Returns True if deleted, False if not found.
    """
    table = _table(get_model(resource))
    result = await session.execute(
        delete(table).where(table.columns["id"] == record_id, table.columns["user_id"] == user_id)
    )
    return int(result.rowcount) > 0  # type: ignore[attr-defined]
