"""
SQL remote store.

Serves the same record shapes as the hosted backend from any database
SQLAlchemy's async engine can reach. Each call runs in its own session and
commits before returning, so an acknowledged mutation is durable.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from deckledger.db.database import async_session_factory
from deckledger.db.operations import (
    UnknownColumnError,
    delete_row,
    insert_row,
    list_rows,
    update_row,
)
from deckledger.models.failure import (
    RecordNotFoundError,
    RemoteUnavailableError,
    ValidationRejectedError,
)
from deckledger.remote.base import Record
from deckledger.remote.identity import Identity

logger = logging.getLogger(__name__)


@contextmanager
def _translate_errors(resource: str) -> Iterator[None]:
    """Map database errors onto the remote failure taxonomy."""
    try:
        yield
    except UnknownColumnError as e:
        raise ValidationRejectedError(str(e), detail=resource) from e
    except ValueError as e:
        # Unknown resource name
        raise RemoteUnavailableError(str(e), detail=resource) from e
    except IntegrityError as e:
        raise ValidationRejectedError(
            f"The {resource} record violates a constraint.", detail=str(e.orig)
        ) from e
    except SQLAlchemyError as e:
        logger.error("Database error on %s: %s", resource, e)
        raise RemoteUnavailableError(
            "The database is unavailable.", detail=f"{type(e).__name__}"
        ) from e


class SqlStore:
    """RemoteStore backed by SQLAlchemy."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] = async_session_factory,
    ) -> None:
        self._session_factory = session_factory

    async def aclose(self) -> None:
        # Sessions are closed per call; the engine belongs to the application
        return None

    async def list_records(
        self,
        resource: str,
        identity: Identity,
        order_by: str,
        descending: bool = True,
    ) -> list[Record]:
        with _translate_errors(resource):
            async with self._session_factory() as session:
                return await list_rows(session, resource, identity.user_id, order_by, descending)

    async def insert_record(self, resource: str, identity: Identity, record: Record) -> Record:
        with _translate_errors(resource):
            async with self._session_factory() as session:
                row = await insert_row(session, resource, identity.user_id, record)
                await session.commit()
                return row

    async def update_record(
        self,
        resource: str,
        identity: Identity,
        record_id: str,
        patch: Record,
    ) -> None:
        with _translate_errors(resource):
            async with self._session_factory() as session:
                found = await update_row(session, resource, identity.user_id, record_id, patch)
                if not found:
                    raise RecordNotFoundError(resource, record_id)
                await session.commit()

    async def delete_record(self, resource: str, identity: Identity, record_id: str) -> None:
        with _translate_errors(resource):
            async with self._session_factory() as session:
                found = await delete_row(session, resource, identity.user_id, record_id)
                if not found:
                    raise RecordNotFoundError(resource, record_id)
                await session.commit()
