from typing import Any, Protocol

from deckledger.remote.identity import Identity

# A record as the remote store sees it: column name -> value
Record = dict[str, Any]


class RemoteStore(Protocol):
    """
    Persistence reached over a network boundary.

    Every call is scoped to the given identity. Implementations raise
    RemoteUnavailableError, ValidationRejectedError or RecordNotFoundError
    and nothing else for expected failures.
    """

    async def list_records(
        self,
        resource: str,
        identity: Identity,
        order_by: str,
        descending: bool = True,
    ) -> list[Record]:
        """Fetch the whole collection, ordered by one column."""
        ...

    async def insert_record(self, resource: str, identity: Identity, record: Record) -> Record:
        """Insert a record; returns it as stored (with id and timestamps)."""
        ...

    async def update_record(
        self,
        resource: str,
        identity: Identity,
        record_id: str,
        patch: Record,
    ) -> None:
        """Apply a partial update to one record."""
        ...

    async def delete_record(self, resource: str, identity: Identity, record_id: str) -> None:
        """Delete one record."""
        ...

    async def aclose(self) -> None:
        """Release connections held by the store."""
        ...
