"""
Collection synchronizer: a local ordered mirror of one remote resource.

INVARIANTS:
- The mirror changes only after the remote store acknowledges an operation
  (no optimistic writes, so nothing ever needs rolling back)
- A failed operation leaves the mirror exactly as it was
- The mirror is replaced by single assignment of an immutable tuple, so a
  reader never sees a half-applied change
- Reads are ordered newest first by the mapper's sort key; ties keep
  mirror order. The ordering is derived on read, never stored.

An identity change empties the mirror and marks it unloaded; acknowledgments
for the previous identity that arrive afterwards are not applied. When two
loads for the same identity overlap, whichever resolves last wins.
"""

import logging
from collections.abc import Mapping
from typing import Any, Generic

from deckledger.models.failure import KnownError, Outcome, RemoteUnavailableError
from deckledger.remote.base import RemoteStore
from deckledger.remote.identity import Identity, IdentitySource
from deckledger.sync.mappers import RecordMapper, T

logger = logging.getLogger(__name__)


class CollectionSynchronizer(Generic[T]):
    """Mirror of one remote collection for the current identity."""

    def __init__(
        self,
        store: RemoteStore,
        mapper: RecordMapper[T],
        identity_source: IdentitySource,
    ) -> None:
        self._store = store
        self._mapper = mapper
        self._identity_source = identity_source
        self._records: tuple[T, ...] = ()
        self._loaded = False
        # Bumped on every identity change; stale acknowledgments compare against it
        self._generation = 0
        self._unsubscribe = identity_source.subscribe(self._on_identity_change)

    @property
    def resource(self) -> str:
        return self._mapper.resource

    @property
    def loaded(self) -> bool:
        """True once a load has succeeded for the current identity."""
        return self._loaded

    @property
    def records(self) -> tuple[T, ...]:
        """The mirror, newest first."""
        return tuple(sorted(self._records, key=self._mapper.sort_key, reverse=True))

    def __len__(self) -> int:
        return len(self._records)

    def get_by_id(self, record_id: str) -> T | None:
        """Look up a mirrored record. Absence is normal, not an error."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def invalidate(self) -> None:
        """Drop the mirror; a fresh load() is required."""
        self._generation += 1
        self._records = ()
        self._loaded = False

    def close(self) -> None:
        """Stop listening for identity changes."""
        self._unsubscribe()

    def _on_identity_change(self, identity: Identity | None) -> None:
        logger.info("Identity changed; invalidating %s mirror", self.resource)
        self.invalidate()

    def _fail(self, operation: str, error: KnownError) -> Outcome[Any]:
        logger.warning(
            "%s %s failed (%s): %s", operation, self.resource, error.kind.value, error.message
        )
        return Outcome.failure(error)

    def _is_stale(self, generation: int, operation: str) -> bool:
        if generation == self._generation:
            return False
        logger.warning(
            "Identity changed during %s %s; not applying result", operation, self.resource
        )
        return True

    async def load(self) -> Outcome[tuple[T, ...]]:
        """Replace the mirror with the full remote collection."""
        identity = self._identity_source.current()
        if identity is None:
            return self._fail("load", RemoteUnavailableError.no_identity())

        generation = self._generation
        try:
            rows = await self._store.list_records(
                self.resource, identity, order_by=self._mapper.order_by, descending=True
            )
            records = tuple(self._mapper.from_remote(row) for row in rows)
        except KnownError as e:
            return self._fail("load", e)

        if self._is_stale(generation, "load"):
            return self._fail(
                "load", RemoteUnavailableError("Signed-in user changed while loading.")
            )

        self._records = records
        self._loaded = True
        logger.info("Loaded %d %s", len(records), self.resource)
        return Outcome.success(self.records)

    async def create(self, fields: Mapping[str, Any]) -> Outcome[T]:
        """
        Create a record remotely, then prepend it to the mirror.

        The id and creation time come from the remote store's acknowledgment.
        """
        identity = self._identity_source.current()
        if identity is None:
            return self._fail("create", RemoteUnavailableError.no_identity())

        generation = self._generation
        try:
            values = self._mapper.prepare_create(fields)
            row = await self._store.insert_record(
                self.resource, identity, self._mapper.to_remote(values)
            )
            record = self._mapper.from_remote(row)
        except KnownError as e:
            return self._fail("create", e)

        if not self._is_stale(generation, "create"):
            others = tuple(r for r in self._records if r.id != record.id)
            self._records = (record, *others)
            logger.info("Created %s %s", self.resource, record.id)
        return Outcome.success(record)

    async def update(self, record_id: str, fields: Mapping[str, Any]) -> Outcome[T]:
        """
        Patch a record remotely, then merge the patched fields into the mirror.

        Fields not in the patch keep their mirrored values. The outcome's value
        is the merged record, or None if the record is not mirrored.
        """
        identity = self._identity_source.current()
        if identity is None:
            return self._fail("update", RemoteUnavailableError.no_identity())

        generation = self._generation
        current = self.get_by_id(record_id)
        try:
            values = self._mapper.prepare_update(fields, current)
            await self._store.update_record(
                self.resource, identity, record_id, self._mapper.to_remote(values)
            )
        except KnownError as e:
            return self._fail("update", e)

        if self._is_stale(generation, "update"):
            return Outcome.success(None)

        merged: T | None = None
        records = list(self._records)
        for index, record in enumerate(records):
            if record.id == record_id:
                merged = self._mapper.merge(record, values)
                records[index] = merged
                break
        self._records = tuple(records)
        logger.info("Updated %s %s (%s)", self.resource, record_id, ", ".join(sorted(values)))
        return Outcome.success(merged)

    async def delete(self, record_id: str) -> Outcome[str]:
        """Delete a record remotely, then drop it from the mirror."""
        identity = self._identity_source.current()
        if identity is None:
            return self._fail("delete", RemoteUnavailableError.no_identity())

        generation = self._generation
        try:
            await self._store.delete_record(self.resource, identity, record_id)
        except KnownError as e:
            return self._fail("delete", e)

        if not self._is_stale(generation, "delete"):
            self._records = tuple(r for r in self._records if r.id != record_id)
            logger.info("Deleted %s %s", self.resource, record_id)
        return Outcome.success(record_id)
