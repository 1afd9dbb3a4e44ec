"""
Per-session tracker.

Owns the deck, match and tournament synchronizers for one identity source
and the read-side views built from them. Views are recomputed from the
current mirrors on every call.
"""

import logging

from deckledger.analysis.aggregate import (
    DEFAULT_RECENT_LIMIT,
    aggregate_by_deck,
    aggregate_by_opponent,
    overall_stats,
    recent_matches,
)
from deckledger.models.deck import UNKNOWN_DECK_NAME, Deck, Tournament
from deckledger.models.failure import Outcome
from deckledger.models.match import Match
from deckledger.models.stats import DeckStats, OpponentStats, RecordStats
from deckledger.remote.base import RemoteStore
from deckledger.remote.identity import IdentitySource
from deckledger.sync.mappers import DeckMapper, MatchMapper, TournamentMapper
from deckledger.sync.synchronizer import CollectionSynchronizer

logger = logging.getLogger(__name__)


class Tracker:
    """The player's decks, matches and tournaments for one session."""

    def __init__(self, store: RemoteStore, identity_source: IdentitySource) -> None:
        self.store = store
        self.identity = identity_source
        self.decks: CollectionSynchronizer[Deck] = CollectionSynchronizer(
            store, DeckMapper(), identity_source
        )
        self.matches: CollectionSynchronizer[Match] = CollectionSynchronizer(
            store, MatchMapper(), identity_source
        )
        self.tournaments: CollectionSynchronizer[Tournament] = CollectionSynchronizer(
            store, TournamentMapper(), identity_source
        )

    @property
    def loaded(self) -> bool:
        """True when all three mirrors are loaded for the current identity."""
        return self.decks.loaded and self.matches.loaded and self.tournaments.loaded

    async def refresh(self) -> dict[str, Outcome[tuple[object, ...]]]:
        """
        Load all three collections, one after another.

        Returns each collection's load outcome keyed by resource name. A
        failure in one collection does not stop the others.
        """
        outcomes: dict[str, Outcome[tuple[object, ...]]] = {}
        for synchronizer in (self.decks, self.matches, self.tournaments):
            outcomes[synchronizer.resource] = await synchronizer.load()

        failed = [resource for resource, outcome in outcomes.items() if not outcome.ok]
        if failed:
            logger.warning("Refresh incomplete; failed: %s", ", ".join(failed))
        return outcomes

    async def close(self) -> None:
        for synchronizer in (self.decks, self.matches, self.tournaments):
            synchronizer.close()
        await self.store.aclose()

    def deck_name(self, deck_id: str) -> str:
        """Name of a deck, or a placeholder if it is not in the mirror."""
        deck = self.decks.get_by_id(deck_id)
        return deck.name if deck is not None else UNKNOWN_DECK_NAME

    def overview(self) -> RecordStats:
        return overall_stats(self.matches.records)

    def recent_matches(self, limit: int = DEFAULT_RECENT_LIMIT) -> list[Match]:
        return recent_matches(self.matches.records, limit)

    def deck_stats(self) -> list[DeckStats]:
        return aggregate_by_deck(self.matches.records, self.decks.records)

    def opponent_stats(self, format_name: str, deck_id: str | None = None) -> list[OpponentStats]:
        return aggregate_by_opponent(
            self.matches.records, self.decks.records, format_name, deck_id=deck_id
        )
