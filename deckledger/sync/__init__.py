from deckledger.sync.mappers import (
    DeckMapper,
    MatchMapper,
    RecordMapper,
    TournamentMapper,
    parse_timestamp,
)
from deckledger.sync.synchronizer import CollectionSynchronizer
from deckledger.sync.tracker import Tracker

__all__ = [
    "CollectionSynchronizer",
    "DeckMapper",
    "MatchMapper",
    "RecordMapper",
    "TournamentMapper",
    "Tracker",
    "parse_timestamp",
]
