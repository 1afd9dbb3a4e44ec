from deckledger.models.deck import UNKNOWN_DECK_NAME, Deck, Tournament
from deckledger.models.failure import (
    FailureDetail,
    FailureKind,
    KnownError,
    Outcome,
    RecordNotFoundError,
    RemoteUnavailableError,
    ValidationRejectedError,
)
from deckledger.models.match import (
    MAX_GAMES_PER_MATCH,
    GameOutcome,
    GameResult,
    Match,
    MatchResult,
)
from deckledger.models.stats import DeckStats, OpponentStats, RecordStats

__all__ = [
    "Deck",
    "DeckStats",
    "FailureDetail",
    "FailureKind",
    "GameOutcome",
    "GameResult",
    "KnownError",
    "MAX_GAMES_PER_MATCH",
    "Match",
    "MatchResult",
    "OpponentStats",
    "Outcome",
    "RecordNotFoundError",
    "RecordStats",
    "RemoteUnavailableError",
    "Tournament",
    "UNKNOWN_DECK_NAME",
    "ValidationRejectedError",
]
