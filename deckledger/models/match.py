from dataclasses import dataclass
from datetime import datetime
from enum import Enum

# A best-of-three is the longest match tracked
MAX_GAMES_PER_MATCH = 3


class MatchResult(str, Enum):
    """Overall result of a match."""

    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class GameOutcome(str, Enum):
    """Result of a single game. Individual games cannot be drawn."""

    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class GameResult:
    """One game inside a match."""

    went_first: bool
    result: GameOutcome


@dataclass(frozen=True)
class Match:
    """
    A recorded match.

    Two shapes are supported: matches with per-game detail, whose result
    follows the games by majority, and matches that only carry a top-level
    result (games is empty).

    Attributes:
        id: Server-assigned identifier
        deck_id: Deck the player used (may no longer exist)
        opponent: Opponent label, a free-text deck name or a hero name
        result: Overall result
        date: When the match was played
        games: Per-game results in play order (0-3 entries)
        tournament_id: Tournament the match belongs to, if any
        notes: Free-text notes
    """

    id: str
    deck_id: str
    opponent: str
    result: MatchResult
    date: datetime | None = None
    games: tuple[GameResult, ...] = ()
    tournament_id: str | None = None
    notes: str = ""
