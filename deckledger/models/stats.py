from dataclasses import dataclass


@dataclass(frozen=True)
class RecordStats:
    """Win/loss/draw counts with the derived win rate (integer percent)."""

    wins: int = 0
    losses: int = 0
    draws: int = 0
    total: int = 0
    win_rate: int = 0


@dataclass(frozen=True)
class DeckStats:
    """Record of the player's matches with one deck."""

    deck_id: str
    deck_name: str
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total: int = 0
    win_rate: int = 0


@dataclass(frozen=True)
class OpponentStats:
    """Record of the player's matches against one opponent label."""

    label: str
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total: int = 0
    win_rate: int = 0
