from deckledger.analysis.aggregate import (
    aggregate_by_deck,
    aggregate_by_opponent,
    matches_for_deck,
    matches_for_tournament,
    overall_stats,
    recent_matches,
)
from deckledger.analysis.results import count_results, derive_result, win_rate

__all__ = [
    "aggregate_by_deck",
    "aggregate_by_opponent",
    "count_results",
    "derive_result",
    "matches_for_deck",
    "matches_for_tournament",
    "overall_stats",
    "recent_matches",
    "win_rate",
]
