"""
Match result derivation.

A match's overall result follows its games by majority: more game wins
than losses is a win, more losses than wins is a loss, anything else
(including no games at all) is a draw.
"""

from collections.abc import Iterable

from deckledger.models.match import GameOutcome, GameResult, Match, MatchResult
from deckledger.models.stats import RecordStats


def derive_result(games: Iterable[GameResult]) -> MatchResult:
    """Derive a match result from its games by majority."""
    wins = 0
    losses = 0
    for game in games:
        if game.result == GameOutcome.WIN:
            wins += 1
        else:
            losses += 1

    if wins > losses:
        return MatchResult.WIN
    if losses > wins:
        return MatchResult.LOSS
    return MatchResult.DRAW


def win_rate(wins: int, total: int) -> int:
    """
    Win percentage rounded half-up to an integer.

    Uses integer arithmetic so 0.5 boundaries never suffer float error.
    Returns 0 when there are no matches.
    """
    if total <= 0:
        return 0
    return (200 * wins + total) // (2 * total)


def count_results(matches: Iterable[Match]) -> RecordStats:
    """Tally wins, losses and draws over matches."""
    wins = losses = draws = 0
    for match in matches:
        if match.result == MatchResult.WIN:
            wins += 1
        elif match.result == MatchResult.LOSS:
            losses += 1
        else:
            draws += 1

    total = wins + losses + draws
    return RecordStats(
        wins=wins,
        losses=losses,
        draws=draws,
        total=total,
        win_rate=win_rate(wins, total),
    )
