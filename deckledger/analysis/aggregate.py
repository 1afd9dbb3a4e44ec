"""
Win-rate breakdowns over the match mirror.

Everything here is a pure function of the records passed in; callers
recompute from the current mirrors on every read.
"""

from collections.abc import Iterable, Sequence

from deckledger.analysis.results import count_results
from deckledger.models.deck import UNKNOWN_DECK_NAME, Deck
from deckledger.models.match import Match
from deckledger.models.stats import DeckStats, OpponentStats, RecordStats

# Number of matches shown as "recent"
DEFAULT_RECENT_LIMIT = 3


def _group(matches: Iterable[Match], key: str) -> dict[str, list[Match]]:
    """Group matches by an attribute, keeping first-appearance order."""
    groups: dict[str, list[Match]] = {}
    for match in matches:
        groups.setdefault(getattr(match, key), []).append(match)
    return groups


def aggregate_by_deck(matches: Sequence[Match], decks: Sequence[Deck]) -> list[DeckStats]:
    """
    Record per deck, best win rate first.

    Every deck gets a row, even with no matches. Matches whose deck is no
    longer known are grouped under their deck_id with a placeholder name.
    Ties keep deck order, then first appearance of unknown decks.
    """
    by_deck = _group(matches, "deck_id")
    known_ids = {deck.id for deck in decks}

    rows: list[tuple[str, str]] = [(deck.id, deck.name) for deck in decks]
    rows.extend((deck_id, UNKNOWN_DECK_NAME) for deck_id in by_deck if deck_id not in known_ids)

    stats: list[DeckStats] = []
    for deck_id, deck_name in rows:
        record = count_results(by_deck.get(deck_id, []))
        stats.append(
            DeckStats(
                deck_id=deck_id,
                deck_name=deck_name,
                wins=record.wins,
                losses=record.losses,
                draws=record.draws,
                total=record.total,
                win_rate=record.win_rate,
            )
        )

    return sorted(stats, key=lambda s: s.win_rate, reverse=True)


def aggregate_by_opponent(
    matches: Sequence[Match],
    decks: Sequence[Deck],
    format_name: str,
    deck_id: str | None = None,
) -> list[OpponentStats]:
    """
    Record per opponent label within one format, most-faced first.

    Only matches played with a known deck of the given format count. If
    deck_id is set, only matches with that deck count.
    """
    format_deck_ids = {deck.id for deck in decks if deck.format == format_name}
    scoped = [
        match
        for match in matches
        if match.deck_id in format_deck_ids and (deck_id is None or match.deck_id == deck_id)
    ]

    stats: list[OpponentStats] = []
    for label, group in _group(scoped, "opponent").items():
        record = count_results(group)
        stats.append(
            OpponentStats(
                label=label,
                wins=record.wins,
                losses=record.losses,
                draws=record.draws,
                total=record.total,
                win_rate=record.win_rate,
            )
        )

    return sorted(stats, key=lambda s: s.total, reverse=True)


def overall_stats(matches: Iterable[Match]) -> RecordStats:
    """Record across every match."""
    return count_results(matches)


def recent_matches(matches: Sequence[Match], limit: int = DEFAULT_RECENT_LIMIT) -> list[Match]:
    """The newest matches. Expects mirror order (newest first)."""
    return list(matches[:limit])


def matches_for_deck(matches: Iterable[Match], deck_id: str | None) -> list[Match]:
    """Matches played with one deck; all matches when deck_id is None."""
    if deck_id is None:
        return list(matches)
    return [match for match in matches if match.deck_id == deck_id]


def matches_for_tournament(matches: Iterable[Match], tournament_id: str) -> list[Match]:
    """Matches that belong to one tournament."""
    return [match for match in matches if match.tournament_id == tournament_id]
