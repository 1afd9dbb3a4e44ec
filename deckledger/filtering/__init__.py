"""
Format-scoped filtering of decks and opponent options.
"""

from deckledger.filtering.format_scope import (
    FORMATS,
    HEROES_BY_FORMAT,
    all_heroes,
    decks_for_format,
    options_for_deck,
)

__all__ = [
    "FORMATS",
    "HEROES_BY_FORMAT",
    "all_heroes",
    "decks_for_format",
    "options_for_deck",
]
