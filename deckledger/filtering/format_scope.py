"""
Format-scoped selection options.

A format decides which decks are comparable and, for formats with a fixed
hero pool, which opponent labels may be picked. Formats without a
configured vocabulary fall back to free-text opponent entry.
"""

from collections.abc import Iterable, Mapping, Sequence

from deckledger.models.deck import Deck

# Grand Archive formats
FORMATS: tuple[str, ...] = ("Standard", "Re:Constructed", "Peasant")

_CHAMPIONS = [
    "Arthur",
    "Gawain",
    "Kira",
    "Lancelot",
    "Lorraine",
    "Merlin",
    "Mordred",
    "Nix",
    "Rai",
    "Silvie",
    "Tonon",
    "Tristan",
    "Zander",
]

# Opponent heroes selectable per format
HEROES_BY_FORMAT: dict[str, list[str]] = {
    "Standard": sorted(_CHAMPIONS),
    "Re:Constructed": sorted(_CHAMPIONS),
    "Peasant": sorted(["Lorraine", "Rai", "Silvie", "Zander"]),
}


def all_heroes(vocabulary: Mapping[str, Iterable[str]] = HEROES_BY_FORMAT) -> list[str]:
    """Every hero across formats, sorted and without duplicates."""
    return sorted({hero for heroes in vocabulary.values() for hero in heroes})


def decks_for_format(decks: Sequence[Deck], format_name: str) -> list[Deck]:
    """Decks of one format, in mirror order. Unknown formats give []."""
    return [deck for deck in decks if deck.format == format_name]


def options_for_deck(
    deck: Deck,
    vocabulary: Mapping[str, Sequence[str]] = HEROES_BY_FORMAT,
) -> list[str]:
    """
    Opponent labels offered when recording a match with this deck.

    Empty when the deck's format has no configured vocabulary; the caller
    then expects free text.
    """
    return list(vocabulary.get(deck.format, ()))
