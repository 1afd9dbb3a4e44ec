from dataclasses import dataclass
from datetime import datetime

# Shown wherever a match references a deck that is not in the local mirror
UNKNOWN_DECK_NAME = "Unknown deck"


@dataclass(frozen=True)
class Deck:
    """
    A deck registered by the player.

    Attributes:
        id: Server-assigned identifier
        name: Player-chosen deck name
        hero: Hero the deck is built around
        format: Format the deck is played in (Standard, Re:Constructed, ...)
        created_at: Server-assigned creation time (None if the remote omitted it)
        archived: Hidden from active use but kept for history
        decklist_url: Link to the published decklist
        slug: Remote short name for the deck, if any
        image_url: Cover image
    """

    id: str
    name: str
    hero: str = ""
    format: str = ""
    created_at: datetime | None = None
    archived: bool = False
    decklist_url: str | None = None
    slug: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class Tournament:
    """An event that groups several matches."""

    id: str
    name: str
    date: datetime | None = None
    format: str = ""
    notes: str = ""
