"""
Deck API endpoints.

Reads come from the deck mirror; writes go through the deck synchronizer
and only touch the mirror once the remote store has acknowledged them.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from deckledger.api.deps import get_tracker, not_found, unwrap
from deckledger.filtering.format_scope import options_for_deck
from deckledger.models.deck import Deck
from deckledger.sync.tracker import Tracker

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckResponse(BaseModel):
    """Response model for a single deck."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    hero: str = ""
    format: str = ""
    created_at: datetime | None = None
    archived: bool = False
    decklist_url: str | None = None
    slug: str | None = None
    image_url: str | None = None


class DeckListResponse(BaseModel):
    """Response model for a list of decks."""

    decks: list[DeckResponse]
    count: int


class DeckCreateRequest(BaseModel):
    """Request model for registering a deck."""

    name: str = Field(..., min_length=1, examples=["Lorraine Aggro"])
    hero: str = Field(default="", examples=["Lorraine"])
    format: str = Field(default="", examples=["Standard"])
    decklist_url: str | None = None
    image_url: str | None = None


class DeckUpdateRequest(BaseModel):
    """Request model for a partial deck update. Only fields sent are changed."""

    name: str | None = None
    hero: str | None = None
    format: str | None = None
    decklist_url: str | None = None
    image_url: str | None = None
    archived: bool | None = None


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    id: str
    deleted: bool = True


class OpponentOptionsResponse(BaseModel):
    """Opponent labels offered for matches played with a deck."""

    deck_id: str
    format: str
    options: list[str]
    free_text: bool = Field(
        ...,
        description="True when the format has no hero list and opponents are typed freely",
    )


def deck_list(decks: list[Deck]) -> DeckListResponse:
    return DeckListResponse(
        decks=[DeckResponse.model_validate(deck) for deck in decks],
        count=len(decks),
    )


@router.get("", response_model=DeckListResponse)
async def list_decks(
    tracker: Annotated[Tracker, Depends(get_tracker)],
    include_archived: Annotated[bool, Query()] = True,
) -> DeckListResponse:
    """List decks, newest first."""
    decks = [deck for deck in tracker.decks.records if include_archived or not deck.archived]
    return deck_list(decks)


@router.get("/{deck_id}", response_model=DeckResponse)
async def get_deck(
    deck_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeckResponse:
    """Get a deck by id. Returns 404 if it is not in the mirror."""
    deck = tracker.decks.get_by_id(deck_id)
    if deck is None:
        raise not_found("deck", deck_id)
    return DeckResponse.model_validate(deck)


@router.get("/{deck_id}/opponents", response_model=OpponentOptionsResponse)
async def get_opponent_options(
    deck_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> OpponentOptionsResponse:
    """Opponent labels to offer when recording a match with this deck."""
    deck = tracker.decks.get_by_id(deck_id)
    if deck is None:
        raise not_found("deck", deck_id)

    options = options_for_deck(deck)
    return OpponentOptionsResponse(
        deck_id=deck.id,
        format=deck.format,
        options=options,
        free_text=not options,
    )


@router.post("", response_model=DeckResponse, status_code=status.HTTP_201_CREATED)
async def create_deck(
    request: DeckCreateRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeckResponse:
    """Register a new deck."""
    deck = unwrap(await tracker.decks.create(request.model_dump(exclude_unset=True)))
    return DeckResponse.model_validate(deck)


@router.patch("/{deck_id}", response_model=DeckResponse)
async def update_deck(
    deck_id: str,
    request: DeckUpdateRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeckResponse:
    """Change some fields of a deck."""
    if tracker.decks.get_by_id(deck_id) is None:
        raise not_found("deck", deck_id)

    deck = unwrap(await tracker.decks.update(deck_id, request.model_dump(exclude_unset=True)))
    if deck is None:
        raise not_found("deck", deck_id)
    return DeckResponse.model_validate(deck)


@router.delete("/{deck_id}", response_model=DeleteResponse)
async def delete_deck(
    deck_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeleteResponse:
    """
    Delete a deck.

    Matches played with the deck are kept and show it as an unknown deck.
    """
    if tracker.decks.get_by_id(deck_id) is None:
        raise not_found("deck", deck_id)

    unwrap(await tracker.decks.delete(deck_id))
    return DeleteResponse(id=deck_id)
