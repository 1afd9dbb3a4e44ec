"""
Format endpoints.

Lists the known formats with their opponent hero lists, and the decks of
one format for format-scoped selection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from deckledger.api.decks import DeckListResponse, deck_list
from deckledger.api.deps import get_tracker
from deckledger.filtering.format_scope import FORMATS, HEROES_BY_FORMAT, decks_for_format
from deckledger.sync.tracker import Tracker

router = APIRouter(prefix="/formats", tags=["formats"])


class FormatResponse(BaseModel):
    name: str
    heroes: list[str]


@router.get("", response_model=list[FormatResponse])
async def list_formats() -> list[FormatResponse]:
    return [FormatResponse(name=name, heroes=HEROES_BY_FORMAT.get(name, [])) for name in FORMATS]


@router.get("/{format_name}/decks", response_model=DeckListResponse)
async def get_format_decks(
    format_name: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeckListResponse:
    """Decks of one format, newest first. Unknown formats give an empty list."""
    return deck_list(decks_for_format(tracker.decks.records, format_name))
