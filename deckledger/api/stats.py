"""
Statistics endpoints.

Every response is recomputed from the current mirrors; nothing is cached.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict

from deckledger.analysis.aggregate import DEFAULT_RECENT_LIMIT
from deckledger.api.deps import get_tracker
from deckledger.api.matches import MatchResponse, match_response
from deckledger.sync.tracker import Tracker

router = APIRouter(prefix="/stats", tags=["stats"])


class RecordStatsResponse(BaseModel):
    """Win/loss/draw record with win rate as an integer percent."""

    model_config = ConfigDict(from_attributes=True)

    wins: int
    losses: int
    draws: int
    total: int
    win_rate: int


class OverviewResponse(BaseModel):
    """Overall record plus the most recent matches."""

    record: RecordStatsResponse
    recent: list[MatchResponse]


class DeckStatsResponse(RecordStatsResponse):
    deck_id: str
    deck_name: str


class OpponentStatsResponse(RecordStatsResponse):
    label: str


@router.get("/overview", response_model=OverviewResponse)
async def get_overview(
    tracker: Annotated[Tracker, Depends(get_tracker)],
    recent: Annotated[int, Query(ge=0, le=50)] = DEFAULT_RECENT_LIMIT,
) -> OverviewResponse:
    return OverviewResponse(
        record=RecordStatsResponse.model_validate(tracker.overview()),
        recent=[match_response(match, tracker) for match in tracker.recent_matches(recent)],
    )


@router.get("/decks", response_model=list[DeckStatsResponse])
async def get_deck_stats(
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> list[DeckStatsResponse]:
    """Win rate per deck, best first. Decks without matches are included."""
    return [DeckStatsResponse.model_validate(stats) for stats in tracker.deck_stats()]


@router.get("/opponents", response_model=list[OpponentStatsResponse])
async def get_opponent_stats(
    tracker: Annotated[Tracker, Depends(get_tracker)],
    format_name: Annotated[str, Query(alias="format", min_length=1)],
    deck_id: Annotated[str | None, Query()] = None,
) -> list[OpponentStatsResponse]:
    """
    Record against each opponent within a format, most-faced first.

    Optionally limited to one deck. A format with no decks gives [].
    """
    return [
        OpponentStatsResponse.model_validate(stats)
        for stats in tracker.opponent_stats(format_name, deck_id=deck_id)
    ]
