"""
Tournament API endpoints.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from deckledger.analysis.aggregate import matches_for_tournament, overall_stats
from deckledger.api.decks import DeleteResponse
from deckledger.api.deps import get_tracker, not_found, unwrap
from deckledger.api.stats import RecordStatsResponse
from deckledger.sync.tracker import Tracker

router = APIRouter(prefix="/tournaments", tags=["tournaments"])


class TournamentResponse(BaseModel):
    """Response model for a single tournament."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    date: datetime | None = None
    format: str = ""
    notes: str = ""


class TournamentDetailResponse(TournamentResponse):
    """A tournament with the player's record in it."""

    record: RecordStatsResponse


class TournamentListResponse(BaseModel):
    tournaments: list[TournamentResponse]
    count: int


class TournamentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    date: datetime | None = None
    format: str = ""
    notes: str = ""


class TournamentUpdateRequest(BaseModel):
    name: str | None = None
    date: datetime | None = None
    format: str | None = None
    notes: str | None = None


@router.get("", response_model=TournamentListResponse)
async def list_tournaments(
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> TournamentListResponse:
    """List tournaments, most recent first."""
    tournaments = tracker.tournaments.records
    return TournamentListResponse(
        tournaments=[TournamentResponse.model_validate(t) for t in tournaments],
        count=len(tournaments),
    )


@router.get("/{tournament_id}", response_model=TournamentDetailResponse)
async def get_tournament(
    tournament_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> TournamentDetailResponse:
    tournament = tracker.tournaments.get_by_id(tournament_id)
    if tournament is None:
        raise not_found("tournament", tournament_id)

    record = overall_stats(matches_for_tournament(tracker.matches.records, tournament_id))
    return TournamentDetailResponse(
        **TournamentResponse.model_validate(tournament).model_dump(),
        record=RecordStatsResponse.model_validate(record),
    )


@router.post("", response_model=TournamentResponse, status_code=status.HTTP_201_CREATED)
async def create_tournament(
    request: TournamentCreateRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> TournamentResponse:
    tournament = unwrap(await tracker.tournaments.create(request.model_dump(exclude_unset=True)))
    return TournamentResponse.model_validate(tournament)


@router.patch("/{tournament_id}", response_model=TournamentResponse)
async def update_tournament(
    tournament_id: str,
    request: TournamentUpdateRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> TournamentResponse:
    if tracker.tournaments.get_by_id(tournament_id) is None:
        raise not_found("tournament", tournament_id)

    tournament = unwrap(
        await tracker.tournaments.update(tournament_id, request.model_dump(exclude_unset=True))
    )
    if tournament is None:
        raise not_found("tournament", tournament_id)
    return TournamentResponse.model_validate(tournament)


@router.delete("/{tournament_id}", response_model=DeleteResponse)
async def delete_tournament(
    tournament_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeleteResponse:
    """Delete a tournament. Its matches are kept."""
    if tracker.tournaments.get_by_id(tournament_id) is None:
        raise not_found("tournament", tournament_id)

    unwrap(await tracker.tournaments.delete(tournament_id))
    return DeleteResponse(id=tournament_id)
