"""
Match API endpoints.

A match's result can be sent explicitly or left out and derived from its
games. A result that contradicts the games is rejected with 422.
"""

from datetime import datetime
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field

from deckledger.analysis.aggregate import matches_for_deck, matches_for_tournament
from deckledger.api.decks import DeleteResponse
from deckledger.api.deps import get_tracker, not_found, unwrap
from deckledger.models.match import MAX_GAMES_PER_MATCH, Match
from deckledger.sync.tracker import Tracker

router = APIRouter(prefix="/matches", tags=["matches"])


class GameModel(BaseModel):
    """One game of a match."""

    went_first: bool
    result: Literal["win", "loss"]


class MatchResponse(BaseModel):
    """Response model for a single match."""

    id: str
    deck_id: str
    deck_name: str
    opponent: str
    result: Literal["win", "loss", "draw"]
    games: list[GameModel] = Field(default_factory=list)
    tournament_id: str | None = None
    date: datetime | None = None
    notes: str = ""


class MatchListResponse(BaseModel):
    """Response model for a list of matches."""

    matches: list[MatchResponse]
    count: int


class MatchCreateRequest(BaseModel):
    """Request model for recording a match."""

    deck_id: str = Field(..., min_length=1)
    opponent: str = Field(..., min_length=1, examples=["Silvie"])
    result: Literal["win", "loss", "draw"] | None = Field(
        default=None,
        description="Overall result; derived from games by majority when omitted",
    )
    games: list[GameModel] = Field(default_factory=list, max_length=MAX_GAMES_PER_MATCH)
    tournament_id: str | None = None
    date: datetime | None = None
    notes: str = ""


class MatchUpdateRequest(BaseModel):
    """Request model for a partial match update. Only fields sent are changed."""

    deck_id: str | None = None
    opponent: str | None = None
    result: Literal["win", "loss", "draw"] | None = None
    games: list[GameModel] | None = Field(default=None, max_length=MAX_GAMES_PER_MATCH)
    tournament_id: str | None = None
    date: datetime | None = None
    notes: str | None = None


def match_response(match: Match, tracker: Tracker) -> MatchResponse:
    return MatchResponse(
        id=match.id,
        deck_id=match.deck_id,
        deck_name=tracker.deck_name(match.deck_id),
        opponent=match.opponent,
        result=match.result.value,
        games=[
            GameModel(went_first=game.went_first, result=game.result.value)
            for game in match.games
        ],
        tournament_id=match.tournament_id,
        date=match.date,
        notes=match.notes,
    )


@router.get("", response_model=MatchListResponse)
async def list_matches(
    tracker: Annotated[Tracker, Depends(get_tracker)],
    deck_id: Annotated[str | None, Query()] = None,
    tournament_id: Annotated[str | None, Query()] = None,
) -> MatchListResponse:
    """List matches, newest first, optionally for one deck or tournament."""
    matches = matches_for_deck(tracker.matches.records, deck_id)
    if tournament_id is not None:
        matches = matches_for_tournament(matches, tournament_id)

    return MatchListResponse(
        matches=[match_response(match, tracker) for match in matches],
        count=len(matches),
    )


@router.get("/{match_id}", response_model=MatchResponse)
async def get_match(
    match_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> MatchResponse:
    match = tracker.matches.get_by_id(match_id)
    if match is None:
        raise not_found("match", match_id)
    return match_response(match, tracker)


@router.post("", response_model=MatchResponse, status_code=status.HTTP_201_CREATED)
async def create_match(
    request: MatchCreateRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> MatchResponse:
    """Record a match."""
    match = unwrap(await tracker.matches.create(request.model_dump(exclude_unset=True)))
    if match is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"kind": "service_unavailable", "message": "The match was not acknowledged"},
        )
    return match_response(match, tracker)


@router.patch("/{match_id}", response_model=MatchResponse)
async def update_match(
    match_id: str,
    request: MatchUpdateRequest,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> MatchResponse:
    """Change some fields of a match."""
    if tracker.matches.get_by_id(match_id) is None:
        raise not_found("match", match_id)

    match = unwrap(await tracker.matches.update(match_id, request.model_dump(exclude_unset=True)))
    if match is None:
        raise not_found("match", match_id)
    return match_response(match, tracker)


@router.delete("/{match_id}", response_model=DeleteResponse)
async def delete_match(
    match_id: str,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> DeleteResponse:
    if tracker.matches.get_by_id(match_id) is None:
        raise not_found("match", match_id)

    unwrap(await tracker.matches.delete(match_id))
    return DeleteResponse(id=match_id)
