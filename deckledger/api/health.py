"""
Health check endpoints.

Provides liveness and readiness probes. Ready means every mirror has been
loaded for the current identity.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel

from deckledger.api.deps import get_tracker
from deckledger.sync.tracker import Tracker

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    mirrors: dict[str, bool] | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check the remote store.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(
    response: Response,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> HealthResponse:
    """
    Readiness probe.

    Returns 503 until decks, matches and tournaments are all loaded.
    """
    mirrors = {
        sync.resource: sync.loaded for sync in (tracker.decks, tracker.matches, tracker.tournaments)
    }
    if tracker.loaded:
        return HealthResponse(status="ready", mirrors=mirrors)

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return HealthResponse(status="not ready", mirrors=mirrors)
