"""
Sync endpoint.

Reloads every mirror from the remote store. This is the only way mirrors
pick up changes made elsewhere.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from deckledger.api.deps import get_tracker
from deckledger.models.failure import FailureDetail
from deckledger.sync.tracker import Tracker

router = APIRouter(tags=["sync"])


class SyncResponse(BaseModel):
    """Response model for sync operation."""

    loaded: dict[str, int] = Field(
        default_factory=dict,
        description="Record count per collection that loaded",
    )
    failures: dict[str, FailureDetail] = Field(
        default_factory=dict,
        description="Failure per collection that did not load (its mirror is unchanged)",
    )


@router.post("/sync", response_model=SyncResponse)
async def sync_all(
    response: Response,
    tracker: Annotated[Tracker, Depends(get_tracker)],
) -> SyncResponse:
    result = SyncResponse()
    for resource, outcome in (await tracker.refresh()).items():
        if outcome.error is not None:
            result.failures[resource] = outcome.error.to_detail()
        else:
            result.loaded[resource] = len(outcome.value or ())

    if result.failures:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return result
