"""
Shared API dependencies.

The tracker lives on app.state (created in the lifespan handler) and is
injected into routes through `get_tracker`, so tests can override it.
"""

from typing import Any, TypeVar

from fastapi import HTTPException, Request, status

from deckledger.models.failure import Outcome
from deckledger.sync.tracker import Tracker

T = TypeVar("T")


def get_tracker(request: Request) -> Tracker:
    """Dependency that provides the session's tracker."""
    tracker: Tracker | None = getattr(request.app.state, "tracker", None)
    if tracker is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Tracker not initialized",
        )
    return tracker


def unwrap(outcome: Outcome[T]) -> T | None:
    """Return an outcome's value, or raise its failure as an HTTPException."""
    if outcome.error is not None:
        raise HTTPException(
            status_code=outcome.error.status_code,
            detail=outcome.error.to_detail().model_dump(mode="json"),
        )
    return outcome.value


def not_found(resource: str, record_id: str) -> HTTPException:
    detail: dict[str, Any] = {"kind": "not_found", "message": f"No {resource} '{record_id}'"}
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
