"""
Supabase (PostgREST) remote store.

Talks to the hosted backend's REST interface at <url>/rest/v1/<resource>.
Row-level security on the backend scopes every request to the bearer
token's user; the user_id column is still stamped on insert.

Note: PostgREST answers PATCH/DELETE that match no rows with 2xx and an
empty representation, so `Prefer: return=representation` is used to detect
missing targets.
"""

import logging
from datetime import date, datetime
from typing import Any

import httpx

from deckledger.models.failure import (
    KnownError,
    RecordNotFoundError,
    RemoteUnavailableError,
    ValidationRejectedError,
)
from deckledger.remote.base import Record
from deckledger.remote.identity import Identity

logger = logging.getLogger(__name__)

REST_PATH = "/rest/v1"
RETURN_REPRESENTATION = "return=representation"

# Statuses that mean the record itself was refused
VALIDATION_STATUSES = frozenset({400, 409, 422})


def _jsonable(value: Any) -> Any:
    """Convert values httpx cannot JSON-encode (timestamps) to strings."""
    if isinstance(value, datetime | date):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, list | tuple):
        return [_jsonable(item) for item in value]
    return value


def _error_message(response: httpx.Response) -> str:
    """Pull PostgREST's error message out of a response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("msg") or body)
    return str(body)


def error_for_response(response: httpx.Response, resource: str) -> KnownError:
    """Classify a failed HTTP response."""
    message = _error_message(response)
    detail = f"{response.request.method} {resource}: HTTP {response.status_code}"

    if response.status_code in VALIDATION_STATUSES:
        return ValidationRejectedError(message, detail=detail)
    if response.status_code == 404:
        return RemoteUnavailableError(f"Unknown resource {resource}: {message}", detail=detail)
    return RemoteUnavailableError(message, detail=detail)


class SupabaseStore:
    """RemoteStore backed by a Supabase project."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/") + REST_PATH,
            timeout=timeout,
        )

    async def __aenter__(self) -> "SupabaseStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self, identity: Identity, prefer: str | None = None) -> dict[str, str]:
        token = identity.access_token or self._api_key
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {token}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    async def _request(
        self,
        method: str,
        resource: str,
        identity: Identity,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        logger.debug("%s %s params=%s", method, resource, params)
        try:
            response = await self._client.request(
                method,
                f"/{resource}",
                params=params,
                json=_jsonable(json) if json is not None else None,
                headers=self._headers(identity, prefer),
            )
        except httpx.HTTPError as e:
            raise RemoteUnavailableError(
                "Could not reach the server.", detail=f"{type(e).__name__}: {e}"
            ) from e

        if response.is_error:
            raise error_for_response(response, resource)
        return response

    @staticmethod
    def _rows(response: httpx.Response, resource: str) -> list[Record]:
        try:
            body = response.json()
        except ValueError as e:
            raise RemoteUnavailableError(
                "The server sent an unreadable response.", detail=f"{resource}: {e}"
            ) from e
        if not isinstance(body, list):
            raise RemoteUnavailableError(
                "The server sent an unexpected response.", detail=f"{resource}: {body!r}"
            )
        return body

    async def list_records(
        self,
        resource: str,
        identity: Identity,
        order_by: str,
        descending: bool = True,
    ) -> list[Record]:
        direction = "desc" if descending else "asc"
        response = await self._request(
            "GET",
            resource,
            identity,
            params={"select": "*", "order": f"{order_by}.{direction}"},
        )
        return self._rows(response, resource)

    async def insert_record(self, resource: str, identity: Identity, record: Record) -> Record:
        response = await self._request(
            "POST",
            resource,
            identity,
            params={"select": "*"},
            json=[{**record, "user_id": identity.user_id}],
            prefer=RETURN_REPRESENTATION,
        )
        rows = self._rows(response, resource)
        if not rows:
            raise RemoteUnavailableError(
                "The server did not return the new record.", detail=f"{resource}: empty insert"
            )
        return rows[0]

    async def update_record(
        self,
        resource: str,
        identity: Identity,
        record_id: str,
        patch: Record,
    ) -> None:
        response = await self._request(
            "PATCH",
            resource,
            identity,
            params={"id": f"eq.{record_id}", "select": "id"},
            json=patch,
            prefer=RETURN_REPRESENTATION,
        )
        if not self._rows(response, resource):
            raise RecordNotFoundError(resource, record_id)

    async def delete_record(self, resource: str, identity: Identity, record_id: str) -> None:
        response = await self._request(
            "DELETE",
            resource,
            identity,
            params={"id": f"eq.{record_id}", "select": "id"},
            prefer=RETURN_REPRESENTATION,
        )
        if not self._rows(response, resource):
            raise RecordNotFoundError(resource, record_id)
