"""
Record mappers: the per-resource half of a synchronizer.

A mapper knows the remote resource name and ordering column, converts
remote rows into domain records, and validates/coerces the fields callers
pass to create and update before anything is sent to the remote store.
"""

import dataclasses
from collections.abc import Mapping
from datetime import UTC, date, datetime
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

from deckledger.analysis.results import derive_result
from deckledger.models.deck import Deck, Tournament
from deckledger.models.failure import RemoteUnavailableError, ValidationRejectedError
from deckledger.models.match import (
    MAX_GAMES_PER_MATCH,
    GameOutcome,
    GameResult,
    Match,
    MatchResult,
)
from deckledger.remote.base import Record


class Mirrorable(Protocol):
    """Any record a synchronizer can mirror."""

    @property
    def id(self) -> str: ...


T = TypeVar("T", bound=Mirrorable)


def parse_timestamp(value: Any) -> datetime | None:
    """
    Parse a remote timestamp into an aware UTC datetime.

    Accepts ISO-8601 strings, dates and datetimes. Naive values are taken
    as UTC. Empty values give None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value)
    else:
        raise TypeError(f"Not a timestamp: {value!r}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _require_str(name: str, value: Any, optional: bool = False) -> str | None:
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string")
    return value


class RecordMapper(Generic[T]):
    """
    Base mapper.

    Subclasses set the class attributes and implement `_build` (remote row
    to record) and, where needed, `_coerce_field`.
    """

    resource: str
    # Remote column the collection is ordered by, and the matching attribute
    order_by: str
    order_field: str
    # Writable local field -> remote column
    columns: Mapping[str, str]
    # Fields that must be present and non-empty on create
    required: frozenset[str] = frozenset()

    def from_remote(self, row: Record) -> T:
        """Build a record from a remote row."""
        try:
            return self._build(row)
        except (KeyError, ValueError, TypeError) as e:
            raise RemoteUnavailableError(
                "The server sent a malformed record.",
                detail=f"{self.resource}: {type(e).__name__}: {e}",
            ) from e

    def _build(self, row: Record) -> T:
        raise NotImplementedError

    def _coerce_field(self, name: str, value: Any) -> Any:
        return value

    def _coerce(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        unknown = sorted(set(fields) - set(self.columns))
        if unknown:
            raise ValidationRejectedError(
                f"Unknown field(s) for {self.resource}: {', '.join(unknown)}",
                detail=self.resource,
            )

        values: dict[str, Any] = {}
        for name, value in fields.items():
            try:
                values[name] = self._coerce_field(name, value)
            except (ValueError, TypeError) as e:
                raise ValidationRejectedError(f"Invalid {name}: {e}", detail=self.resource) from e
        return values

    def _check_required(self, values: Mapping[str, Any], names: set[str]) -> None:
        missing = sorted(name for name in names if not values.get(name))
        if missing:
            raise ValidationRejectedError(
                f"Missing required field(s): {', '.join(missing)}",
                detail=self.resource,
            )

    def prepare_create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Validate and coerce the fields of a new record."""
        values = self._coerce(fields)
        self._check_required(values, set(self.required))
        return values

    def prepare_update(self, fields: Mapping[str, Any], current: T | None) -> dict[str, Any]:
        """Validate and coerce a partial update. `current` is the mirrored record, if any."""
        values = self._coerce(fields)
        self._check_required(values, set(self.required) & set(values))
        return values

    def _serialize(self, name: str, value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        return value

    def to_remote(self, values: Mapping[str, Any]) -> Record:
        """Rename prepared fields to remote columns."""
        return {self.columns[name]: self._serialize(name, value) for name, value in values.items()}

    def merge(self, record: T, values: Mapping[str, Any]) -> T:
        """Apply prepared fields to a record, leaving the others untouched."""
        return dataclasses.replace(record, **values)  # type: ignore[type-var]

    def sort_key(self, record: T) -> float:
        value = getattr(record, self.order_field)
        return value.timestamp() if value is not None else 0.0


class DeckMapper(RecordMapper[Deck]):
    resource = "ga_decks"
    order_by = "created_at"
    order_field = "created_at"
    columns = {
        "name": "name",
        "hero": "hero",
        "format": "format",
        "decklist_url": "decklist_url",
        "image_url": "image_url",
        "slug": "slug",
        "archived": "archived",
    }
    required = frozenset({"name"})

    def _build(self, row: Record) -> Deck:
        return Deck(
            id=str(row["id"]),
            name=row.get("name") or "",
            hero=row.get("hero") or "",
            format=row.get("format") or "",
            created_at=parse_timestamp(row.get("created_at")),
            archived=bool(row.get("archived")),
            decklist_url=row.get("decklist_url"),
            slug=row.get("slug"),
            image_url=row.get("image_url"),
        )

    def _coerce_field(self, name: str, value: Any) -> Any:
        if name == "archived":
            if not isinstance(value, bool):
                raise TypeError("archived must be a boolean")
            return value
        return _require_str(name, value, optional=name not in {"name", "hero", "format"})


def _coerce_game(value: Any) -> GameResult:
    if isinstance(value, GameResult):
        return value
    if isinstance(value, Mapping):
        went_first = value.get("went_first", value.get("first"))
        if not isinstance(went_first, bool):
            raise TypeError("went_first must be a boolean")
        return GameResult(went_first=went_first, result=GameOutcome(value.get("result")))
    raise TypeError(f"Not a game result: {value!r}")


class MatchMapper(RecordMapper[Match]):
    resource = "matches"
    order_by = "date"
    order_field = "date"
    columns = {
        "deck_id": "deck_id",
        "tournament_id": "tournament_id",
        "opponent": "opponent_deck",
        "result": "result",
        "games": "games",
        "date": "date",
        "notes": "notes",
    }
    required = frozenset({"deck_id", "opponent"})

    def _games_from_row(self, row: Record, result: MatchResult) -> tuple[GameResult, ...]:
        games = row.get("games")
        if games is not None:
            return tuple(_coerce_game(game) for game in games)

        # Legacy rows only say who went first in a single game
        first = row.get("first")
        if first is not None and result != MatchResult.DRAW:
            return (GameResult(went_first=bool(first), result=GameOutcome(result.value)),)
        return ()

    def _build(self, row: Record) -> Match:
        raw_result = row.get("result")
        if raw_result:
            result = MatchResult(raw_result)
            games = self._games_from_row(row, result)
        else:
            games = tuple(_coerce_game(game) for game in row.get("games") or ())
            result = derive_result(games)

        return Match(
            id=str(row["id"]),
            deck_id=str(row["deck_id"]),
            opponent=row.get("opponent_deck") or row.get("opponent_hero") or "",
            result=result,
            date=parse_timestamp(row.get("date")),
            games=games,
            tournament_id=row.get("tournament_id"),
            notes=row.get("notes") or "",
        )

    def _coerce_field(self, name: str, value: Any) -> Any:
        if name == "result":
            return None if value is None else MatchResult(value)
        if name == "games":
            games = tuple(_coerce_game(game) for game in value or ())
            if len(games) > MAX_GAMES_PER_MATCH:
                raise ValueError(f"at most {MAX_GAMES_PER_MATCH} games per match")
            return games
        if name == "date":
            return parse_timestamp(value)
        if name == "notes":
            return _require_str(name, value, optional=True) or ""
        return _require_str(name, value, optional=name == "tournament_id")

    def _check_consistent(self, result: MatchResult, games: tuple[GameResult, ...]) -> None:
        if games and result != derive_result(games):
            raise ValidationRejectedError(
                f"Result '{result.value}' contradicts the game results "
                f"('{derive_result(games).value}' by majority).",
                detail=self.resource,
            )

    def prepare_create(self, fields: Mapping[str, Any]) -> dict[str, Any]:
        values = super().prepare_create(fields)
        games = values.setdefault("games", ())

        if values.get("result") is None:
            if not games:
                raise ValidationRejectedError(
                    "A match needs a result or at least one game.", detail=self.resource
                )
            values["result"] = derive_result(games)
        self._check_consistent(values["result"], games)

        if values.get("date") is None:
            values["date"] = datetime.now(UTC)
        values.setdefault("notes", "")
        return values

    def prepare_update(self, fields: Mapping[str, Any], current: Match | None) -> dict[str, Any]:
        values = super().prepare_update(fields, current)
        if "result" in values and values["result"] is None:
            del values["result"]
        if "date" in values and values["date"] is None:
            raise ValidationRejectedError("A match date cannot be cleared.", detail=self.resource)

        if "games" in values:
            games = values["games"]
            if "result" not in values and games:
                values["result"] = derive_result(games)
        else:
            games = current.games if current is not None else ()

        if "result" in values:
            self._check_consistent(values["result"], games)
        return values

    def _serialize(self, name: str, value: Any) -> Any:
        if name == "games":
            return [{"first": game.went_first, "result": game.result.value} for game in value]
        return super()._serialize(name, value)


class TournamentMapper(RecordMapper[Tournament]):
    resource = "tournaments"
    order_by = "date"
    order_field = "date"
    columns = {
        "name": "name",
        "date": "date",
        "format": "format",
        "notes": "notes",
    }
    required = frozenset({"name"})

    def _build(self, row: Record) -> Tournament:
        return Tournament(
            id=str(row["id"]),
            name=row.get("name") or "",
            date=parse_timestamp(row.get("date")),
            format=row.get("format") or "",
            notes=row.get("notes") or "",
        )

    def _coerce_field(self, name: str, value: Any) -> Any:
        if name == "date":
            return parse_timestamp(value)
        if name == "notes":
            return _require_str(name, value, optional=True) or ""
        return _require_str(name, value)
