"""
SQLAlchemy ORM models for the SQL-backed remote store.

Tables mirror the hosted backend's columns so records have the same shape
whichever store serves them. Every row is owned by one user_id.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class DeckDB(Base):
    """A player's deck."""

    __tablename__ = "ga_decks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    name: Mapped[str] = mapped_column(String(255))
    hero: Mapped[str | None] = mapped_column(String(100), nullable=True)
    format: Mapped[str | None] = mapped_column(String(50), nullable=True, index=True)
    decklist_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    slug: Mapped[str | None] = mapped_column(String(255), nullable=True)
    archived: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<DeckDB(id={self.id}, name={self.name})>"


class MatchDB(Base):
    """
    A recorded match.

    deck_id and tournament_id are plain references without foreign keys:
    deleting a deck leaves its matches in place.
    """

    __tablename__ = "matches"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    deck_id: Mapped[str] = mapped_column(String(36), index=True)
    tournament_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    opponent_deck: Mapped[str | None] = mapped_column(String(255), nullable=True)
    opponent_hero: Mapped[str | None] = mapped_column(String(100), nullable=True)
    result: Mapped[str] = mapped_column(String(10))

    # Per-game detail as [{"first": bool, "result": "win"|"loss"}, ...]
    games: Mapped[list[dict[str, Any]] | None] = mapped_column(JSON, nullable=True)
    # Legacy single-game rows only record who went first
    first: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<MatchDB(id={self.id}, deck_id={self.deck_id}, result={self.result})>"


class TournamentDB(Base):
    """A tournament the player entered."""

    __tablename__ = "tournaments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    name: Mapped[str] = mapped_column(String(255))
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, index=True)
    format: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<TournamentDB(id={self.id}, name={self.name})>"


# Remote resource name -> ORM model
RESOURCE_MODELS: dict[str, type[Base]] = {
    DeckDB.__tablename__: DeckDB,
    MatchDB.__tablename__: MatchDB,
    TournamentDB.__tablename__: TournamentDB,
}
