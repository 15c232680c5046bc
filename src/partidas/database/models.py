"""SQLAlchemy ORM models for clubs, stadiums and matches."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class TimestampMixin:
    """Mixin that adds created/updated timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )


class Club(Base, TimestampMixin):
    """Football club. Never removed; ``active`` is cleared instead."""

    __tablename__ = "clubs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    state: Mapped[str] = mapped_column(String(2), nullable=False, index=True)
    founded_on: Mapped[date] = mapped_column(Date, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        UniqueConstraint("name", "state", name="uq_clubs_name_state"),
    )


class Stadium(Base, TimestampMixin):
    """Venue hosting at most one match per civil date."""

    __tablename__ = "stadiums"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)


class Match(Base, TimestampMixin):
    """Match between two clubs. References clubs and stadium by id only."""

    __tablename__ = "matches"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mandante_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clubs.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    visitante_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("clubs.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    stadium_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("stadiums.id", ondelete="RESTRICT"), nullable=False
    )
    mandante_goals: Mapped[int] = mapped_column(Integer, nullable=False)
    visitante_goals: Mapped[int] = mapped_column(Integer, nullable=False)
    scheduled_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    __table_args__ = (
        CheckConstraint("mandante_id <> visitante_id", name="ck_matches_distinct_clubs"),
        CheckConstraint(
            "mandante_goals >= 0 AND visitante_goals >= 0", name="ck_matches_goals_non_negative"
        ),
        Index("ix_matches_stadium_scheduled", "stadium_id", "scheduled_at"),
    )


__all__ = ["Base", "Club", "Match", "Stadium"]
