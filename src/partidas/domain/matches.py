"""Match records, proposals and listing filters."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class MatchProposal(BaseModel):
    """Fields a caller submits to schedule or reschedule a match.

    Every field is optional at the type level so that missing values reach
    the completeness rule instead of failing during parsing.
    """

    mandante_id: Optional[int] = Field(default=None, description="Home club identifier")
    visitante_id: Optional[int] = Field(default=None, description="Away club identifier")
    mandante_goals: Optional[int] = None
    visitante_goals: Optional[int] = None
    stadium_id: Optional[int] = None
    scheduled_at: Optional[datetime] = Field(
        default=None, description="Kick-off, naive and read in the civil calendar"
    )


class MatchDraft(BaseModel):
    """A proposal that passed every rule and is ready to be written."""

    mandante_id: int
    visitante_id: int
    mandante_goals: int
    visitante_goals: int
    stadium_id: int
    scheduled_at: datetime


class Match(MatchDraft):
    """Persisted match."""

    id: int


class MatchDetails(BaseModel):
    """Match joined with the names of its clubs and stadium."""

    match_id: int
    mandante_id: int
    mandante_name: str
    visitante_id: int
    visitante_name: str
    mandante_goals: int
    visitante_goals: int
    stadium_id: int
    stadium_name: str
    scheduled_at: datetime


class MatchFilters(BaseModel):
    """Conjunctive equality filters for match listings."""

    mandante_id: Optional[int] = None
    visitante_id: Optional[int] = None
    stadium_id: Optional[int] = None
