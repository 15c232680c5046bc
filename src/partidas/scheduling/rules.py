"""Validation rules applied to a match proposal.

Every rule is a pure function returning ``None`` when the proposal passes and
a :class:`~partidas.errors.Failure` describing the first violation otherwise.
The engine evaluates them in this order:

1. All fields present
2. Mandante, visitante and stadium exist (resolved by the engine)
3. Mandante and visitante are different clubs
4. Goals are not negative
5. The match is not scheduled before either club was founded
6. Both clubs are active
7. Neither club plays another match within the fatigue window
8. The stadium hosts no other match on the same civil date
"""

from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Iterable
from zoneinfo import ZoneInfo

from partidas.domain import Club, Match, MatchProposal
from partidas.errors import Failure, conflict, invalid

FATIGUE_WINDOW_HOURS = 48

REQUIRED_FIELDS = (
    "mandante_id",
    "visitante_id",
    "mandante_goals",
    "visitante_goals",
    "stadium_id",
    "scheduled_at",
)


def normalize_timestamp(value: datetime, civil_timezone: str) -> datetime:
    """Return ``value`` as a naive datetime in the civil calendar."""

    if value.tzinfo is None or value.utcoffset() is None:
        return value
    return value.astimezone(ZoneInfo(civil_timezone)).replace(tzinfo=None)


def check_complete(proposal: MatchProposal) -> Failure | None:
    missing = [name for name in REQUIRED_FIELDS if getattr(proposal, name) is None]
    if missing:
        return invalid(f"All fields are required; missing: {', '.join(missing)}")
    return None


def check_distinct_opponents(proposal: MatchProposal) -> Failure | None:
    if proposal.mandante_id == proposal.visitante_id:
        return invalid("Mandante and visitante must be different clubs")
    return None


def check_non_negative_goals(proposal: MatchProposal) -> Failure | None:
    if proposal.mandante_goals < 0 or proposal.visitante_goals < 0:
        return invalid("Goals cannot be negative")
    return None


def check_founding_dates(
    scheduled_at: datetime, mandante: Club, visitante: Club
) -> Failure | None:
    """Reject matches that kick off before the start of either founding day."""

    for club in (mandante, visitante):
        if scheduled_at < datetime.combine(club.founded_on, time.min):
            return conflict(
                "Match date cannot be earlier than the founding date of the clubs involved"
            )
    return None


def check_clubs_active(mandante: Club, visitante: Club) -> Failure | None:
    if not mandante.active or not visitante.active:
        return conflict("Matches cannot involve an inactive club")
    return None


def whole_hours_between(first: datetime, second: datetime) -> int:
    """Absolute distance between two timestamps, truncated to whole hours."""

    return abs(first - second) // timedelta(hours=1)


def check_fatigue_window(
    role: str,
    scheduled_at: datetime,
    history: Iterable[Match],
    *,
    exclude_match_id: int | None = None,
    window_hours: int = FATIGUE_WINDOW_HOURS,
) -> Failure | None:
    """Reject when ``history`` holds a match closer than ``window_hours``.

    ``history`` must contain every match the club takes part in, home or away.
    A distance of exactly ``window_hours`` is allowed.
    """

    for match in history:
        if exclude_match_id is not None and match.id == exclude_match_id:
            continue
        if whole_hours_between(match.scheduled_at, scheduled_at) < window_hours:
            return conflict(
                f"Club {role} already has another match within {window_hours} hours"
            )
    return None


def check_stadium_free(
    scheduled_at: datetime,
    stadium_matches: Iterable[Match],
    *,
    exclude_match_id: int | None = None,
) -> Failure | None:
    match_day = scheduled_at.date()
    for match in stadium_matches:
        if exclude_match_id is not None and match.id == exclude_match_id:
            continue
        if match.scheduled_at.date() == match_day:
            return conflict("Stadium already hosts another match on the same day")
    return None


__all__ = [
    "FATIGUE_WINDOW_HOURS",
    "REQUIRED_FIELDS",
    "check_clubs_active",
    "check_complete",
    "check_distinct_opponents",
    "check_fatigue_window",
    "check_founding_dates",
    "check_non_negative_goals",
    "check_stadium_free",
    "normalize_timestamp",
    "whole_hours_between",
]
