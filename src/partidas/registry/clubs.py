"""Club registration, updates, soft deletion and listings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from structlog import get_logger

from partidas.domain import BrazilianState, Club, ClubFilters, ClubPayload, Page, PageRequest
from partidas.errors import (
    DuplicateError,
    Failure,
    Outcome,
    StoreError,
    conflict,
    internal,
    invalid,
    not_found,
)
from partidas.registry.ports import ClubStore

logger = get_logger(__name__)

MIN_CLUB_NAME_LENGTH = 2
DUPLICATE_CLUB_REASON = "A club with the same name already exists in this state"
_STATE_CODES = frozenset(state.value for state in BrazilianState)


@dataclass(slots=True)
class ClubFields:
    """Validated and normalized club fields."""

    name: str
    state: str
    founded_on: date
    active: bool


def normalize_state(raw: str) -> str:
    return raw.strip().upper()


def validate_club_payload(payload: ClubPayload, today: date) -> ClubFields | Failure:
    """Check presence, name length, state code and founding date."""

    if (
        payload.name is None
        or not payload.name.strip()
        or payload.state is None
        or not payload.state.strip()
        or payload.founded_on is None
        or payload.active is None
    ):
        return invalid("All fields are required and cannot be empty")

    name = payload.name.strip()
    if len(name) < MIN_CLUB_NAME_LENGTH:
        return invalid(f"Invalid name: must have at least {MIN_CLUB_NAME_LENGTH} characters")

    state = normalize_state(payload.state)
    if state not in _STATE_CODES:
        return invalid("Invalid state abbreviation: must be a Brazilian federative unit")

    if payload.founded_on > today:
        return invalid("Founding date cannot be in the future")

    return ClubFields(name=name, state=state, founded_on=payload.founded_on, active=payload.active)


@dataclass(slots=True)
class ClubService:
    """CRUD operations over clubs. Deletion only marks the club inactive."""

    store: ClubStore
    today: Callable[[], date] = field(default=date.today)

    async def create_club(self, payload: ClubPayload) -> Outcome[Club]:
        fields = validate_club_payload(payload, self.today())
        if isinstance(fields, Failure):
            return fields
        try:
            if await self.store.club_by_name_and_state(fields.name, fields.state) is not None:
                return conflict(DUPLICATE_CLUB_REASON)
            club = await self.store.insert_club(
                name=fields.name,
                state=fields.state,
                founded_on=fields.founded_on,
                active=fields.active,
            )
        except DuplicateError:
            logger.info("club_rejected", operation="create", reason="duplicate")
            return conflict(DUPLICATE_CLUB_REASON)
        except StoreError:
            logger.exception("club_store_failed", operation="create")
            return internal()
        logger.info("club_created", club_id=club.id, state=club.state)
        return club

    async def get_club(self, club_id: int) -> Outcome[Club]:
        try:
            club = await self.store.club_by_id(club_id)
        except StoreError:
            logger.exception("club_store_failed", operation="get", club_id=club_id)
            return internal()
        if club is None:
            return not_found("Club not found")
        return club

    async def update_club(self, club_id: int, payload: ClubPayload) -> Outcome[Club]:
        try:
            current = await self.store.club_by_id(club_id)
            if current is None:
                return not_found("Club not found")
            fields = validate_club_payload(payload, self.today())
            if isinstance(fields, Failure):
                return fields
            clash = await self.store.club_by_name_and_state(fields.name, fields.state)
            if clash is not None and clash.id != club_id:
                return conflict(DUPLICATE_CLUB_REASON)
            club = await self.store.save_club(
                current.model_copy(
                    update={
                        "name": fields.name,
                        "state": fields.state,
                        "founded_on": fields.founded_on,
                        "active": fields.active,
                    }
                )
            )
        except DuplicateError:
            logger.info("club_rejected", operation="update", club_id=club_id, reason="duplicate")
            return conflict(DUPLICATE_CLUB_REASON)
        except StoreError:
            logger.exception("club_store_failed", operation="update", club_id=club_id)
            return internal()
        logger.info("club_updated", club_id=club.id)
        return club

    async def deactivate_club(self, club_id: int) -> Failure | None:
        """Soft delete: the club stays stored with ``active`` set to false."""

        try:
            current = await self.store.club_by_id(club_id)
            if current is None:
                return not_found("Club not found")
            await self.store.save_club(current.model_copy(update={"active": False}))
        except StoreError:
            logger.exception("club_store_failed", operation="deactivate", club_id=club_id)
            return internal()
        logger.info("club_deactivated", club_id=club_id)
        return None

    async def list_clubs(self, filters: ClubFilters, request: PageRequest) -> Outcome[Page[Club]]:
        if filters.state is not None:
            filters = filters.model_copy(update={"state": normalize_state(filters.state)})
        if filters.name is not None:
            filters = filters.model_copy(update={"name": filters.name.strip()})
        try:
            clubs, total = await self.store.club_page(filters, request)
        except StoreError:
            logger.exception("club_store_failed", operation="list")
            return internal()
        return Page[Club](items=clubs, page=request.page, size=request.size, total=total)


__all__ = ["ClubFields", "ClubService", "MIN_CLUB_NAME_LENGTH", "validate_club_payload"]
