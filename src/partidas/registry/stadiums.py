"""Stadium registration, updates and listings."""

from __future__ import annotations

from dataclasses import dataclass

from structlog import get_logger

from partidas.domain import Page, PageRequest, Stadium, StadiumPayload
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
from partidas.registry.ports import StadiumStore

logger = get_logger(__name__)

MIN_STADIUM_NAME_LENGTH = 3
DUPLICATE_STADIUM_REASON = "A stadium with the same name already exists"


def validate_stadium_name(payload: StadiumPayload) -> str | Failure:
    if payload.name is None or len(payload.name.strip()) < MIN_STADIUM_NAME_LENGTH:
        return invalid(f"Invalid name: must have at least {MIN_STADIUM_NAME_LENGTH} characters")
    return payload.name.strip()


@dataclass(slots=True)
class StadiumService:
    """CRUD operations over stadiums. Stadium names are globally unique."""

    store: StadiumStore

    async def create_stadium(self, payload: StadiumPayload) -> Outcome[Stadium]:
        name = validate_stadium_name(payload)
        if isinstance(name, Failure):
            return name
        try:
            if await self.store.stadium_by_name(name) is not None:
                return conflict(DUPLICATE_STADIUM_REASON)
            stadium = await self.store.insert_stadium(name=name)
        except DuplicateError:
            logger.info("stadium_rejected", operation="create", reason="duplicate")
            return conflict(DUPLICATE_STADIUM_REASON)
        except StoreError:
            logger.exception("stadium_store_failed", operation="create")
            return internal()
        logger.info("stadium_created", stadium_id=stadium.id)
        return stadium

    async def get_stadium(self, stadium_id: int) -> Outcome[Stadium]:
        try:
            stadium = await self.store.stadium_by_id(stadium_id)
        except StoreError:
            logger.exception("stadium_store_failed", operation="get", stadium_id=stadium_id)
            return internal()
        if stadium is None:
            return not_found("Stadium not found")
        return stadium

    async def update_stadium(self, stadium_id: int, payload: StadiumPayload) -> Outcome[Stadium]:
        try:
            current = await self.store.stadium_by_id(stadium_id)
            if current is None:
                return not_found("Stadium not found")
            name = validate_stadium_name(payload)
            if isinstance(name, Failure):
                return name
            clash = await self.store.stadium_by_name(name)
            if clash is not None and clash.id != stadium_id:
                return conflict(DUPLICATE_STADIUM_REASON)
            stadium = await self.store.save_stadium(current.model_copy(update={"name": name}))
        except DuplicateError:
            logger.info(
                "stadium_rejected", operation="update", stadium_id=stadium_id, reason="duplicate"
            )
            return conflict(DUPLICATE_STADIUM_REASON)
        except StoreError:
            logger.exception("stadium_store_failed", operation="update", stadium_id=stadium_id)
            return internal()
        logger.info("stadium_updated", stadium_id=stadium.id)
        return stadium

    async def list_stadiums(
        self, name: str | None, request: PageRequest
    ) -> Outcome[Page[Stadium]]:
        """List stadiums whose name contains ``name``, ignoring case."""

        if name is not None:
            name = name.strip()
        try:
            stadiums, total = await self.store.stadium_page(name, request)
        except StoreError:
            logger.exception("stadium_store_failed", operation="list")
            return internal()
        return Page[Stadium](items=stadiums, page=request.page, size=request.size, total=total)


__all__ = ["MIN_STADIUM_NAME_LENGTH", "StadiumService", "validate_stadium_name"]
