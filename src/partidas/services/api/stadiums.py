"""Stadium endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from partidas.domain import Page, PageRequest, Stadium, StadiumPayload
from partidas.registry import StadiumService

from .dependencies import get_page_request, get_stadium_service
from .errors import unwrap

router = APIRouter(prefix="/stadiums", tags=["Stadiums"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Stadium)
async def create_stadium(
    payload: StadiumPayload, service: StadiumService = Depends(get_stadium_service)
) -> Stadium:
    return unwrap(await service.create_stadium(payload))


@router.get("", response_model=Page[Stadium])
async def list_stadiums(
    name: str | None = Query(None, description="Case-insensitive name fragment"),
    page: PageRequest = Depends(get_page_request),
    service: StadiumService = Depends(get_stadium_service),
) -> Page[Stadium]:
    return unwrap(await service.list_stadiums(name, page))


@router.get("/{stadium_id}", response_model=Stadium)
async def get_stadium(
    stadium_id: int, service: StadiumService = Depends(get_stadium_service)
) -> Stadium:
    return unwrap(await service.get_stadium(stadium_id))


@router.put("/{stadium_id}", response_model=Stadium)
async def update_stadium(
    stadium_id: int,
    payload: StadiumPayload,
    service: StadiumService = Depends(get_stadium_service),
) -> Stadium:
    return unwrap(await service.update_stadium(stadium_id, payload))
