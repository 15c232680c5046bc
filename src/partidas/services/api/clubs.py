"""Club endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from partidas.domain import Club, ClubFilters, ClubPayload, Page, PageRequest
from partidas.registry import ClubService

from .dependencies import get_club_service, get_page_request
from .errors import FailureResponse, unwrap

router = APIRouter(prefix="/clubs", tags=["Clubs"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=Club)
async def create_club(payload: ClubPayload, service: ClubService = Depends(get_club_service)) -> Club:
    return unwrap(await service.create_club(payload))


@router.get("", response_model=Page[Club])
async def list_clubs(
    name: str | None = Query(None, description="Case-insensitive name fragment"),
    state: str | None = Query(None, description="Federative unit code"),
    active: bool | None = Query(None),
    page: PageRequest = Depends(get_page_request),
    service: ClubService = Depends(get_club_service),
) -> Page[Club]:
    filters = ClubFilters(name=name, state=state, active=active)
    return unwrap(await service.list_clubs(filters, page))


@router.get("/{club_id}", response_model=Club)
async def get_club(club_id: int, service: ClubService = Depends(get_club_service)) -> Club:
    return unwrap(await service.get_club(club_id))


@router.put("/{club_id}", response_model=Club)
async def update_club(
    club_id: int, payload: ClubPayload, service: ClubService = Depends(get_club_service)
) -> Club:
    return unwrap(await service.update_club(club_id, payload))


@router.delete("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
async def deactivate_club(club_id: int, service: ClubService = Depends(get_club_service)) -> Response:
    """Soft delete: the club is kept but marked inactive."""

    failure = await service.deactivate_club(club_id)
    if failure is not None:
        raise FailureResponse(failure)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
