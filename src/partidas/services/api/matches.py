"""Match endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from partidas.domain import MatchDetails, MatchFilters, MatchProposal, Page, PageRequest
from partidas.scheduling import MatchEngine, MatchQueryService

from .dependencies import get_match_engine, get_match_queries, get_page_request
from .errors import FailureResponse, unwrap

router = APIRouter(prefix="/matches", tags=["Matches"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=MatchDetails)
async def create_match(
    proposal: MatchProposal, engine: MatchEngine = Depends(get_match_engine)
) -> MatchDetails:
    """Schedule a match after every rule passes."""

    return unwrap(await engine.create_match(proposal))


@router.get("", response_model=Page[MatchDetails])
async def list_matches(
    mandante_id: int | None = Query(None),
    visitante_id: int | None = Query(None),
    stadium_id: int | None = Query(None),
    page: PageRequest = Depends(get_page_request),
    queries: MatchQueryService = Depends(get_match_queries),
) -> Page[MatchDetails]:
    filters = MatchFilters(mandante_id=mandante_id, visitante_id=visitante_id, stadium_id=stadium_id)
    return unwrap(await queries.list_matches(filters, page))


@router.get("/{match_id}", response_model=MatchDetails)
async def get_match(
    match_id: int, queries: MatchQueryService = Depends(get_match_queries)
) -> MatchDetails:
    return unwrap(await queries.get_match(match_id))


@router.put("/{match_id}", response_model=MatchDetails)
async def update_match(
    match_id: int,
    proposal: MatchProposal,
    engine: MatchEngine = Depends(get_match_engine),
) -> MatchDetails:
    """Reschedule or correct a match; all rules run again."""

    return unwrap(await engine.update_match(match_id, proposal))


@router.delete("/{match_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_match(match_id: int, engine: MatchEngine = Depends(get_match_engine)) -> Response:
    failure = await engine.delete_match(match_id)
    if failure is not None:
        raise FailureResponse(failure)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
