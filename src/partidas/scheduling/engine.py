"""Match scheduling engine: decides whether a proposal may be persisted."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum, auto

from structlog import get_logger

from partidas.domain import Club, Match, MatchDetails, MatchDraft, MatchProposal, Stadium
from partidas.errors import Failure, Outcome, StoreError, internal, not_found
from partidas.scheduling.ports import SchedulingStore
from partidas.scheduling.rules import (
    FATIGUE_WINDOW_HOURS,
    check_clubs_active,
    check_complete,
    check_distinct_opponents,
    check_fatigue_window,
    check_founding_dates,
    check_non_negative_goals,
    check_stadium_free,
    normalize_timestamp,
)

logger = get_logger(__name__)

DEFAULT_CIVIL_TIMEZONE = "America/Sao_Paulo"


class ProposalStage(Enum):
    DRAFTED = auto()
    NORMALIZED = auto()
    REFERENCED = auto()
    VALIDATED = auto()
    PERSISTED = auto()
    REJECTED = auto()


@dataclass(slots=True)
class SchedulingContext:
    """Mutable state for a single create or update attempt."""

    proposal: MatchProposal
    existing_match_id: int | None = None
    stage: ProposalStage = ProposalStage.DRAFTED
    failure: Failure | None = None
    mandante: Club | None = None
    visitante: Club | None = None
    stadium: Stadium | None = None
    events: list[str] = field(default_factory=list)

    def advance(self, stage: ProposalStage) -> None:
        self.stage = stage
        self.events.append(stage.name.lower())

    def reject(self, failure: Failure) -> Failure:
        self.stage = ProposalStage.REJECTED
        self.failure = failure
        self.events.append(f"rejected:{failure.kind.value.lower()}")
        return failure

    def draft(self) -> MatchDraft:
        proposal = self.proposal
        return MatchDraft(
            mandante_id=proposal.mandante_id,
            visitante_id=proposal.visitante_id,
            mandante_goals=proposal.mandante_goals,
            visitante_goals=proposal.visitante_goals,
            stadium_id=proposal.stadium_id,
            scheduled_at=proposal.scheduled_at,
        )


def describe_match(match: Match, mandante: Club, visitante: Club, stadium: Stadium) -> MatchDetails:
    """Join a stored match with the names of the entities it references."""

    return MatchDetails(
        match_id=match.id,
        mandante_id=mandante.id,
        mandante_name=mandante.name,
        visitante_id=visitante.id,
        visitante_name=visitante.name,
        mandante_goals=match.mandante_goals,
        visitante_goals=match.visitante_goals,
        stadium_id=stadium.id,
        stadium_name=stadium.name,
        scheduled_at=match.scheduled_at,
    )


@dataclass(slots=True)
class MatchEngine:
    """Validates and writes matches.

    ``write_lock`` must be shared by every engine serving the same store. The
    reads, rule evaluation and write of one call all happen while it is held.
    """

    store: SchedulingStore
    write_lock: asyncio.Lock
    fatigue_window_hours: int = FATIGUE_WINDOW_HOURS
    civil_timezone: str = DEFAULT_CIVIL_TIMEZONE

    async def create_match(self, proposal: MatchProposal) -> Outcome[MatchDetails]:
        """Persist ``proposal`` as a new match when every rule passes."""

        ctx = SchedulingContext(proposal=proposal)
        async with self.write_lock:
            try:
                failure = await self._validate(ctx)
                if failure is not None:
                    return self._rejected(ctx, "create")
                match = await self.store.insert_match(ctx.draft())
            except StoreError:
                logger.exception("match_store_failed", operation="create")
                return ctx.reject(internal())
            ctx.advance(ProposalStage.PERSISTED)

        logger.info("match_created", match_id=match.id, stages=ctx.events)
        return describe_match(match, ctx.mandante, ctx.visitante, ctx.stadium)

    async def update_match(self, match_id: int, proposal: MatchProposal) -> Outcome[MatchDetails]:
        """Overwrite an existing match, re-running every rule against ``proposal``."""

        ctx = SchedulingContext(proposal=proposal, existing_match_id=match_id)
        async with self.write_lock:
            try:
                if await self.store.match_by_id(match_id) is None:
                    ctx.reject(not_found("Match not found"))
                    return self._rejected(ctx, "update")
                failure = await self._validate(ctx)
                if failure is not None:
                    return self._rejected(ctx, "update")
                match = await self.store.overwrite_match(match_id, ctx.draft())
            except StoreError:
                logger.exception("match_store_failed", operation="update", match_id=match_id)
                return ctx.reject(internal())
            ctx.advance(ProposalStage.PERSISTED)

        logger.info("match_updated", match_id=match.id, stages=ctx.events)
        return describe_match(match, ctx.mandante, ctx.visitante, ctx.stadium)

    async def delete_match(self, match_id: int) -> Failure | None:
        """Remove a match. Returns ``None`` on success."""

        async with self.write_lock:
            try:
                if await self.store.match_by_id(match_id) is None:
                    logger.info("match_rejected", operation="delete", kind="NOT_FOUND", match_id=match_id)
                    return not_found("Match not found")
                await self.store.delete_match(match_id)
            except StoreError:
                logger.exception("match_store_failed", operation="delete", match_id=match_id)
                return internal()

        logger.info("match_deleted", match_id=match_id)
        return None

    async def _validate(self, ctx: SchedulingContext) -> Failure | None:
        proposal = ctx.proposal
        if proposal.scheduled_at is not None:
            proposal = proposal.model_copy(
                update={"scheduled_at": normalize_timestamp(proposal.scheduled_at, self.civil_timezone)}
            )
            ctx.proposal = proposal

        failure = check_complete(proposal)
        if failure is not None:
            return ctx.reject(failure)
        ctx.advance(ProposalStage.NORMALIZED)

        ctx.mandante = await self.store.club_by_id(proposal.mandante_id)
        if ctx.mandante is None:
            return ctx.reject(not_found("Mandante club not found"))
        ctx.visitante = await self.store.club_by_id(proposal.visitante_id)
        if ctx.visitante is None:
            return ctx.reject(not_found("Visitante club not found"))
        ctx.stadium = await self.store.stadium_by_id(proposal.stadium_id)
        if ctx.stadium is None:
            return ctx.reject(not_found("Stadium not found"))
        ctx.advance(ProposalStage.REFERENCED)

        for rule in (check_distinct_opponents, check_non_negative_goals):
            failure = rule(proposal)
            if failure is not None:
                return ctx.reject(failure)

        failure = check_founding_dates(proposal.scheduled_at, ctx.mandante, ctx.visitante)
        if failure is None:
            failure = check_clubs_active(ctx.mandante, ctx.visitante)
        if failure is not None:
            return ctx.reject(failure)

        for role, club in (("mandante", ctx.mandante), ("visitante", ctx.visitante)):
            history = await self._club_history(club.id)
            failure = check_fatigue_window(
                role,
                proposal.scheduled_at,
                history,
                exclude_match_id=ctx.existing_match_id,
                window_hours=self.fatigue_window_hours,
            )
            if failure is not None:
                return ctx.reject(failure)

        stadium_matches = await self.store.matches_at_stadium(ctx.stadium.id)
        failure = check_stadium_free(
            proposal.scheduled_at, stadium_matches, exclude_match_id=ctx.existing_match_id
        )
        if failure is not None:
            return ctx.reject(failure)

        ctx.advance(ProposalStage.VALIDATED)
        return None

    async def _club_history(self, club_id: int) -> list[Match]:
        """Every stored match the club takes part in, home or away."""

        home = await self.store.matches_where_club_is_mandante(club_id)
        away = await self.store.matches_where_club_is_visitante(club_id)
        return [*home, *away]

    @staticmethod
    def _rejected(ctx: SchedulingContext, operation: str) -> Failure:
        assert ctx.failure is not None
        logger.info(
            "match_rejected",
            operation=operation,
            kind=ctx.failure.kind.value,
            reason=ctx.failure.reason,
            stages=ctx.events,
        )
        return ctx.failure


__all__ = [
    "DEFAULT_CIVIL_TIMEZONE",
    "MatchEngine",
    "ProposalStage",
    "SchedulingContext",
    "describe_match",
]
