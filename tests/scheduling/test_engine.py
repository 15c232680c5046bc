"""Scenario tests for the match scheduling engine."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from partidas.domain import MatchDetails, MatchProposal
from partidas.errors import Failure, FailureKind, StoreError
from partidas.scheduling import MatchEngine, ProposalStage, SchedulingContext

KICKOFF = datetime(2025, 1, 10, 15, 0)


def proposal(
    mandante: int = 1,
    visitante: int = 2,
    stadium: int = 1,
    scheduled_at: datetime = KICKOFF,
    goals: tuple[int, int] = (2, 1),
) -> MatchProposal:
    return MatchProposal(
        mandante_id=mandante,
        visitante_id=visitante,
        mandante_goals=goals[0],
        visitante_goals=goals[1],
        stadium_id=stadium,
        scheduled_at=scheduled_at,
    )


def assert_failure(outcome, kind: FailureKind) -> Failure:
    assert isinstance(outcome, Failure), outcome
    assert outcome.kind is kind
    return outcome


@pytest.mark.asyncio
async def test_happy_path_persists_and_resolves_names(engine, store):
    outcome = await engine.create_match(proposal())

    assert isinstance(outcome, MatchDetails)
    assert outcome.match_id in store.matches
    assert outcome.mandante_name == "Corinthians"
    assert outcome.visitante_name == "São Paulo"
    assert outcome.stadium_name == "Neo Química Arena"
    assert (outcome.mandante_goals, outcome.visitante_goals) == (2, 1)
    assert outcome.scheduled_at == KICKOFF


@pytest.mark.asyncio
async def test_self_play_is_invalid(engine, store):
    assert_failure(await engine.create_match(proposal(visitante=1, goals=(0, 0))), FailureKind.INVALID)
    assert store.matches == {}


@pytest.mark.asyncio
async def test_missing_fields_are_invalid(engine):
    failure = assert_failure(
        await engine.create_match(MatchProposal(mandante_id=1, visitante_id=2)),
        FailureKind.INVALID,
    )
    assert "stadium_id" in failure.reason


@pytest.mark.asyncio
async def test_negative_goals_are_invalid(engine):
    assert_failure(await engine.create_match(proposal(goals=(-1, 0))), FailureKind.INVALID)


@pytest.mark.asyncio
async def test_goalless_draw_is_accepted(engine):
    outcome = await engine.create_match(proposal(goals=(0, 0)))
    assert isinstance(outcome, MatchDetails)


@pytest.mark.asyncio
async def test_inactive_club_conflicts(engine, store):
    store.clubs[1] = store.clubs[1].model_copy(update={"active": False})

    outcome = await engine.create_match(
        proposal(scheduled_at=datetime(2025, 6, 1, 18, 0), goals=(1, 0))
    )

    assert_failure(outcome, FailureKind.CONFLICT)


@pytest.mark.asyncio
async def test_match_before_founding_conflicts(engine):
    outcome = await engine.create_match(proposal(scheduled_at=datetime(1925, 1, 1, 12, 0), goals=(1, 1)))
    assert_failure(outcome, FailureKind.CONFLICT)


@pytest.mark.asyncio
async def test_match_on_founding_day_is_accepted(engine):
    outcome = await engine.create_match(proposal(scheduled_at=datetime(1930, 1, 25, 0, 0)))
    assert isinstance(outcome, MatchDetails)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "mandante,visitante,stadium,message",
    [
        (99, 2, 1, "Mandante club not found"),
        (1, 99, 1, "Visitante club not found"),
        (1, 2, 99, "Stadium not found"),
    ],
)
async def test_unknown_references_are_not_found(engine, mandante, visitante, stadium, message):
    failure = assert_failure(
        await engine.create_match(proposal(mandante=mandante, visitante=visitante, stadium=stadium)),
        FailureKind.NOT_FOUND,
    )
    assert failure.reason == message


@pytest.mark.asyncio
async def test_references_are_resolved_before_input_rules(engine):
    self_play = assert_failure(
        await engine.create_match(proposal(mandante=99, visitante=99)), FailureKind.NOT_FOUND
    )
    negative_goals = assert_failure(
        await engine.create_match(proposal(stadium=99, goals=(-1, 0))), FailureKind.NOT_FOUND
    )

    assert self_play.reason == "Mandante club not found"
    assert negative_goals.reason == "Stadium not found"


@pytest.mark.asyncio
async def test_update_resolves_references_before_input_rules(engine, store):
    existing = store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    outcome = await engine.update_match(existing.id, proposal(visitante=99, goals=(-2, 0)))

    failure = assert_failure(outcome, FailureKind.NOT_FOUND)
    assert failure.reason == "Visitante club not found"


@pytest.mark.asyncio
async def test_fatigue_window_conflicts_for_other_opponent(engine, store):
    store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    outcome = await engine.create_match(
        proposal(mandante=1, visitante=3, stadium=2, scheduled_at=datetime(2025, 1, 11, 14, 0))
    )

    failure = assert_failure(outcome, FailureKind.CONFLICT)
    assert "mandante" in failure.reason


@pytest.mark.asyncio
async def test_fatigue_window_covers_away_history(engine, store):
    store.add_match(store.clubs[3], store.clubs[1], store.stadiums[1], KICKOFF)

    outcome = await engine.create_match(
        proposal(mandante=1, visitante=4, stadium=2, scheduled_at=KICKOFF + timedelta(hours=10))
    )

    assert_failure(outcome, FailureKind.CONFLICT)


@pytest.mark.asyncio
async def test_fatigue_window_boundary(engine, store):
    store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    too_soon = await engine.create_match(
        proposal(visitante=3, stadium=2, scheduled_at=KICKOFF + timedelta(hours=47, minutes=59))
    )
    exactly = await engine.create_match(
        proposal(visitante=3, stadium=2, scheduled_at=KICKOFF + timedelta(hours=48))
    )

    assert_failure(too_soon, FailureKind.CONFLICT)
    assert isinstance(exactly, MatchDetails)


@pytest.mark.asyncio
async def test_stadium_double_booking_conflicts(engine, store):
    store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    outcome = await engine.create_match(
        proposal(mandante=3, visitante=4, stadium=1, scheduled_at=datetime(2025, 1, 10, 22, 0))
    )

    failure = assert_failure(outcome, FailureKind.CONFLICT)
    assert failure.reason == "Stadium already hosts another match on the same day"


@pytest.mark.asyncio
async def test_custom_fatigue_window(store):
    engine = MatchEngine(store=store, write_lock=asyncio.Lock(), fatigue_window_hours=12)
    store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    outcome = await engine.create_match(
        proposal(visitante=3, stadium=2, scheduled_at=KICKOFF + timedelta(hours=13))
    )

    assert isinstance(outcome, MatchDetails)


@pytest.mark.asyncio
async def test_aware_timestamp_is_stored_in_civil_time(engine, store):
    outcome = await engine.create_match(
        proposal(scheduled_at=datetime(2025, 1, 10, 18, 0, tzinfo=timezone.utc))
    )

    assert isinstance(outcome, MatchDetails)
    assert store.matches[outcome.match_id].scheduled_at == KICKOFF


@pytest.mark.asyncio
async def test_far_future_timestamp_is_accepted(engine):
    outcome = await engine.create_match(proposal(scheduled_at=datetime(2125, 1, 10, 15, 0)))
    assert isinstance(outcome, MatchDetails)


@pytest.mark.asyncio
async def test_update_ignores_the_match_being_edited(engine, store):
    existing = store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    outcome = await engine.update_match(
        existing.id, proposal(scheduled_at=KICKOFF + timedelta(hours=2), goals=(3, 3))
    )

    assert isinstance(outcome, MatchDetails)
    assert outcome.match_id == existing.id
    assert store.matches[existing.id].mandante_goals == 3
    assert len(store.matches) == 1


@pytest.mark.asyncio
async def test_update_with_identical_fields_is_idempotent(engine, store):
    existing = store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF, goals=(2, 1))

    first = await engine.update_match(existing.id, proposal())
    second = await engine.update_match(existing.id, proposal())

    assert isinstance(first, MatchDetails)
    assert first == second
    assert store.matches[existing.id] == existing


@pytest.mark.asyncio
async def test_update_still_conflicts_with_other_matches(engine, store):
    store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)
    other = store.add_match(store.clubs[3], store.clubs[4], store.stadiums[2], KICKOFF + timedelta(days=5))

    outcome = await engine.update_match(
        other.id, proposal(mandante=3, visitante=4, stadium=1, scheduled_at=KICKOFF + timedelta(hours=6))
    )

    assert_failure(outcome, FailureKind.CONFLICT)
    assert store.matches[other.id] == other


@pytest.mark.asyncio
async def test_update_unknown_match_is_not_found(engine):
    failure = assert_failure(await engine.update_match(42, proposal()), FailureKind.NOT_FOUND)
    assert failure.reason == "Match not found"


@pytest.mark.asyncio
async def test_update_with_inactive_club_conflicts(engine, store):
    existing = store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)
    store.clubs[2] = store.clubs[2].model_copy(update={"active": False})

    outcome = await engine.update_match(existing.id, proposal())

    assert_failure(outcome, FailureKind.CONFLICT)


@pytest.mark.asyncio
async def test_delete_then_delete_again(engine, store):
    existing = store.add_match(store.clubs[1], store.clubs[2], store.stadiums[1], KICKOFF)

    assert await engine.delete_match(existing.id) is None
    assert existing.id not in store.matches
    assert_failure(await engine.delete_match(existing.id), FailureKind.NOT_FOUND)


@pytest.mark.asyncio
async def test_concurrent_conflicting_creates_admit_one(engine, store):
    first, second = await asyncio.gather(
        engine.create_match(proposal(visitante=2, stadium=1)),
        engine.create_match(proposal(visitante=3, stadium=2, scheduled_at=KICKOFF + timedelta(hours=1))),
    )

    outcomes = [first, second]
    assert sum(isinstance(o, MatchDetails) for o in outcomes) == 1
    assert sum(isinstance(o, Failure) and o.kind is FailureKind.CONFLICT for o in outcomes) == 1
    assert len(store.matches) == 1


@pytest.mark.asyncio
async def test_concurrent_stadium_bookings_admit_one(engine, store):
    outcomes = await asyncio.gather(
        engine.create_match(proposal(mandante=1, visitante=2, stadium=1)),
        engine.create_match(
            proposal(mandante=3, visitante=4, stadium=1, scheduled_at=KICKOFF + timedelta(hours=5))
        ),
    )

    assert sum(isinstance(o, MatchDetails) for o in outcomes) == 1
    assert len(store.matches) == 1


@pytest.mark.asyncio
async def test_cancelled_create_leaves_store_unchanged(store):
    release = asyncio.Event()
    entered = asyncio.Event()
    real_insert = store.insert_match

    async def stalled_insert(draft):
        entered.set()
        await release.wait()
        return await real_insert(draft)

    store.insert_match = stalled_insert
    engine = MatchEngine(store=store, write_lock=asyncio.Lock())

    task = asyncio.create_task(engine.create_match(proposal()))
    await entered.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert store.matches == {}
    assert not engine.write_lock.locked()
    assert isinstance(await engine.create_match(proposal(visitante=3)), MatchDetails)


@pytest.mark.asyncio
async def test_store_error_is_reported_as_internal(engine, store):
    async def broken(stadium_id):
        raise StoreError("disk on fire")

    store.matches_at_stadium = broken

    outcome = await engine.create_match(proposal())

    assert_failure(outcome, FailureKind.INTERNAL)
    assert not engine.write_lock.locked()


def test_context_records_stage_transitions():
    ctx = SchedulingContext(proposal=proposal())
    ctx.advance(ProposalStage.NORMALIZED)
    ctx.reject(Failure(FailureKind.CONFLICT, "nope"))

    assert ctx.stage is ProposalStage.REJECTED
    assert ctx.events == ["normalized", "rejected:conflict"]
