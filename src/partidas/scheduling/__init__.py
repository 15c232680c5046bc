"""Match scheduling: validation rules, the write engine and the query service."""

from partidas.scheduling.engine import MatchEngine, ProposalStage, SchedulingContext, describe_match
from partidas.scheduling.ports import (
    ClubReader,
    MatchReader,
    MatchWriter,
    SchedulingStore,
    StadiumReader,
)
from partidas.scheduling.queries import MatchQueryService, MatchQueryStore

__all__ = [
    "ClubReader",
    "MatchEngine",
    "MatchQueryService",
    "MatchQueryStore",
    "MatchReader",
    "MatchWriter",
    "ProposalStage",
    "SchedulingContext",
    "SchedulingStore",
    "StadiumReader",
    "describe_match",
]
