"""Domain records shared across services."""

from .clubs import BrazilianState, Club, ClubFilters, ClubPayload, Stadium, StadiumPayload
from .matches import Match, MatchDetails, MatchDraft, MatchFilters, MatchProposal
from .pages import Page, PageRequest

__all__ = [
    "BrazilianState",
    "Club",
    "ClubFilters",
    "ClubPayload",
    "Stadium",
    "StadiumPayload",
    "Match",
    "MatchDetails",
    "MatchDraft",
    "MatchFilters",
    "MatchProposal",
    "Page",
    "PageRequest",
]
