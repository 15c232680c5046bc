"""Club and stadium registry."""

from partidas.registry.clubs import ClubService, validate_club_payload
from partidas.registry.ports import ClubStore, StadiumStore
from partidas.registry.stadiums import StadiumService, validate_stadium_name

__all__ = [
    "ClubService",
    "ClubStore",
    "StadiumService",
    "StadiumStore",
    "validate_club_payload",
    "validate_stadium_name",
]
