"""Club and stadium records."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BrazilianState(str, Enum):
    """The 27 Brazilian federative units."""

    AC = "AC"
    AL = "AL"
    AP = "AP"
    AM = "AM"
    BA = "BA"
    CE = "CE"
    DF = "DF"
    ES = "ES"
    GO = "GO"
    MA = "MA"
    MT = "MT"
    MS = "MS"
    MG = "MG"
    PA = "PA"
    PB = "PB"
    PR = "PR"
    PE = "PE"
    PI = "PI"
    RJ = "RJ"
    RN = "RN"
    RS = "RS"
    RO = "RO"
    RR = "RR"
    SC = "SC"
    SP = "SP"
    SE = "SE"
    TO = "TO"


class Club(BaseModel):
    """Football club as persisted by the store."""

    id: int
    name: str
    state: str = Field(..., description="Two-letter federative unit code")
    founded_on: date
    active: bool


class ClubPayload(BaseModel):
    """Client-supplied club fields. Presence is checked by the registry, not here."""

    name: Optional[str] = None
    state: Optional[str] = None
    founded_on: Optional[date] = None
    active: Optional[bool] = None


class ClubFilters(BaseModel):
    """Optional criteria for club listings."""

    name: Optional[str] = None
    state: Optional[str] = None
    active: Optional[bool] = None


class Stadium(BaseModel):
    """Stadium where matches are played."""

    id: int
    name: str


class StadiumPayload(BaseModel):
    """Client-supplied stadium fields."""

    name: Optional[str] = None
