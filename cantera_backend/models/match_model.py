# match_model.py
# Defines Match (fixtures), MatchPlayerSlot (one lineup row per player) and
# MatchEvent (goals, cards...), plus the request/response schemas used by the
# match routes.

from enum import Enum
from typing import Optional, List, Dict, Any
from datetime import datetime
from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import SQLModel, Field, JSON, Column
from pydantic import BaseModel, NaiveDatetime, field_validator

from cantera_backend.core.clock import club_now
from cantera_backend.core.match_minutes import DEFAULT_EVENT_PERIOD


class SlotRole(str, Enum):
    FIELD = "field"
    BENCH = "bench"
    UNAVAILABLE = "unavailable"


class EventType(str, Enum):
    GOAL = "gol"
    ASSIST = "asistencia"
    YELLOW = "amarilla"
    RED = "roja"
    OTHER = "otro"


class EventPeriod(str, Enum):
    FIRST = "first"
    SECOND = "second"
    EXTRA = "extra"


class Match(SQLModel, table=True):
    """
    A fixture played by one of the club's teams.
    The lineup and events live in their own tables.
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    # Own team (scoring perspective) and the two sides
    team_id: int = Field(foreign_key="team.id")
    home_team_id: Optional[int] = Field(default=None, foreign_key="team.id")
    away_team_id: Optional[int] = Field(default=None, foreign_key="team.id")

    kickoff: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))
    competition: str = Field(default="liga")          # liga, copa, playoff, amistoso
    matchday: Optional[int] = None
    opponent_notes: Optional[str] = None
    finished: bool = Field(default=False)             # Lineup edits are blocked once True

    @property
    def is_home(self) -> bool:
        return self.home_team_id == self.team_id

    @property
    def rival_id(self) -> Optional[int]:
        return self.away_team_id if self.is_home else self.home_team_id


class MatchPlayerSlot(SQLModel, table=True):
    """One row of a match lineup. A player appears at most once per match."""
    __table_args__ = (UniqueConstraint("match_id", "player_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)
    player_id: int = Field(foreign_key="player.id")

    role: SlotRole
    position: Optional[str] = None            # Only set for field players
    jersey_number: Optional[int] = None       # Snapshot taken when the lineup is saved
    minutes: int = Field(default=0, ge=0)

    # Goalkeeper stats
    clean_sheet: bool = Field(default=False)
    goals_conceded: Optional[int] = None

    sort_order: int = Field(default=0)


class MatchEvent(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    match_id: int = Field(foreign_key="match.id", index=True)

    minute: int = Field(default=0)            # Absolute match minute
    type: str
    player_id: Optional[int] = Field(default=None, foreign_key="player.id")
    team_id: Optional[int] = Field(default=None, foreign_key="team.id")
    description: Optional[str] = None

    # Optional metadata, e.g. {"period": "second", "relativeMinute": 12}
    data: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(
        default_factory=club_now, sa_column=Column(DateTime(timezone=False), nullable=False)
    )


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------
class MatchCreate(BaseModel):
    team_id: int
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    kickoff: Optional[NaiveDatetime] = None
    competition: str = "liga"
    matchday: Optional[int] = None
    opponent_notes: Optional[str] = None


class MatchUpdate(BaseModel):
    id: int
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    kickoff: Optional[NaiveDatetime] = None
    competition: Optional[str] = None
    matchday: Optional[int] = None
    opponent_notes: Optional[str] = None
    finished: Optional[bool] = None


class LineupRequest(BaseModel):
    """
    Whole-lineup replacement submitted from the lineup editor.
    `assignments` holds raw "POSITION:playerId" pairs picked on the pitch view.
    """
    match_id: int
    formation: Optional[str] = None
    starters: List[int] = []
    bench: List[int] = []
    unavailable: List[int] = []
    assignments: List[str] = []


class SlotMinutes(BaseModel):
    player_id: int
    minutes: int = 0
    clean_sheet: Optional[bool] = None
    goals_conceded: Optional[int] = None

    @field_validator("minutes")
    @classmethod
    def minutes_not_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("minutes must be >= 0")
        return value


class MinutesRequest(BaseModel):
    match_id: int
    slots: List[SlotMinutes]


class MatchEventCreate(BaseModel):
    match_id: int
    type: EventType
    period: EventPeriod = EventPeriod(DEFAULT_EVENT_PERIOD)
    relative_minute: int = 0
    player_id: Optional[int] = None
    team_id: Optional[int] = None
    description: Optional[str] = None


class MatchEventUpdate(BaseModel):
    id: int
    type: Optional[EventType] = None
    period: Optional[EventPeriod] = None
    relative_minute: Optional[int] = None
    player_id: Optional[int] = None
    team_id: Optional[int] = None
    description: Optional[str] = None


# -------------------------------
# Pydantic schemas for API responses
# -------------------------------
class PlayerSlotRead(BaseModel):
    player_id: int
    role: SlotRole
    position: Optional[str]
    jersey_number: Optional[int]
    minutes: int
    clean_sheet: bool
    goals_conceded: Optional[int]

    class Config:
        from_attributes = True


class MatchEventRead(BaseModel):
    id: int
    match_id: int
    type: str
    minute: int
    period: EventPeriod
    relative_minute: int
    minute_label: str
    player_id: Optional[int]
    team_id: Optional[int]
    description: Optional[str]
    data: Optional[Dict[str, Any]]


class MatchRead(BaseModel):
    id: int
    team_id: int
    home_team_id: Optional[int]
    away_team_id: Optional[int]
    is_home: bool
    kickoff: Optional[datetime]
    competition: str
    matchday: Optional[int]
    opponent_notes: Optional[str]
    finished: bool
    formation: str
    goals_for: int
    goals_against: int
    lineup: List[PlayerSlotRead]
    events: List[MatchEventRead]
