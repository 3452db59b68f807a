# team_model.py
# Defines the Team model (the club's own squads and the opponents they face).

from typing import Optional, List, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from pydantic import field_validator

if TYPE_CHECKING:
    from .player_model import Player


class TeamBase(SQLModel):
    name: str = Field(min_length=1)
    category: Optional[str] = None           # e.g. "Cadete B", "Infantil A"
    color: Optional[str] = None              # Kit colour used by the UI (hex)
    season_id: Optional[int] = Field(default=None, foreign_key="season.id")


class Team(TeamBase, table=True):
    """
    A squad managed by the club for a season.
    Opponents are stored as teams too so matches can reference both sides.
    """
    id: Optional[int] = Field(default=None, primary_key=True)

    players: List["Player"] = Relationship(back_populates="team")


class TeamCreate(TeamBase):
    pass


class TeamUpdate(SQLModel):
    id: int
    name: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    color: Optional[str] = None
    season_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("name cannot be null")
        return value
