# cantera_backend/models/player_model.py
from typing import Optional, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from pydantic import field_validator

if TYPE_CHECKING:
    from .team_model import Team


class PlayerBase(SQLModel):
    name: str = Field(min_length=1)
    position: Optional[str] = None           # Preferred position ("GK", "LB", "Portero"...)
    jersey_number: Optional[int] = Field(default=None, ge=0, le=99)
    team_id: Optional[int] = Field(default=None, foreign_key="team.id")


class Player(PlayerBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    team: Optional["Team"] = Relationship(back_populates="players")


# -------------------------------
# Schemas for API requests
# -------------------------------
class PlayerCreate(PlayerBase):
    pass


class PlayerUpdate(SQLModel):
    id: int
    name: Optional[str] = Field(default=None, min_length=1)
    position: Optional[str] = None
    jersey_number: Optional[int] = Field(default=None, ge=0, le=99)
    team_id: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        if value is None:
            raise ValueError("name cannot be null")
        return value
