# rating_model.py
# Defines Rating: a periodic evaluation of a player's sub-skills (0-5 scale).

from typing import Optional, Dict
from datetime import date
from sqlmodel import SQLModel, Field, JSON, Column
from pydantic import BaseModel, field_validator


class Rating(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    player_id: int = Field(foreign_key="player.id", index=True)
    rated_on: Optional[date] = None

    # Sub-skill scores, e.g. {"tecnica": 4, "tactica": 3, "fisico": 5}
    skills: Dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON))
    comments: Optional[str] = None


class RatingSave(BaseModel):
    """Create a rating, or update it when `id` is given."""
    id: Optional[int] = None
    player_id: int
    rated_on: Optional[date] = None
    skills: Dict[str, float] = {}
    comments: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def skills_in_range(cls, value: Dict[str, float]) -> Dict[str, float]:
        for name, score in value.items():
            if score < 0 or score > 5:
                raise ValueError(f"skill '{name}' must be between 0 and 5")
        return value
