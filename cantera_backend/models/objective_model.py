# objective_model.py
# Defines Objective: a season goal for a team with a 0-100 progress value.

from typing import Optional
from datetime import date
from sqlmodel import SQLModel, Field


class ObjectiveBase(SQLModel):
    team_id: int = Field(foreign_key="team.id", index=True)
    title: str = Field(min_length=1)
    description: Optional[str] = None
    progress: int = Field(default=0, ge=0, le=100)   # 100 = achieved
    due_date: Optional[date] = None


class Objective(ObjectiveBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class ObjectiveCreate(ObjectiveBase):
    pass


class ObjectiveUpdate(SQLModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    due_date: Optional[date] = None
