# season_model.py
# Defines Season, the sporting year teams are registered in.

from typing import Optional
from datetime import date
from sqlmodel import SQLModel, Field


class SeasonBase(SQLModel):
    name: str = Field(min_length=1)          # e.g. "2024-2025"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = Field(default=True)


class Season(SeasonBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)


class SeasonCreate(SeasonBase):
    pass


class SeasonUpdate(SQLModel):
    id: int
    name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: Optional[bool] = None
