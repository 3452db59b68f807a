# scouting_model.py
# Defines ScoutingReport: notes about players from other clubs.

from typing import Optional, Dict, Any
from datetime import date
from sqlmodel import SQLModel, Field, JSON, Column
from pydantic import field_validator


class ScoutingReportBase(SQLModel):
    player_name: str = Field(min_length=1)
    club: Optional[str] = None
    position: Optional[str] = None
    birth_year: Optional[int] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None
    report_date: Optional[date] = None


class ScoutingReport(ScoutingReportBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    # Free-form fields captured by the scouting form
    extra: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))


class ScoutingReportCreate(ScoutingReportBase):
    extra: Dict[str, Any] = {}


class ScoutingReportUpdate(SQLModel):
    id: int
    player_name: Optional[str] = Field(default=None, min_length=1)
    club: Optional[str] = None
    position: Optional[str] = None
    birth_year: Optional[int] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None
    report_date: Optional[date] = None
    extra: Optional[Dict[str, Any]] = None

    @field_validator("player_name")
    @classmethod
    def player_name_not_null(cls, value):
        if value is None:
            raise ValueError("player_name cannot be null")
        return value
