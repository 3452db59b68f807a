# training_model.py
# Defines TrainingSession (one generated occurrence of a training slot) and the
# recurrence descriptor used to create them in bulk.

from typing import Optional, List
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Column
from pydantic import BaseModel, Field as PydanticField


class TrainingSession(SQLModel, table=True):
    """A single training occurrence. Stored as club-local wall time."""
    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="team.id", index=True)
    starts_at: datetime = Field(sa_column=Column(DateTime(timezone=False), nullable=False))
    ends_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False), nullable=True))


# -------------------------------
# Pydantic schemas
# -------------------------------
class TrainingRecurrenceRequest(BaseModel):
    """
    Recurrence descriptor submitted by the training planner.
    daysOfWeek uses 0=Sunday..6=Saturday.
    """
    team_id: int = PydanticField(alias="equipoId")
    start_date: str = PydanticField(alias="startDate", min_length=1)
    end_date: Optional[str] = PydanticField(default=None, alias="endDate")
    days_of_week: List[int] = PydanticField(alias="daysOfWeek")
    start_time: str = PydanticField(alias="startTime", min_length=1)
    end_time: Optional[str] = PydanticField(default=None, alias="endTime")
    # Minutes to add to local time to get UTC (browser getTimezoneOffset)
    timezone_offset: Optional[int] = PydanticField(
        default=None, alias="timezoneOffset", ge=-840, le=840
    )

    class Config:
        populate_by_name = True


class TrainingSessionRead(BaseModel):
    id: int
    team_id: int = PydanticField(alias="equipoId")
    starts_at: datetime = PydanticField(alias="inicio")
    ends_at: Optional[datetime] = PydanticField(default=None, alias="fin")

    class Config:
        populate_by_name = True
        from_attributes = True
