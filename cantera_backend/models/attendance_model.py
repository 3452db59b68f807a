# attendance_model.py
# Defines AttendanceRecord. Records are keyed by team + training session or
# team + calendar date, and a save replaces the whole set for that key.

from typing import Optional, List
from datetime import date
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, Field as PydanticField, model_validator


class AttendanceRecord(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    team_id: int = Field(foreign_key="team.id", index=True)
    player_id: int = Field(foreign_key="player.id")

    session_id: Optional[int] = Field(default=None, foreign_key="trainingsession.id")
    session_date: Optional[date] = None

    attended: bool = Field(default=False)
    reason: Optional[str] = None             # Why the player missed the session


# -------------------------------
# Pydantic schemas
# -------------------------------
class AttendanceEntry(BaseModel):
    player_id: int = PydanticField(alias="jugadorId")
    attended: bool = PydanticField(alias="asistio")
    reason: Optional[str] = PydanticField(default=None, alias="motivo")

    class Config:
        populate_by_name = True


class AttendanceSaveRequest(BaseModel):
    team_id: int = PydanticField(alias="equipoId")
    session_date: Optional[date] = PydanticField(default=None, alias="fecha")
    session_id: Optional[int] = PydanticField(default=None, alias="entrenamientoId")
    records: List[AttendanceEntry] = PydanticField(alias="registros")

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def needs_session_or_date(self):
        if self.session_id is None and self.session_date is None:
            raise ValueError("fecha or entrenamientoId is required")
        return self


class AttendanceRecordRead(BaseModel):
    id: int
    team_id: int = PydanticField(alias="equipoId")
    player_id: int = PydanticField(alias="jugadorId")
    session_id: Optional[int] = PydanticField(default=None, alias="entrenamientoId")
    session_date: Optional[date] = PydanticField(default=None, alias="fecha")
    attended: bool = PydanticField(alias="asistio")
    reason: Optional[str] = PydanticField(default=None, alias="motivo")

    class Config:
        populate_by_name = True
        from_attributes = True
