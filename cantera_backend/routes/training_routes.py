# cantera_backend/routes/training_routes.py
# Training sessions: generated in bulk from a weekly recurrence, deleted one by one.

import logging
from datetime import datetime, time, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import delete, get_or_404
from cantera_backend.core.database import get_session
from cantera_backend.models.attendance_model import AttendanceRecord
from cantera_backend.models.team_model import Team
from cantera_backend.models.training_model import (
    TrainingSession, TrainingRecurrenceRequest, TrainingSessionRead
)
from cantera_backend.services.training import expand_sessions, parse_date_only

logger = logging.getLogger(__name__)

router = APIRouter()


def to_read(training: TrainingSession) -> TrainingSessionRead:
    return TrainingSessionRead(
        id=training.id,
        team_id=training.team_id,
        starts_at=training.starts_at,
        ends_at=training.ends_at,
    )


# ==========================================
# LIST SESSIONS OF A TEAM
# ==========================================
@router.get("", response_model=List[TrainingSessionRead])
def get_training_sessions(
    team_id: Optional[int] = Query(default=None, alias="equipoId"),
    date_from: Optional[str] = Query(default=None, alias="from"),
    date_to: Optional[str] = Query(default=None, alias="to"),
    session: Session = Depends(get_session),
):
    """
    Sessions of a team ordered by start, optionally limited to [from, to] (dates, inclusive).
    """
    if team_id is None:
        return []

    statement = select(TrainingSession).where(TrainingSession.team_id == team_id)

    start = parse_date_only(date_from)
    if start:
        statement = statement.where(TrainingSession.starts_at >= datetime.combine(start, time.min))
    end = parse_date_only(date_to)
    if end:
        statement = statement.where(
            TrainingSession.starts_at < datetime.combine(end + timedelta(days=1), time.min)
        )

    trainings = session.exec(statement.order_by(TrainingSession.starts_at)).all()
    return [to_read(training) for training in trainings]


# ==========================================
# CREATE SESSIONS FROM A RECURRENCE
# ==========================================
@router.post("", response_model=List[TrainingSessionRead])
def create_training_sessions(
    data: TrainingRecurrenceRequest,
    session: Session = Depends(get_session),
):
    """
    Expand the recurrence and store every generated session.
    Example: Mondays and Wednesdays at 18:00 between two dates.
    """
    # 1. Verify team exists
    get_or_404(session, Team, data.team_id, "Equipo no encontrado")

    # 2. Expand the recurrence
    expanded = expand_sessions(
        start_date=data.start_date,
        end_date=data.end_date or data.start_date,
        days_of_week=data.days_of_week,
        start_time=data.start_time,
        end_time=data.end_time,
        timezone_offset=data.timezone_offset,
    )
    if not expanded:
        raise HTTPException(
            status_code=400,
            detail="No se generaron entrenamientos con los datos proporcionados",
        )

    # 3. Persist
    created = [
        TrainingSession(team_id=data.team_id, starts_at=item.starts_at, ends_at=item.ends_at)
        for item in expanded
    ]
    session.add_all(created)
    session.commit()
    for training in created:
        session.refresh(training)

    logger.info("Created %d training sessions for team %s", len(created), data.team_id)
    return [to_read(training) for training in created]


# ==========================================
# DELETE ONE SESSION
# ==========================================
@router.delete("")
def delete_training_session(
    training_id: int = Query(alias="id"),
    session: Session = Depends(get_session),
):
    training = get_or_404(session, TrainingSession, training_id, "Entrenamiento no encontrado")

    # Attendance taken for this session goes with it
    for record in session.exec(
        select(AttendanceRecord).where(AttendanceRecord.session_id == training_id)
    ).all():
        session.delete(record)

    return delete(session, training)
