from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import apply_update, delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.models.objective_model import Objective, ObjectiveCreate, ObjectiveUpdate

router = APIRouter()

NOT_FOUND = "Objetivo no encontrado"


@router.get("")
def get_objectives(
    objective_id: Optional[int] = Query(default=None, alias="id"),
    team_id: Optional[int] = Query(default=None, alias="equipoId"),
    session: Session = Depends(get_session),
):
    if objective_id is not None:
        return get_or_404(session, Objective, objective_id, NOT_FOUND)

    statement = select(Objective).order_by(Objective.id)
    if team_id is not None:
        statement = statement.where(Objective.team_id == team_id)
    return session.exec(statement).all()


@router.post("")
def create_objective(data: ObjectiveCreate, session: Session = Depends(get_session)):
    return save(session, Objective.model_validate(data))


@router.put("")
def update_objective(data: ObjectiveUpdate, session: Session = Depends(get_session)):
    objective = get_or_404(session, Objective, data.id, NOT_FOUND)
    return save(session, apply_update(objective, data))


@router.delete("")
def delete_objective(objective_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    objective = get_or_404(session, Objective, objective_id, NOT_FOUND)
    return delete(session, objective)
