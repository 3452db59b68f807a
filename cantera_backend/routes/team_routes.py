# cantera_backend/routes/team_routes.py
# CRUD routes for teams

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import apply_update, delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.models.team_model import Team, TeamCreate, TeamUpdate

router = APIRouter()

NOT_FOUND = "Equipo no encontrado"


# ==========================================
# LIST TEAMS / GET ONE TEAM
# ==========================================
@router.get("")
def get_teams(
    team_id: Optional[int] = Query(default=None, alias="id"),
    season_id: Optional[int] = Query(default=None, alias="temporadaId"),
    session: Session = Depends(get_session),
):
    """
    All teams, one team with ?id=, or the teams of a season with ?temporadaId=.
    """
    if team_id is not None:
        return get_or_404(session, Team, team_id, NOT_FOUND)

    statement = select(Team).order_by(Team.id)
    if season_id is not None:
        statement = statement.where(Team.season_id == season_id)
    return session.exec(statement).all()


@router.post("")
def create_team(data: TeamCreate, session: Session = Depends(get_session)):
    return save(session, Team.model_validate(data))


@router.put("")
def update_team(data: TeamUpdate, session: Session = Depends(get_session)):
    team = get_or_404(session, Team, data.id, NOT_FOUND)
    return save(session, apply_update(team, data))


@router.delete("")
def delete_team(team_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    team = get_or_404(session, Team, team_id, NOT_FOUND)
    return delete(session, team)
