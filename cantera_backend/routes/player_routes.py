from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import apply_update, delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.models.player_model import Player, PlayerCreate, PlayerUpdate

router = APIRouter()

NOT_FOUND = "Jugador no encontrado"


# ============================================
# Roster: list / by id / by team
# ============================================
@router.get("")
def get_players(
    player_id: Optional[int] = Query(default=None, alias="id"),
    team_id: Optional[int] = Query(default=None, alias="equipoId"),
    session: Session = Depends(get_session),
):
    if player_id is not None:
        return get_or_404(session, Player, player_id, NOT_FOUND)

    statement = select(Player)
    if team_id is not None:
        statement = statement.where(Player.team_id == team_id)
    # Jersey order first, unnumbered players last
    statement = statement.order_by(Player.jersey_number.is_(None), Player.jersey_number, Player.name)
    return session.exec(statement).all()


@router.post("")
def create_player(data: PlayerCreate, session: Session = Depends(get_session)):
    return save(session, Player.model_validate(data))


@router.put("")
def update_player(data: PlayerUpdate, session: Session = Depends(get_session)):
    player = get_or_404(session, Player, data.id, NOT_FOUND)
    return save(session, apply_update(player, data))


@router.delete("")
def delete_player(player_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    player = get_or_404(session, Player, player_id, NOT_FOUND)
    return delete(session, player)
