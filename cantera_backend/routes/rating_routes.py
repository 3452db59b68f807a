# cantera_backend/routes/rating_routes.py
# Player ratings (quarterly skill evaluations)

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.models.player_model import Player
from cantera_backend.models.rating_model import Rating, RatingSave
from cantera_backend.services.stats import rating_average

router = APIRouter()

NOT_FOUND = "Valoración no encontrada"


@router.get("")
def get_ratings(
    rating_id: Optional[int] = Query(default=None, alias="id"),
    player_id: Optional[int] = Query(default=None, alias="jugadorId"),
    session: Session = Depends(get_session),
):
    if rating_id is not None:
        return get_or_404(session, Rating, rating_id, NOT_FOUND)

    statement = select(Rating).order_by(Rating.rated_on.desc(), Rating.id.desc())
    if player_id is not None:
        statement = statement.where(Rating.player_id == player_id)
    return session.exec(statement).all()


@router.get("/average")
def get_rating_average(
    player_id: Optional[int] = Query(default=None, alias="jugadorId"),
    session: Session = Depends(get_session),
):
    """Average rating (one decimal) of a player, or of every rating."""
    statement = select(Rating)
    if player_id is not None:
        statement = statement.where(Rating.player_id == player_id)
    return {"player_id": player_id, "average": rating_average(session.exec(statement).all())}


@router.post("")
def save_rating(data: RatingSave, session: Session = Depends(get_session)):
    """
    Creates a rating, or updates the existing one when the body carries an id.
    """
    get_or_404(session, Player, data.player_id, "Jugador no encontrado")

    if data.id is not None:
        rating = get_or_404(session, Rating, data.id, NOT_FOUND)
    else:
        rating = Rating(player_id=data.player_id)

    rating.player_id = data.player_id
    rating.rated_on = data.rated_on
    rating.skills = dict(data.skills)
    rating.comments = data.comments
    return save(session, rating)


@router.delete("")
def delete_rating(rating_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    rating = get_or_404(session, Rating, rating_id, NOT_FOUND)
    return delete(session, rating)
