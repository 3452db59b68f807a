from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, select

from cantera_backend.core.crud import apply_update, delete, get_or_404, save
from cantera_backend.core.database import get_session
from cantera_backend.models.season_model import Season, SeasonCreate, SeasonUpdate

router = APIRouter()

NOT_FOUND = "Temporada no encontrada"


@router.get("")
def get_seasons(
    season_id: Optional[int] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
):
    if season_id is not None:
        return get_or_404(session, Season, season_id, NOT_FOUND)
    # Most recent season first
    return session.exec(select(Season).order_by(Season.start_date.desc(), Season.id.desc())).all()


@router.post("", status_code=201)
def create_season(data: SeasonCreate, session: Session = Depends(get_session)):
    return save(session, Season.model_validate(data))


@router.put("")
def update_season(data: SeasonUpdate, session: Session = Depends(get_session)):
    season = get_or_404(session, Season, data.id, NOT_FOUND)
    return save(session, apply_update(season, data))


@router.delete("")
def delete_season(season_id: int = Query(alias="id"), session: Session = Depends(get_session)):
    season = get_or_404(session, Season, season_id, NOT_FOUND)
    return delete(session, season)
