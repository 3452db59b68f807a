# seed_season.py
# Creates the current sporting season if no season exists yet.

import logging
from datetime import date
from typing import Optional

from sqlmodel import Session, select

from cantera_backend.core.clock import club_today
from cantera_backend.models.season_model import Season

logger = logging.getLogger(__name__)


def current_season_bounds(today: Optional[date] = None):
    """Seasons run from 1 July to 30 June."""
    today = today or club_today()
    first_year = today.year if today.month >= 7 else today.year - 1
    return f"{first_year}-{first_year + 1}", date(first_year, 7, 1), date(first_year + 1, 6, 30)


def seed_seasons(session: Session) -> Season:
    existing = session.exec(select(Season).order_by(Season.id)).first()
    if existing:
        logger.info("Season %s already exists. Skipping.", existing.name)
        return existing

    name, start, end = current_season_bounds()
    season = Season(name=name, start_date=start, end_date=end, is_active=True)
    session.add(season)
    session.commit()
    session.refresh(season)
    logger.info("Created season %s", season.name)
    return season
