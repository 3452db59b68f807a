# seed_teams.py
# Creates the default squad on an empty database.

import logging

from sqlmodel import Session, select

from cantera_backend.models.season_model import Season
from cantera_backend.models.team_model import Team

logger = logging.getLogger(__name__)

DEFAULT_TEAM_NAME = "Equipo A"


def seed_teams(session: Session, season: Season) -> Team:
    team = session.exec(select(Team).where(Team.name == DEFAULT_TEAM_NAME)).first()
    if team:
        logger.info("Team '%s' already exists. Skipping.", team.name)
        return team

    team = Team(name=DEFAULT_TEAM_NAME, season_id=season.id)
    session.add(team)
    session.commit()
    session.refresh(team)
    logger.info("Created team '%s' (id=%s)", team.name, team.id)
    return team
