# seed_all.py
# Orchestrates the seed scripts in the correct order, with step logging.

import logging

from cantera_backend.core.database import get_sync_session
from cantera_backend.seed.seed_players import seed_players
from cantera_backend.seed.seed_season import seed_seasons
from cantera_backend.seed.seed_teams import seed_teams

logger = logging.getLogger(__name__)


def seed_all(bind=None):
    logger.info("Starting database seeding...")

    with get_sync_session(bind) as session:
        logger.info("Step 1: Seeding season...")
        season = seed_seasons(session)

        logger.info("Step 2: Seeding teams...")
        team = seed_teams(session, season)

        logger.info("Step 3: Seeding players...")
        seed_players(session, team)

    logger.info("Database seeding complete.")


if __name__ == "__main__":
    from cantera_backend.core.database import init_db

    logging.basicConfig(level=logging.INFO)
    init_db()
    seed_all()
