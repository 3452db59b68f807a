# __init__.py
# Imports all seed functions for easy batch seeding.

from .seed_season import seed_seasons
from .seed_teams import seed_teams
from .seed_players import seed_players
