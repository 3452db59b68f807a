# seed_players.py
# Default squad for the seeded team, numbered in list order.

import logging

from sqlmodel import Session, select

from cantera_backend.models.player_model import Player
from cantera_backend.models.team_model import Team

logger = logging.getLogger(__name__)

DEFAULT_SQUAD = [
    ("Tiziano Oleiro Calamita", "Portero"),
    ("Carlos Alfaro Mateo", "Portero"),
    ("Diego Clavería Barrabés", "Defensa"),
    ("Felipe Tapia Ruiz", "Defensa"),
    ("Héctor Primo Miranda", "Defensa"),
    ("Santiago Alexander Beltrán Hernández", "Defensa"),
    ("Ricardo Romeo", "Defensa"),
    ("Gabriel Lahuerta Muñoz", "Defensa"),
    ("Lucas Domingo", "Centrocampista"),
    ("Jorge Pinto", "Centrocampista"),
    ("Pablo Moñux Abad", "Centrocampista"),
    ("César Lázaro Esperón", "Centrocampista"),
    ("Diego Bueno Ucedo", "Centrocampista"),
    ("Manuel Lozano Pascual", "Centrocampista"),
    ("Julio Povar Berdejo", "Centrocampista"),
    ("Pedro Colás do Carmo", "Delantero"),
    ("Roberto Oriol Lahuerta", "Delantero"),
    ("Francisco Javier Frago López-Dupla", "Delantero"),
    ("Diego Lorca Ferrer", "Delantero"),
    ("Mateo Almau Vallés", "Delantero"),
    ("Alejandro Puente Mauleón", "Delantero"),
    ("David Albert Fañanás", "Delantero"),
]


def seed_players(session: Session, team: Team) -> int:
    """Adds the default squad to a team that has no players. Returns players created."""
    if session.exec(select(Player).where(Player.team_id == team.id)).first():
        logger.info("Team '%s' already has players. Skipping.", team.name)
        return 0

    players = [
        Player(name=name, position=position, jersey_number=number, team_id=team.id)
        for number, (name, position) in enumerate(DEFAULT_SQUAD, start=1)
    ]
    session.add_all(players)
    session.commit()
    logger.info("Created %d players for '%s'", len(players), team.name)
    return len(players)
