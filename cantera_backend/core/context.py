# cantera_backend/core/context.py
# Per-request context (who is calling, which team they work with).
# Built from request headers for every call; nothing is kept between requests.

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header
from sqlmodel import Session, select

from cantera_backend.core.config import PRIMARY_TEAM_ID
from cantera_backend.core.database import get_session
from cantera_backend.models.team_model import Team
from cantera_backend.models.user_model import User


@dataclass
class RequestContext:
    user: Optional[User] = None
    team_id: Optional[int] = None


def resolve_primary_team(session: Session) -> Optional[Team]:
    """The configured primary team, or the first team when it doesn't exist."""
    team = session.get(Team, PRIMARY_TEAM_ID)
    if team:
        return team
    return session.exec(select(Team).order_by(Team.id)).first()


def get_request_context(
    x_usuario: Optional[str] = Header(default=None),
    x_equipo_id: Optional[int] = Header(default=None),
    session: Session = Depends(get_session),
) -> RequestContext:
    """
    Resolve the caller from the X-Usuario header (username lookup) and the
    team from X-Equipo-Id, the user's own team, or the primary team.
    """
    user = None
    if x_usuario:
        user = session.exec(select(User).where(User.username == x_usuario.strip())).first()

    team_id = x_equipo_id
    if team_id is None and user is not None:
        team_id = user.team_id
    if team_id is None:
        primary = resolve_primary_team(session)
        team_id = primary.id if primary else None

    return RequestContext(user=user, team_id=team_id)
