# cantera_backend/routes/dashboard_routes.py
# Home screen figures for the team the caller is working with.

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session, select

from cantera_backend.core.context import RequestContext, get_request_context
from cantera_backend.core.crud import get_or_404
from cantera_backend.core.database import get_session
from cantera_backend.models.attendance_model import AttendanceRecord
from cantera_backend.models.objective_model import Objective
from cantera_backend.models.player_model import Player
from cantera_backend.models.rating_model import Rating
from cantera_backend.models.team_model import Team
from cantera_backend.services.match import load_team_sheets
from cantera_backend.services.stats import (
    PlayerMatchStats, aggregate_player_stats, analyze_player_streaks, analyze_team_form,
    attendance_percentage, build_opponent_breakdown, build_player_match_summaries,
    build_player_opponent_breakdown, collect_player_recent_form, objective_completion,
    rating_average, summarize_team_matches,
)

router = APIRouter()


def _context_team(context: RequestContext, session: Session) -> Team:
    if context.team_id is None:
        raise HTTPException(status_code=404, detail="Equipo no encontrado")
    team = session.get(Team, context.team_id)
    if not team:
        raise HTTPException(status_code=404, detail="Equipo no encontrado")
    return team


# ==========================================
# TEAM SUMMARY
# ==========================================
@router.get("")
def get_dashboard(
    context: RequestContext = Depends(get_request_context),
    session: Session = Depends(get_session),
):
    """
    Player count, attendance %, average rating, objectives completed, season
    results, form and results by rival of the context team (X-Equipo-Id, the user's team, or the
    primary team).
    """
    # 1. Resolve team
    team = _context_team(context, session)

    # 2. Load everything the aggregators need
    players = session.exec(select(Player).where(Player.team_id == team.id)).all()
    player_ids = [player.id for player in players]
    attendance = session.exec(
        select(AttendanceRecord).where(AttendanceRecord.team_id == team.id)
    ).all()
    ratings = []
    if player_ids:
        ratings = session.exec(select(Rating).where(Rating.player_id.in_(player_ids))).all()
    objectives = session.exec(select(Objective).where(Objective.team_id == team.id)).all()
    sheets = load_team_sheets(session, team.id, finished_only=True)

    # 3. Aggregate
    return {
        "team_id": team.id,
        "team_name": team.name,
        "players": len(players),
        "attendance_percentage": attendance_percentage(attendance),
        "rating_average": rating_average(ratings),
        "objectives": len(objectives),
        "objective_completion": objective_completion(objectives),
        "matches": summarize_team_matches(sheets),
        "form": analyze_team_form(sheets),
        "opponents": [entry.to_dict() for entry in build_opponent_breakdown(sheets).values()],
    }


# ==========================================
# PER-PLAYER SEASON STATS
# ==========================================
@router.get("/players")
def get_player_dashboard(
    recent: Optional[int] = Query(default=None, alias="ultimos", ge=1),
    context: RequestContext = Depends(get_request_context),
    session: Session = Depends(get_session),
):
    """Season stats per player, or stats over the last `ultimos` matches."""
    team = _context_team(context, session)
    players = session.exec(
        select(Player).where(Player.team_id == team.id).order_by(Player.jersey_number, Player.id)
    ).all()
    sheets = load_team_sheets(session, team.id, finished_only=True)
    if recent is None:
        stats = aggregate_player_stats(sheets)
    else:
        stats = collect_player_recent_form(sheets, recent)
    counted = min(len(sheets), recent) if recent is not None else len(sheets)

    rows = []
    for player in players:
        entry = stats.get(player.id) or PlayerMatchStats(matches=counted)
        rows.append({
            "player_id": player.id,
            "name": player.name,
            "position": player.position,
            "jersey_number": player.jersey_number,
            **entry.to_dict(),
        })
    return rows


# ==========================================
# PLAYER MATCH HISTORY
# ==========================================
@router.get("/player")
def get_player_history(
    player_id: int = Query(alias="jugadorId"),
    session: Session = Depends(get_session),
):
    """
    Finished matches of the player's team the player took part in, most
    recent first, with their streaks and results by rival.
    """
    player = get_or_404(session, Player, player_id, "Jugador no encontrado")
    sheets = []
    if player.team_id is not None:
        sheets = load_team_sheets(session, player.team_id, finished_only=True)

    summaries = build_player_match_summaries(sheets, player.id)
    return {
        "player_id": player.id,
        "name": player.name,
        "matches": [summary.to_dict() for summary in summaries],
        "streaks": analyze_player_streaks(summaries),
        "opponents": [
            entry.to_dict() for entry in build_player_opponent_breakdown(summaries).values()
        ],
    }
