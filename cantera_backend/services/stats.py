# cantera_backend/services/stats.py
# Dashboard aggregators and season statistics built from lineups and events.
# Everything here works on in-memory collections; routes do the loading.

import math
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from cantera_backend.models.match_model import EventType, SlotRole

WIN, DRAW, LOSS = "win", "draw", "loss"

RESULT_LABELS = {WIN: "Victoria", DRAW: "Empate", LOSS: "Derrota"}

RESULT_POINTS = {WIN: 3, DRAW: 1, LOSS: 0}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ==========================================
# DASHBOARD AGGREGATORS
# ==========================================

def attendance_percentage(records: Sequence) -> int:
    """Share of records marked as attended, 0-100. No records -> 0."""
    if not records:
        return 0
    attended = sum(1 for record in records if record.attended)
    return round_half_up(attended / len(records) * 100)


def _numeric_skills(skills: Mapping) -> List[float]:
    return [
        value for value in (skills or {}).values()
        if isinstance(value, (int, float)) and not isinstance(value, bool)
    ]


def rating_average(ratings: Iterable) -> str:
    """
    Mean of the per-rating skill averages, formatted with one decimal.
    Ratings whose skills are all zero count as "not rated yet" and are skipped.
    """
    per_rating = []
    for rating in ratings:
        values = _numeric_skills(rating.skills)
        if not values or not any(values):
            continue
        per_rating.append(sum(values) / len(values))

    if not per_rating:
        return "0"
    return f"{sum(per_rating) / len(per_rating):.1f}"


def objective_completion(objectives: Sequence) -> int:
    """Share of objectives with progress >= 100, 0-100."""
    if not objectives:
        return 0
    completed = sum(1 for objective in objectives if objective.progress >= 100)
    return round_half_up(completed / len(objectives) * 100)


# ==========================================
# MATCH STATISTICS
# ==========================================

@dataclass
class MatchSheet:
    """A match with its stored lineup and events."""
    match: object
    lineup: List = field(default_factory=list)
    events: List = field(default_factory=list)


@dataclass
class PlayerMatchStats:
    matches: int = 0
    call_ups: int = 0
    played: int = 0
    starts: int = 0
    minutes: int = 0
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    clean_sheets: int = 0
    goals_conceded: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goal_involvements: int = 0
    participation_rate: float = 0
    availability_rate: float = 0
    goal_involvements_per_90: float = 0

    def credit(self, result: str):
        if result == WIN:
            self.wins += 1
        elif result == DRAW:
            self.draws += 1
        else:
            self.losses += 1

    def to_dict(self) -> Dict:
        return asdict(self)


def match_score(sheet: MatchSheet) -> Dict[str, int]:
    """Goals for/against from the point of view of the match's own team."""
    match = sheet.match
    goals_for = goals_against = 0
    for event in sheet.events:
        if event.type != EventType.GOAL.value:
            continue
        if event.team_id == match.team_id:
            goals_for += 1
        elif event.team_id is not None and event.team_id == match.rival_id:
            goals_against += 1
    return {"goals_for": goals_for, "goals_against": goals_against}


def resolve_result(goals_for: int, goals_against: int) -> str:
    if goals_for > goals_against:
        return WIN
    if goals_for < goals_against:
        return LOSS
    return DRAW


def aggregate_player_stats(sheets: Sequence[MatchSheet]) -> Dict[int, PlayerMatchStats]:
    """
    Season stats per player. A player "played" when they started or logged
    minutes; players who only appear in events are counted as played too.
    """
    total = len(sheets)
    stats: Dict[int, PlayerMatchStats] = {}

    def ensure(player_id: int) -> PlayerMatchStats:
        if player_id not in stats:
            stats[player_id] = PlayerMatchStats(matches=total)
        return stats[player_id]

    for sheet in sheets:
        score = match_score(sheet)
        result = resolve_result(score["goals_for"], score["goals_against"])
        called_up, played_ids = set(), set()

        # 1. Lineup: call-ups, minutes, starts, goalkeeper numbers
        for slot in sheet.lineup:
            entry = ensure(slot.player_id)
            if slot.role != SlotRole.UNAVAILABLE and slot.player_id not in called_up:
                entry.call_ups += 1
                called_up.add(slot.player_id)

            minutes = max(0, slot.minutes or 0)
            started = slot.role == SlotRole.FIELD
            entry.minutes += minutes

            if (minutes > 0 or started) and slot.player_id not in played_ids:
                entry.played += 1
                if started:
                    entry.starts += 1
                if slot.clean_sheet:
                    entry.clean_sheets += 1
                entry.goals_conceded += slot.goals_conceded or 0
                entry.credit(result)
                played_ids.add(slot.player_id)

        # 2. Events of the own team
        participants = set()
        for event in sheet.events:
            if event.team_id != sheet.match.team_id or not event.player_id:
                continue
            entry = ensure(event.player_id)
            participants.add(event.player_id)
            if event.type == EventType.GOAL.value:
                entry.goals += 1
            elif event.type == EventType.ASSIST.value:
                entry.assists += 1
            elif event.type == EventType.YELLOW.value:
                entry.yellow_cards += 1
            elif event.type == EventType.RED.value:
                entry.red_cards += 1

        # 3. Event participants missing from the lineup still played
        for player_id in participants:
            entry = ensure(player_id)
            if player_id not in called_up:
                entry.call_ups += 1
                called_up.add(player_id)
            if player_id not in played_ids:
                entry.played += 1
                entry.credit(result)
                played_ids.add(player_id)

    for entry in stats.values():
        entry.goal_involvements = entry.goals + entry.assists
        entry.participation_rate = round(entry.played / total, 4) if total else 0
        entry.availability_rate = round(entry.call_ups / total, 4) if total else 0
        if entry.minutes > 0:
            entry.goal_involvements_per_90 = round(entry.goal_involvements / entry.minutes * 90, 4)
        elif entry.played > 0:
            entry.goal_involvements_per_90 = round(entry.goal_involvements / entry.played, 4)

    return stats


def _empty_breakdown() -> Dict[str, int]:
    return {"matches": 0, "wins": 0, "draws": 0, "losses": 0, "goals_for": 0, "goals_against": 0}


def _add_to_breakdown(breakdown: Dict[str, int], result: str, score: Dict[str, int]):
    breakdown["matches"] += 1
    breakdown["goals_for"] += score["goals_for"]
    breakdown["goals_against"] += score["goals_against"]
    breakdown[{WIN: "wins", DRAW: "draws", LOSS: "losses"}[result]] += 1


def summarize_team_matches(sheets: Sequence[MatchSheet]) -> Dict:
    """Season summary for a team: results, goals, cards, home/away and competition splits."""
    total = len(sheets)
    overall = _empty_breakdown()
    home, away = _empty_breakdown(), _empty_breakdown()
    competitions: Dict[str, Dict[str, int]] = {}
    clean_sheets = yellow_cards = red_cards = 0

    for sheet in sheets:
        score = match_score(sheet)
        result = resolve_result(score["goals_for"], score["goals_against"])

        _add_to_breakdown(overall, result, score)
        _add_to_breakdown(home if sheet.match.is_home else away, result, score)
        competition = competitions.setdefault(sheet.match.competition, _empty_breakdown())
        _add_to_breakdown(competition, result, score)

        if score["goals_against"] == 0:
            clean_sheets += 1

        for event in sheet.events:
            if event.team_id != sheet.match.team_id:
                continue
            if event.type == EventType.YELLOW.value:
                yellow_cards += 1
            elif event.type == EventType.RED.value:
                red_cards += 1

    return {
        **overall,
        "goal_difference": overall["goals_for"] - overall["goals_against"],
        "clean_sheets": clean_sheets,
        "average_goals_for": overall["goals_for"] / total if total else 0,
        "average_goals_against": overall["goals_against"] / total if total else 0,
        "points": overall["wins"] * 3 + overall["draws"],
        "yellow_cards": yellow_cards,
        "red_cards": red_cards,
        "home": home,
        "away": away,
        "competitions": competitions,
    }


# ==========================================
# OPPONENTS AND FORM
# ==========================================

def _kickoff_key(sheet: MatchSheet) -> datetime:
    # Matches without a kickoff sort before every dated match
    return sheet.match.kickoff or datetime.min


def most_recent_first(sheets: Sequence[MatchSheet]) -> List[MatchSheet]:
    return sorted(sheets, key=_kickoff_key, reverse=True)


def _leading_run(flags: Sequence[bool]) -> int:
    run = 0
    for flag in flags:
        if not flag:
            break
        run += 1
    return run


def _longest_run(flags: Sequence[bool]) -> int:
    longest = running = 0
    for flag in flags:
        running = running + 1 if flag else 0
        longest = max(longest, running)
    return longest


@dataclass
class OpponentBreakdown:
    opponent_id: Optional[int]
    matches: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
    points_per_match: float = 0
    clean_sheets: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


def build_opponent_breakdown(sheets: Sequence[MatchSheet]) -> Dict[Optional[int], OpponentBreakdown]:
    """Results of the team grouped by rival, in the order rivals first appear."""
    breakdown: Dict[Optional[int], OpponentBreakdown] = {}

    for sheet in sheets:
        score = match_score(sheet)
        result = resolve_result(score["goals_for"], score["goals_against"])
        rival_id = sheet.match.rival_id
        entry = breakdown.setdefault(rival_id, OpponentBreakdown(opponent_id=rival_id))

        entry.matches += 1
        entry.goals_for += score["goals_for"]
        entry.goals_against += score["goals_against"]
        if score["goals_against"] == 0:
            entry.clean_sheets += 1
        if result == WIN:
            entry.wins += 1
        elif result == DRAW:
            entry.draws += 1
        else:
            entry.losses += 1
        entry.points += RESULT_POINTS[result]

        entry.goal_difference = entry.goals_for - entry.goals_against
        entry.points_per_match = round(entry.points / entry.matches, 2)

    return breakdown


def analyze_team_form(sheets: Sequence[MatchSheet]) -> Dict:
    """
    Current and longest win / unbeaten / scoring streaks plus a summary of the
    five most recent matches. Streaks follow kickoff order.
    """
    chronological = sorted(sheets, key=_kickoff_key)
    scores = [match_score(sheet) for sheet in chronological]
    results = [resolve_result(s["goals_for"], s["goals_against"]) for s in scores]

    wins = [result == WIN for result in results]
    unbeaten = [result != LOSS for result in results]
    scoring = [s["goals_for"] > 0 for s in scores]

    last_five = {"matches": 0, "points": 0, "goals_for": 0, "goals_against": 0, "clean_sheets": 0}
    for score, result in list(zip(scores, results))[::-1][:5]:
        last_five["matches"] += 1
        last_five["points"] += RESULT_POINTS[result]
        last_five["goals_for"] += score["goals_for"]
        last_five["goals_against"] += score["goals_against"]
        if score["goals_against"] == 0:
            last_five["clean_sheets"] += 1

    return {
        "matches": len(sheets),
        "current_win_streak": _leading_run(wins[::-1]),
        "current_unbeaten_streak": _leading_run(unbeaten[::-1]),
        "current_scoring_streak": _leading_run(scoring[::-1]),
        "longest_win_streak": _longest_run(wins),
        "longest_unbeaten_streak": _longest_run(unbeaten),
        "longest_scoring_streak": _longest_run(scoring),
        "last_five": last_five,
    }


def collect_player_recent_form(sheets: Sequence[MatchSheet], limit: int) -> Dict[int, PlayerMatchStats]:
    """Player stats over the `limit` most recent matches."""
    if limit <= 0:
        return {}
    return aggregate_player_stats(most_recent_first(sheets)[:limit])


# ==========================================
# PER-PLAYER MATCH HISTORY
# ==========================================

@dataclass
class PlayerMatchSummary:
    match_id: int
    kickoff: Optional[datetime]
    opponent_id: Optional[int]
    competition: str
    is_home: bool
    minutes: int
    goals: int
    assists: int
    yellow_cards: int
    red_cards: int
    result: str
    goals_for: int
    goals_against: int
    started: bool
    played: bool

    @property
    def goal_involvements(self) -> int:
        return self.goals + self.assists

    def to_dict(self) -> Dict:
        return {**asdict(self), "result_label": RESULT_LABELS[self.result]}


def build_player_match_summaries(sheets: Sequence[MatchSheet], player_id: int) -> List[PlayerMatchSummary]:
    """
    One row per match the player was involved in (a lineup slot or an event
    for the own team), most recent first.
    """
    summaries = []

    for sheet in most_recent_first(sheets):
        match = sheet.match
        slot = next((entry for entry in sheet.lineup if entry.player_id == player_id), None)
        own_events = [
            event for event in sheet.events
            if event.player_id == player_id and event.team_id == match.team_id
        ]
        if slot is None and not own_events:
            continue

        def count(event_type: EventType) -> int:
            return sum(1 for event in own_events if event.type == event_type.value)

        score = match_score(sheet)
        minutes = max(0, slot.minutes or 0) if slot is not None else 0
        started = slot is not None and slot.role == SlotRole.FIELD
        played = (minutes > 0 or started) if slot is not None else bool(own_events)

        summaries.append(PlayerMatchSummary(
            match_id=match.id,
            kickoff=match.kickoff,
            opponent_id=match.rival_id,
            competition=match.competition,
            is_home=match.is_home,
            minutes=minutes,
            goals=count(EventType.GOAL),
            assists=count(EventType.ASSIST),
            yellow_cards=count(EventType.YELLOW),
            red_cards=count(EventType.RED),
            result=resolve_result(score["goals_for"], score["goals_against"]),
            goals_for=score["goals_for"],
            goals_against=score["goals_against"],
            started=started,
            played=played,
        ))

    return summaries


def analyze_player_streaks(summaries: Sequence[PlayerMatchSummary]) -> Dict:
    """Streaks for a player. `summaries` must be most recent first."""
    played = [summary.played for summary in summaries]
    started = [summary.started for summary in summaries]
    involved = [summary.goal_involvements > 0 for summary in summaries]

    since_involvement = last_involvement = None
    for index, summary in enumerate(summaries):
        if summary.goal_involvements > 0:
            since_involvement, last_involvement = index, summary
            break

    played_summaries = [summary for summary in summaries if summary.played]
    wins_when_played = sum(1 for summary in played_summaries if summary.result == WIN)

    last_five = {"matches": 0, "goals": 0, "assists": 0, "minutes": 0}
    for summary in summaries[:5]:
        last_five["matches"] += 1
        last_five["goals"] += summary.goals
        last_five["assists"] += summary.assists
        last_five["minutes"] += summary.minutes

    return {
        "total_matches": len(summaries),
        "played_matches": len(played_summaries),
        "current_playing_streak": _leading_run(played),
        "current_starting_streak": _leading_run(started),
        "longest_playing_streak": _longest_run(played[::-1]),
        "longest_starting_streak": _longest_run(started[::-1]),
        "current_goal_involvement_streak": _leading_run(involved),
        "longest_goal_involvement_streak": _longest_run(involved[::-1]),
        "matches_since_last_goal_involvement": since_involvement,
        "last_goal_involvement_match_id": last_involvement.match_id if last_involvement else None,
        "last_goal_involvement_kickoff": last_involvement.kickoff if last_involvement else None,
        "win_rate_when_played": (
            round(wins_when_played / len(played_summaries), 4) if played_summaries else 0
        ),
        "last_five": last_five,
    }


@dataclass
class PlayerOpponentBreakdown:
    opponent_id: Optional[int]
    matches: int = 0
    starts: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals: int = 0
    assists: int = 0
    goal_involvements: int = 0
    minutes: int = 0

    def to_dict(self) -> Dict:
        return asdict(self)


def build_player_opponent_breakdown(
    summaries: Sequence[PlayerMatchSummary],
) -> Dict[Optional[int], PlayerOpponentBreakdown]:
    """What a player did against each rival. Only matches they played count."""
    breakdown: Dict[Optional[int], PlayerOpponentBreakdown] = {}

    for summary in summaries:
        if not summary.played:
            continue
        entry = breakdown.setdefault(
            summary.opponent_id, PlayerOpponentBreakdown(opponent_id=summary.opponent_id)
        )
        entry.matches += 1
        if summary.started:
            entry.starts += 1
        entry.minutes += summary.minutes
        entry.goals += summary.goals
        entry.assists += summary.assists
        entry.goal_involvements = entry.goals + entry.assists

        if summary.result == WIN:
            entry.wins += 1
        elif summary.result == DRAW:
            entry.draws += 1
        else:
            entry.losses += 1

    return breakdown
