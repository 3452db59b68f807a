# cantera_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Season
from .season_model import Season, SeasonCreate, SeasonUpdate

# Team
from .team_model import Team, TeamCreate, TeamUpdate

# Player
from .player_model import Player, PlayerCreate, PlayerUpdate

# User
from .user_model import User, UserCreate, LoginRequest

# Training
from .training_model import TrainingSession, TrainingRecurrenceRequest, TrainingSessionRead

# Attendance
from .attendance_model import (
    AttendanceRecord, AttendanceEntry, AttendanceSaveRequest, AttendanceRecordRead
)

# Ratings
from .rating_model import Rating, RatingSave

# Objectives
from .objective_model import Objective, ObjectiveCreate, ObjectiveUpdate

# Scouting
from .scouting_model import ScoutingReport, ScoutingReportCreate, ScoutingReportUpdate

# Match, lineup and events
from .match_model import (
    Match, MatchPlayerSlot, MatchEvent, SlotRole, EventType, EventPeriod,
    MatchCreate, MatchUpdate, LineupRequest, SlotMinutes, MinutesRequest,
    MatchEventCreate, MatchEventUpdate, PlayerSlotRead, MatchEventRead, MatchRead
)
