import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlmodel import select
from starlette.exceptions import HTTPException as StarletteHTTPException

from cantera_backend.core.config import LOG_LEVEL, SEED_ON_STARTUP
from cantera_backend.core.database import get_sync_session, init_db
from cantera_backend.core.errors import CanteraError, LineupValidationError
from cantera_backend.models.team_model import Team
from cantera_backend.seed.seed_all import seed_all

# --- Routers ---
from cantera_backend.core.auth import router as auth_router
from cantera_backend.routes.team_routes import router as team_router
from cantera_backend.routes.player_routes import router as player_router
from cantera_backend.routes.season_routes import router as season_router
from cantera_backend.routes.attendance_routes import router as attendance_router
from cantera_backend.routes.objective_routes import router as objective_router
from cantera_backend.routes.scouting_routes import router as scouting_router
from cantera_backend.routes.rating_routes import router as rating_router
from cantera_backend.routes.training_routes import router as training_router
from cantera_backend.routes.match_routes import router as match_router
from cantera_backend.routes.formation_routes import router as formation_router
from cantera_backend.routes.dashboard_routes import router as dashboard_router

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


configure_logging()

app = FastAPI(title="Cantera")


@app.on_event("startup")
def on_startup():
    # 1. Create tables
    init_db()

    # 2. Seed an empty database
    if not SEED_ON_STARTUP:
        return
    with get_sync_session() as session:
        has_teams = session.exec(select(Team)).first() is not None
    if has_teams:
        logger.info("Database already seeded. Skipping auto-seed.")
    else:
        logger.info("No teams found. Auto-seeding database...")
        seed_all()


# ==========================================
# ERROR ENVELOPE: {"error": message}
# ==========================================
@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"error": "Datos inválidos"})


@app.exception_handler(CanteraError)
async def domain_error_handler(request: Request, exc: CanteraError):
    content = {"error": str(exc)}
    if isinstance(exc, LineupValidationError):
        content["problems"] = exc.problems
    return JSONResponse(status_code=400, content=content)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Error interno del servidor"})


# Routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(season_router, prefix="/seasons", tags=["Seasons"])
app.include_router(team_router, prefix="/teams", tags=["Teams"])
app.include_router(player_router, prefix="/players", tags=["Players"])
app.include_router(training_router, prefix="/training-sessions", tags=["Training"])
app.include_router(attendance_router, prefix="/attendance", tags=["Attendance"])
app.include_router(match_router, prefix="/matches", tags=["Matches"])
app.include_router(formation_router, prefix="/formations", tags=["Formations"])
app.include_router(rating_router, prefix="/ratings", tags=["Ratings"])
app.include_router(objective_router, prefix="/objectives", tags=["Objectives"])
app.include_router(scouting_router, prefix="/scouting", tags=["Scouting"])
app.include_router(dashboard_router, prefix="/dashboard", tags=["Dashboard"])
