from sqlmodel import SQLModel, Session, create_engine

from cantera_backend.core.config import DATABASE_URL, SQL_ECHO

# --- Engine ---
# SQLite needs check_same_thread disabled because FastAPI runs sync
# dependencies in a threadpool.
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=_connect_args)


# --- Initialize DB tables ---
def init_db(bind=None):
    """Create tables if they don't exist."""
    # Import models so every table is registered on the metadata
    from cantera_backend import models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


# --- Session for seeding/scripts ---
def get_sync_session(bind=None) -> Session:
    return Session(bind or engine)


# --- Request-scoped session (used in routes) ---
def get_session():
    with Session(engine) as session:
        yield session
