from fastapi import APIRouter, HTTPException, Depends
from sqlmodel import Session, select

from cantera_backend.core.context import RequestContext, get_request_context
from cantera_backend.core.database import get_session
from cantera_backend.models.user_model import User, UserCreate, LoginRequest

router = APIRouter()


# === REGISTER ===

@router.post("/register", status_code=201)
def register_user(data: UserCreate, session: Session = Depends(get_session)):
    existing = session.exec(select(User).where(User.username == data.username)).first()
    if existing:
        raise HTTPException(status_code=400, detail="El usuario ya existe")

    user = User(username=data.username, role=data.role, team_id=data.team_id)
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


# === LOGIN ===
# No passwords: the club only needs to know which coach is using the app.

@router.post("/login")
def login_user(data: LoginRequest, session: Session = Depends(get_session)):
    user = session.exec(select(User).where(User.username == data.username.strip())).first()
    if not user:
        raise HTTPException(status_code=401, detail="Usuario no encontrado")
    return user


# === CURRENT CONTEXT ===

@router.get("/me")
def get_current_context(context: RequestContext = Depends(get_request_context)):
    return {"user": context.user, "team_id": context.team_id}
