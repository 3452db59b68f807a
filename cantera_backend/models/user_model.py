# user_model.py
# Defines User: a coach or club staff member. Login is a plain username lookup.

from typing import Optional
from sqlmodel import SQLModel, Field
from pydantic import BaseModel, Field as PydanticField


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True)
    role: str = Field(default="entrenador")          # entrenador, coordinador, admin
    team_id: Optional[int] = Field(default=None, foreign_key="team.id")


class UserCreate(BaseModel):
    username: str = PydanticField(min_length=1)
    role: str = "entrenador"
    team_id: Optional[int] = None


class LoginRequest(BaseModel):
    username: str = PydanticField(alias="nombreUsuario", min_length=1)

    class Config:
        populate_by_name = True
