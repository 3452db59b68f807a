# cantera_backend/core/crud.py
# Small helpers shared by the resource routers.

from fastapi import HTTPException
from sqlmodel import Session, SQLModel


def get_or_404(session: Session, model, object_id: int, detail: str):
    obj = session.get(model, object_id)
    if not obj:
        raise HTTPException(status_code=404, detail=detail)
    return obj


def apply_update(obj, data: SQLModel, exclude=("id",)):
    """
    Copy the fields that were actually sent in a PUT body onto obj.
    An explicit null for a NOT NULL column is rejected before anything is copied.
    """
    values = data.model_dump(exclude_unset=True, exclude=set(exclude))

    columns = type(obj).__table__.columns
    for key, value in values.items():
        if value is None and key in columns and not columns[key].nullable:
            raise HTTPException(status_code=400, detail=f"El campo {key} es obligatorio")

    for key, value in values.items():
        setattr(obj, key, value)
    return obj


def save(session: Session, obj):
    session.add(obj)
    session.commit()
    session.refresh(obj)
    return obj


def delete(session: Session, obj) -> dict:
    session.delete(obj)
    session.commit()
    return {"ok": True}
