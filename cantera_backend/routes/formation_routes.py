# cantera_backend/routes/formation_routes.py
# Read-only formation catalog for the lineup editor

from fastapi import APIRouter, HTTPException

from cantera_backend.core.formations import FORMATIONS, list_formations

router = APIRouter()


# ==========================================
# GET ALL FORMATIONS
# ==========================================
@router.get("")
def get_formations():
    """
    Every formation the lineup editor can pick (4-3-3, 4-4-2...),
    with its ordered positions.
    """
    return list_formations()


# ==========================================
# GET ONE FORMATION
# ==========================================
@router.get("/{key}")
def get_formation(key: str):
    formation = FORMATIONS.get(key)
    if not formation:
        raise HTTPException(status_code=404, detail="Formación no encontrada")
    return {"key": key, "label": formation["label"], "positions": list(formation["positions"])}
