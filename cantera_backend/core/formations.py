# cantera_backend/core/formations.py
# Canonical formation catalog shared by the formation endpoints and the
# lineup engine. Position codes always start with the goalkeeper.

from typing import Dict, Iterable, List, Tuple

# === FORMATION DEFINITIONS ===
# Ordered position codes used when laying out the starting lineup.
# The goalkeeper (GK) is included even though the label does not count it.
FORMATIONS: Dict[str, Dict] = {
    "4-3-3": {
        "label": "4-3-3",
        "positions": ("GK", "LB", "LCB", "RCB", "RB", "LCM", "CM", "RCM", "LW", "ST", "RW"),
    },
    "4-4-2": {
        "label": "4-4-2",
        "positions": ("GK", "LB", "LCB", "RCB", "RB", "LM", "LCM", "RCM", "RM", "LS", "RS"),
    },
    "3-5-2": {
        "label": "3-5-2",
        "positions": ("GK", "LCB", "CB", "RCB", "LWB", "LCM", "CM", "RCM", "RWB", "LS", "RS"),
    },
    "4-2-3-1": {
        "label": "4-2-3-1",
        "positions": ("GK", "LB", "LCB", "RCB", "RB", "LDM", "RDM", "CAM", "LW", "ST", "RW"),
    },
}

DEFAULT_FORMATION_KEY = "4-3-3"


def get_formation_positions(key) -> Tuple[str, ...]:
    """Return the ordered positions for a formation key (default formation for unknown keys)."""
    if key in FORMATIONS:
        return FORMATIONS[key]["positions"]
    return FORMATIONS[DEFAULT_FORMATION_KEY]["positions"]


def resolve_formation_key(key) -> str:
    return key if key in FORMATIONS else DEFAULT_FORMATION_KEY


def list_formations() -> List[Dict]:
    return [
        {"key": key, "label": data["label"], "positions": list(data["positions"])}
        for key, data in FORMATIONS.items()
    ]


def detect_formation(slots: Iterable) -> str:
    """
    Infer the formation of a stored lineup from its field positions.
    A formation matches when it has the same number of positions and every
    one of them is occupied. Falls back to the default key.
    """
    field_positions = [
        slot.position for slot in slots
        if slot.role == "field" and slot.position
    ]
    if not field_positions:
        return DEFAULT_FORMATION_KEY

    field_set = set(field_positions)
    for key, data in FORMATIONS.items():
        positions = data["positions"]
        if len(field_positions) != len(positions):
            continue
        if all(pos in field_set for pos in positions):
            return key

    return DEFAULT_FORMATION_KEY
