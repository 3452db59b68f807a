# cantera_backend/core/match_minutes.py
# Converts between absolute match minutes (timeline order) and the
# per-half minutes coaches type in, and decodes stored match events.

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Union

HALF_DURATION_MINUTES = 40
MAX_RELATIVE_MINUTE = 130

PERIOD_FIRST = "first"
PERIOD_SECOND = "second"
PERIOD_EXTRA = "extra"
PERIODS = (PERIOD_FIRST, PERIOD_SECOND, PERIOD_EXTRA)
DEFAULT_EVENT_PERIOD = PERIOD_FIRST

PERIOD_LABELS = {
    PERIOD_FIRST: "1ª parte",
    PERIOD_SECOND: "2ª parte",
    PERIOD_EXTRA: "Prórroga",
}

# Minutes added to a relative minute for each period
PERIOD_OFFSETS = {
    PERIOD_FIRST: 0,
    PERIOD_SECOND: HALF_DURATION_MINUTES,
    PERIOD_EXTRA: HALF_DURATION_MINUTES * 2,
}


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def coerce_period(value: Any) -> str:
    """Unknown period tags fall back to the first half."""
    if value in (PERIOD_SECOND, PERIOD_EXTRA):
        return value
    return DEFAULT_EVENT_PERIOD


def clamp_relative_minute(value: Any) -> int:
    if not _is_number(value):
        return 0
    # Round half up
    rounded = math.floor(value + 0.5)
    return max(0, min(MAX_RELATIVE_MINUTE, rounded))


def to_absolute_minute(period: str, relative_minute) -> int:
    minute = clamp_relative_minute(relative_minute)
    return PERIOD_OFFSETS[coerce_period(period)] + minute


def to_relative_minute(period: str, absolute_minute) -> int:
    minute = clamp_relative_minute(absolute_minute)
    return max(0, minute - PERIOD_OFFSETS[coerce_period(period)])


def infer_period(absolute_minute) -> str:
    if absolute_minute > HALF_DURATION_MINUTES * 2:
        return PERIOD_EXTRA
    if absolute_minute > HALF_DURATION_MINUTES:
        return PERIOD_SECOND
    return PERIOD_FIRST


# ==========================================
# STORED EVENT VARIANTS
# ==========================================
@dataclass(frozen=True)
class WithMetadata:
    """Event written with explicit period / relative minute metadata."""
    period: str
    relative_minute: int


@dataclass(frozen=True)
class LegacyAbsoluteOnly:
    """Event written before metadata existed: only the absolute minute is known."""
    minute: int


StoredEvent = Union[WithMetadata, LegacyAbsoluteOnly]


@dataclass(frozen=True)
class DecodedMinute:
    period: str
    relative_minute: int
    absolute_minute: int

    @property
    def label(self) -> str:
        return format_event_minute(self.period, self.relative_minute)


def classify_event(minute, data: Optional[Mapping[str, Any]]) -> StoredEvent:
    """Pick the stored-event variant. Metadata is used only when both fields are well-typed."""
    if isinstance(data, Mapping):
        period = data.get("period")
        relative = data.get("relativeMinute")
        if period in PERIODS and _is_number(relative):
            return WithMetadata(period=period, relative_minute=clamp_relative_minute(relative))
    return LegacyAbsoluteOnly(minute=minute if _is_number(minute) else 0)


def decode_stored_event(stored: StoredEvent) -> DecodedMinute:
    if isinstance(stored, WithMetadata):
        period = stored.period
        relative = stored.relative_minute
    elif isinstance(stored, LegacyAbsoluteOnly):
        period = infer_period(stored.minute)
        relative = to_relative_minute(period, stored.minute)
    else:
        raise TypeError(f"Unsupported stored event: {stored!r}")

    return DecodedMinute(
        period=period,
        relative_minute=relative,
        absolute_minute=to_absolute_minute(period, relative),
    )


def decode_event(minute, data: Optional[Mapping[str, Any]] = None) -> DecodedMinute:
    return decode_stored_event(classify_event(minute, data))


def build_event_metadata(
    period: str,
    relative_minute,
    base: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    metadata: Dict[str, Any] = dict(base) if base else {}
    metadata["period"] = coerce_period(period)
    metadata["relativeMinute"] = clamp_relative_minute(relative_minute)
    return metadata


def format_period_label(period: str) -> str:
    return PERIOD_LABELS[coerce_period(period)]


def format_event_minute(period: str, relative_minute) -> str:
    absolute = to_absolute_minute(period, relative_minute)
    if coerce_period(period) == PERIOD_FIRST:
        return f"{absolute}'"
    return f"{absolute}' · {format_period_label(period)}"
