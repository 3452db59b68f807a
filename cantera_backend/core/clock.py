# clock.py
# Current time as a naive club-local wall time, the form every timestamp is stored in.

from datetime import date, datetime

import pytz

from cantera_backend.core.config import CLUB_TIMEZONE


def club_now() -> datetime:
    return datetime.now(pytz.timezone(CLUB_TIMEZONE)).replace(tzinfo=None)


def club_today() -> date:
    return club_now().date()
