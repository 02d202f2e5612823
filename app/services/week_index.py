# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: ISO-8601 week numbering for the once-per-week reminder marker.

The week number alone repeats every year, so a marker left at 43 would also
block week 43 of the following year. The marker is therefore stored together
with its ISO year (``iso_year``); markers written without a year are read as
belonging to the current one.
"""

from datetime import date, datetime
from typing import Union
from zoneinfo import ZoneInfo

from app.core.config import settings


def clan_timezone() -> ZoneInfo:
    return ZoneInfo(settings.CLAN_TIMEZONE)


def to_clan_time(ts: datetime) -> datetime:
    """Express an aware timestamp in the clan's zone; naive ones are taken as-is."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(clan_timezone())


def _clan_date(ts: Union[datetime, date]) -> date:
    return to_clan_time(ts).date() if isinstance(ts, datetime) else ts


def week_index(ts: Union[datetime, date]) -> int:
    """ISO week number: weeks start Monday, the Thursday's week names the number."""
    return _clan_date(ts).isocalendar()[1]


def iso_year(ts: Union[datetime, date]) -> int:
    """ISO year owning ``week_index(ts)``; differs from the calendar year around New Year."""
    return _clan_date(ts).isocalendar()[0]
