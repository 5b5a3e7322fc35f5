"""Date ranges and calendar-day handling for transactions."""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from ..errors import ValidationError

MAX_CUSTOM_RANGE_DAYS = 60


class TimeRange(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    LAST_MONTH = "last_month"


TIME_RANGE_LABELS: dict[TimeRange, str] = {
    TimeRange.TODAY: "Hoy",
    TimeRange.WEEK: "Esta semana",
    TimeRange.MONTH: "Este mes",
    TimeRange.LAST_MONTH: "Mes pasado",
}


def to_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def _month_bounds(day: date) -> tuple[date, date]:
    last_day = monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def date_range_for(time_range: TimeRange, today: Optional[date] = None) -> tuple[date, date]:
    """Inclusive ``(start, end)`` for a quick range; weeks run Monday-Sunday."""

    today = today or date.today()
    if time_range is TimeRange.TODAY:
        return today, today
    if time_range is TimeRange.WEEK:
        start = today - timedelta(days=today.weekday())
        return start, start + timedelta(days=6)
    if time_range is TimeRange.MONTH:
        return _month_bounds(today)
    if time_range is TimeRange.LAST_MONTH:
        return _month_bounds(today.replace(day=1) - timedelta(days=1))
    raise ValueError(f"Unknown time range: {time_range}")


def validate_custom_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError("La fecha de inicio no puede ser posterior a la fecha final", field="start")
    if (end - start).days > MAX_CUSTOM_RANGE_DAYS:
        raise ValidationError(
            f"El rango máximo permitido es de {MAX_CUSTOM_RANGE_DAYS} días", field="end"
        )
    return start, end


def parse_timestamp(value: str) -> datetime:
    """Parse the backend's ISO timestamp (``Z`` suffix allowed).

    Naive values are taken as UTC.
    """

    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def calendar_date(fecha: str) -> date:
    """Calendar day a stored ``fecha`` was recorded for.

    Date-only strings are returned as-is; timestamps are read in UTC, which
    is how the backend serialises the chosen day regardless of the viewer's
    timezone.
    """

    text = fecha.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_timestamp(text).astimezone(timezone.utc).date()


__all__ = [
    "MAX_CUSTOM_RANGE_DAYS",
    "TIME_RANGE_LABELS",
    "TimeRange",
    "calendar_date",
    "date_range_for",
    "parse_timestamp",
    "to_iso_date",
    "validate_custom_range",
]
