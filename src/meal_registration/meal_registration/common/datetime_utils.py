from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> tuple[date, date]:
    """Parse YYYY-MM into the first and last day of that month."""
    first = datetime.strptime(value, "%Y-%m").date()
    return first, month_end(first)


def month_end(day: date) -> date:
    if day.month == 12:
        nxt = date(day.year + 1, 1, 1)
    else:
        nxt = date(day.year, day.month + 1, 1)
    return date.fromordinal(nxt.toordinal() - 1)


def parse_hhmm(value: Optional[str], field_name: str) -> Optional[time]:
    """Parse an optional HH:MM (or HH:MM:SS) string."""
    v = (value or "").strip()
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name}: horário inválido (HH:MM)")


def format_hhmm(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value else ""


def minutes_since_midnight(value: time) -> int:
    return value.hour * 60 + value.minute


def epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def from_epoch_millis(value: int) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000)
