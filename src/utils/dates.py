"""Date helpers shared by aggregation code."""

from datetime import date, datetime, time, timedelta

# French short month labels used by the dashboards
MONTH_LABELS = ["janv.", "févr.", "mars", "avr.", "mai", "juin", "juil.", "août", "sept.", "oct.", "nov.", "déc."]


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO date or timestamp from the table store.

    Aware values become naive local time, the frame of `datetime.now()` that the
    week and month windows are built from.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def week_range(now: datetime) -> tuple[datetime, datetime]:
    """Monday 00:00 to Saturday 23:59:59.999 of the week containing `now`."""
    monday = datetime.combine(now.date() - timedelta(days=now.weekday()), time.min)
    saturday = datetime.combine(monday.date() + timedelta(days=5), time(23, 59, 59, 999000))
    return monday, saturday


def month_range(now: datetime) -> tuple[datetime, datetime]:
    first = datetime.combine(date(now.year, now.month, 1), time.min)
    next_month = date(now.year + (now.month // 12), now.month % 12 + 1, 1)
    last = datetime.combine(next_month - timedelta(days=1), time(23, 59, 59, 999000))
    return first, last


def month_label(moment: datetime) -> str:
    return f"{MONTH_LABELS[moment.month - 1]} {moment.year}"
