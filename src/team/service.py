"""Team roster with per-member visit counters."""

from collections import Counter
from datetime import datetime

from src.utils.dates import month_range, parse_timestamp, week_range


def build_roster(profiles: list[dict], visits: list[dict], now: datetime) -> list[dict]:
    """Attach total, current-week and current-month visit counts to each profile."""
    week_start, week_end = week_range(now)
    month_start, month_end = month_range(now)

    totals: Counter[str] = Counter()
    week: Counter[str] = Counter()
    month: Counter[str] = Counter()

    for visit in visits:
        commercial_id = visit.get("commercial_id")
        if not commercial_id:
            continue
        totals[commercial_id] += 1

        visited_at = parse_timestamp(visit.get("date_visite"))
        if visited_at is None:
            continue
        if week_start <= visited_at <= week_end:
            week[commercial_id] += 1
        if month_start <= visited_at <= month_end:
            month[commercial_id] += 1

    return [
        {
            **profile,
            "total_visites": totals[profile["id"]],
            "visites_semaine": week[profile["id"]],
            "visites_mois": month[profile["id"]],
        }
        for profile in profiles
    ]
