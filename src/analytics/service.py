"""Aggregations behind the analytics dashboards.

A visit counts as a conversion when its action was accepted and the visit is
finished. Revenue sums the amounts of conversions, targets sum every amount.
"""

from src.utils.dates import month_label, parse_timestamp
from src.utils.numbers import is_number, round_half_up


def is_conversion(visit: dict) -> bool:
    return visit.get("statut_action") == "accepte" and visit.get("statut_visite") == "termine"


def _amount(visit: dict) -> float:
    montant = visit.get("montant")
    return montant if is_number(montant) else 0


def _by_month(visits: list[dict]) -> list[tuple[str, list[dict]]]:
    """Group visits by calendar month, oldest month first. Undated visits are skipped."""
    buckets: dict[tuple[int, int], list[dict]] = {}
    labels: dict[tuple[int, int], str] = {}
    for visit in visits:
        visited_at = parse_timestamp(visit.get("date_visite"))
        if visited_at is None:
            continue
        key = (visited_at.year, visited_at.month)
        buckets.setdefault(key, []).append(visit)
        labels[key] = month_label(visited_at)
    return [(labels[key], buckets[key]) for key in sorted(buckets)]


def monthly_performance(visits: list[dict]) -> list[dict]:
    return [
        {
            "month": label,
            "visits": len(group),
            "conversions": sum(1 for v in group if is_conversion(v)),
            "revenue": 0,
        }
        for label, group in _by_month(visits)
    ]


def monthly_revenue(visits: list[dict]) -> list[dict]:
    return [
        {
            "month": label,
            "revenue": sum(_amount(v) for v in group if is_conversion(v)),
            "target": sum(_amount(v) for v in group),
        }
        for label, group in _by_month(visits)
    ]


def distinct_companies(visits: list[dict]) -> list[str]:
    return sorted({v["entreprise"] for v in visits if v.get("entreprise")})


def member_performance(profile: dict, visits: list[dict]) -> dict:
    total = len(visits)
    conversions = [v for v in visits if is_conversion(v)]
    name = f"{profile.get('prenom') or ''} {profile.get('nom') or ''}".strip() or profile.get("email")
    return {
        "id": profile["id"],
        "name": name,
        "visits": total,
        "conversions": len(conversions),
        "revenue": sum(_amount(v) for v in conversions),
        "previsionnel": sum(_amount(v) for v in visits),
        "performance": round_half_up(len(conversions) / total * 100) if total else 0,
    }


def team_performance(profiles: list[dict], visits: list[dict]) -> list[dict]:
    """Score each commercial and rank by performance, best first."""
    by_commercial: dict[str, list[dict]] = {}
    for visit in visits:
        by_commercial.setdefault(visit.get("commercial_id"), []).append(visit)

    rows = [member_performance(p, by_commercial.get(p["id"], [])) for p in profiles]
    rows.sort(key=lambda row: row["performance"], reverse=True)
    return rows
