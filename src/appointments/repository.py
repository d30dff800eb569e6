"""Data access layer for appointments."""

from datetime import datetime, timezone
from typing import Any

from src.db.models import RENDEZ_VOUS


def list_appointments(
    db: Any,
    visite_id: str | None = None,
    statut: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[dict]:
    query = db.table(RENDEZ_VOUS).select("*")
    if visite_id:
        query = query.eq("visite_id", visite_id)
    if statut:
        query = query.eq("statut", statut)
    if date_from:
        query = query.gte("date_rdv", date_from)
    if date_to:
        query = query.lte("date_rdv", date_to)
    return query.order("date_rdv").execute().data


def get_by_id(db: Any, rdv_id: str) -> dict | None:
    result = db.table(RENDEZ_VOUS).select("*").eq("id", rdv_id).execute()
    return result.data[0] if result.data else None


def create(db: Any, data: dict[str, Any]) -> dict:
    result = db.table(RENDEZ_VOUS).insert(data).execute()
    return result.data[0]


def update(db: Any, rdv_id: str, data: dict[str, Any]) -> dict | None:
    payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
    result = db.table(RENDEZ_VOUS).update(payload).eq("id", rdv_id).execute()
    return result.data[0] if result.data else None


def delete(db: Any, rdv_id: str) -> bool:
    result = db.table(RENDEZ_VOUS).delete().eq("id", rdv_id).execute()
    return bool(result.data)
