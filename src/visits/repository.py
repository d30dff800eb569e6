"""Data access layer for visits and visit notes."""

from datetime import datetime, timezone
from typing import Any

from src.db.models import VISITE_NOTES, VISITES


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def list_visits(
    db: Any,
    commercial_id: str | None = None,
    statut_visite: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[dict]:
    query = db.table(VISITES).select("*")
    if commercial_id:
        query = query.eq("commercial_id", commercial_id)
    if statut_visite:
        query = query.eq("statut_visite", statut_visite)
    if date_from:
        query = query.gte("date_visite", date_from)
    if date_to:
        query = query.lte("date_visite", date_to)
    result = query.order("date_visite", desc=True).execute()
    return result.data


def list_for_aggregation(
    db: Any,
    columns: str,
    commercial_id: str | None = None,
    entreprise: str | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> list[dict]:
    """Fetch only `columns` of the visits matching the optional filters."""
    query = db.table(VISITES).select(columns)
    if commercial_id:
        query = query.eq("commercial_id", commercial_id)
    if entreprise:
        query = query.eq("entreprise", entreprise)
    if date_from:
        query = query.gte("date_visite", date_from)
    if date_to:
        query = query.lte("date_visite", date_to)
    return query.execute().data


def get_by_id(db: Any, visite_id: str) -> dict | None:
    result = db.table(VISITES).select("id, commercial_id").eq("id", visite_id).execute()
    return result.data[0] if result.data else None


def escape_like(value: str) -> str:
    """Make `value` match itself literally in a LIKE pattern."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def find_latest_by_company(db: Any, entreprise: str) -> dict | None:
    """Most recent visit whose company equals `entreprise`, ignoring case."""
    result = (
        db.table(VISITES)
        .select("id, commercial_id, date_visite")
        .ilike("entreprise", escape_like(entreprise))
        .order("date_visite", desc=True)
        .limit(1)
        .execute()
    )
    return result.data[0] if result.data else None


def create(db: Any, commercial_id: str, data: dict[str, Any]) -> dict:
    row = {"commercial_id": commercial_id, **data}
    result = db.table(VISITES).insert(row).execute()
    return result.data[0]


def update(db: Any, visite_id: str, data: dict[str, Any]) -> dict | None:
    payload = {**data, "updated_at": _now_iso()}
    result = db.table(VISITES).update(payload).eq("id", visite_id).execute()
    return result.data[0] if result.data else None


def delete(db: Any, visite_id: str) -> bool:
    result = db.table(VISITES).delete().eq("id", visite_id).execute()
    return bool(result.data)


# --- Notes ---

def list_notes(db: Any, visite_id: str) -> list[dict]:
    result = (
        db.table(VISITE_NOTES)
        .select("*")
        .eq("visite_id", visite_id)
        .order("created_at")
        .execute()
    )
    return result.data


def get_note(db: Any, note_id: str) -> dict | None:
    result = db.table(VISITE_NOTES).select("*").eq("id", note_id).execute()
    return result.data[0] if result.data else None


def create_note(db: Any, user_id: str, data: dict[str, Any]) -> dict:
    row = {"user_id": user_id, **data}
    result = db.table(VISITE_NOTES).insert(row).execute()
    return result.data[0]


def update_note(db: Any, note_id: str, data: dict[str, Any]) -> dict | None:
    payload = {**data, "updated_at": _now_iso()}
    result = db.table(VISITE_NOTES).update(payload).eq("id", note_id).execute()
    return result.data[0] if result.data else None


def delete_note(db: Any, note_id: str) -> bool:
    result = db.table(VISITE_NOTES).delete().eq("id", note_id).execute()
    return bool(result.data)
