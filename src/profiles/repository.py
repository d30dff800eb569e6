"""Data access layer for profiles."""

from datetime import datetime, timezone
from typing import Any

from src.db.models import PROFILES, ROLE_COMMERCIAL

PROFILE_COLUMNS = "id, email, nom, prenom, role, telephone"


def list_all(db: Any) -> list[dict]:
    result = db.table(PROFILES).select(PROFILE_COLUMNS).order("nom").execute()
    return result.data


def list_commercials(db: Any) -> list[dict]:
    result = db.table(PROFILES).select("id, nom, prenom, email").eq("role", ROLE_COMMERCIAL).execute()
    return result.data


def update(db: Any, user_id: str, data: dict[str, Any]) -> dict | None:
    payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
    result = db.table(PROFILES).update(payload).eq("id", user_id).execute()
    return result.data[0] if result.data else None
