"""Data access layer for the product catalog."""

from datetime import datetime, timezone
from typing import Any

from src.db.models import CATEGORIES_PRODUITS, FAMILLES_PRODUITS, PRODUITS


def list_families(db: Any) -> list[dict]:
    return db.table(FAMILLES_PRODUITS).select("*").order("nom").execute().data


def list_categories(db: Any, famille_id: str | None = None) -> list[dict]:
    query = db.table(CATEGORIES_PRODUITS).select("*")
    if famille_id:
        query = query.eq("famille_id", famille_id)
    return query.order("nom").execute().data


def list_products(
    db: Any,
    famille_id: str | None = None,
    categorie_id: str | None = None,
    search: str | None = None,
) -> list[dict]:
    query = db.table(PRODUITS).select("*")
    if famille_id:
        query = query.eq("famille_id", famille_id)
    if categorie_id:
        query = query.eq("categorie_id", categorie_id)
    if search:
        # PostgREST or-filter syntax; commas and parentheses would split it
        term = search.replace(",", " ").replace("(", " ").replace(")", " ").strip()
        if term:
            query = query.or_(f"designation.ilike.%{term}%,reference.ilike.%{term}%")
    return query.order("designation").execute().data


def get_product(db: Any, produit_id: str) -> dict | None:
    result = db.table(PRODUITS).select("*").eq("id", produit_id).execute()
    return result.data[0] if result.data else None


def create_product(db: Any, data: dict[str, Any]) -> dict:
    return db.table(PRODUITS).insert(data).execute().data[0]


def update_product(db: Any, produit_id: str, data: dict[str, Any]) -> dict | None:
    payload = {**data, "updated_at": datetime.now(timezone.utc).isoformat()}
    result = db.table(PRODUITS).update(payload).eq("id", produit_id).execute()
    return result.data[0] if result.data else None


def delete_product(db: Any, produit_id: str) -> bool:
    result = db.table(PRODUITS).delete().eq("id", produit_id).execute()
    return bool(result.data)
