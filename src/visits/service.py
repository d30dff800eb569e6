"""Business logic for visits: permissions, payloads, statistics."""

import math
from datetime import datetime

from fastapi import HTTPException

from src.auth.dependencies import CurrentUser, load_profile
from src.db.models import STATUT_ACTION_DEFAULT
from src.utils.dates import parse_timestamp
from src.utils.numbers import is_number, round_half_up
from src.visits import repository
from src.visits.schemas import VisitForm

# Optional text fields stored as NULL when left empty
OPTIONAL_TEXT_FIELDS = (
    "fonction_poste", "ville", "zone", "adresse", "tel_fixe", "mobile", "email",
    "provenance_contact", "interet_client", "actions_a_entreprendre",
    "date_prochaine_action", "remarques",
)


def _clean_number(value: float | None) -> float | None:
    if value is None or math.isnan(value):
        return None
    return value


def build_payload(form: VisitForm) -> dict:
    """Row payload for a visit form: empty optionals become NULL."""
    payload = form.model_dump()
    for field in OPTIONAL_TEXT_FIELDS:
        payload[field] = payload[field] or None
    payload["montant"] = _clean_number(form.montant)
    payload["probabilite"] = _clean_number(form.probabilite)
    payload["statut_action"] = form.statut_action or STATUT_ACTION_DEFAULT
    return payload


def get_editable_visit(user: CurrentUser, visite_id: str) -> dict:
    """Return the visit if the caller owns it or is an admin."""
    visite = repository.get_by_id(user.db, visite_id)
    if not visite:
        raise HTTPException(status_code=404, detail="Visit not found")
    if not user.is_admin and visite["commercial_id"] != user.id:
        raise HTTPException(status_code=403, detail="You do not have permission to modify this visit")
    return visite


def create_visit(user: CurrentUser, form: VisitForm) -> dict:
    return repository.create(user.db, user.id, build_payload(form))


def update_visit(user: CurrentUser, visite_id: str, form: VisitForm) -> dict | None:
    get_editable_visit(user, visite_id)
    return repository.update(user.db, visite_id, build_payload(form))


def update_status(user: CurrentUser, visite_id: str, data: dict) -> dict | None:
    get_editable_visit(user, visite_id)
    update_data = {k: v for k, v in data.items() if v is not None}
    if not update_data:
        raise HTTPException(status_code=400, detail="Nothing to update")
    return repository.update(user.db, visite_id, update_data)


def delete_visit(user: CurrentUser, visite_id: str) -> None:
    get_editable_visit(user, visite_id)
    repository.delete(user.db, visite_id)


def compute_stats(visits: list[dict]) -> dict:
    stats = {
        "total_visites": 0,
        "visites_a_faire": 0,
        "visites_en_cours": 0,
        "visites_terminees": 0,
        "visites_acceptees": 0,
        "visites_refusees": 0,
        "montant_total": 0,
        "probabilite_moyenne": 0,
    }
    probabilities = []

    for visite in visits:
        stats["total_visites"] += 1

        statut_visite = visite.get("statut_visite")
        if statut_visite == "a_faire":
            stats["visites_a_faire"] += 1
        elif statut_visite == "en_cours":
            stats["visites_en_cours"] += 1
        elif statut_visite == "termine":
            stats["visites_terminees"] += 1

        statut_action = visite.get("statut_action")
        if statut_action == "accepte":
            stats["visites_acceptees"] += 1
        elif statut_action == "refuse":
            stats["visites_refusees"] += 1

        if is_number(visite.get("montant")):
            stats["montant_total"] += visite["montant"]
        if is_number(visite.get("probabilite")):
            probabilities.append(visite["probabilite"])

    if probabilities:
        stats["probabilite_moyenne"] = round_half_up(sum(probabilities) / len(probabilities), 1)
    return stats


def check_duplicate(user: CurrentUser, entreprise: str, now: datetime) -> dict:
    """Report the most recent visit already logged for `entreprise`, if any."""
    latest = repository.find_latest_by_company(user.db, entreprise.strip())
    if not latest:
        return {
            "existe": False,
            "derniere_visite_id": None,
            "derniere_date": None,
            "commercial_nom": None,
            "jours_depuis_visite": None,
        }

    visited_at = parse_timestamp(latest.get("date_visite"))
    commercial = load_profile(user.db, latest["commercial_id"]) or {}
    name = f"{commercial.get('prenom') or ''} {commercial.get('nom') or ''}".strip() or commercial.get("email")
    return {
        "existe": True,
        "derniere_visite_id": latest["id"],
        "derniere_date": latest.get("date_visite"),
        "commercial_nom": name,
        "jours_depuis_visite": (now.date() - visited_at.date()).days if visited_at else None,
    }


# --- Notes ---

def get_editable_note(user: CurrentUser, note_id: str) -> dict:
    note = repository.get_note(user.db, note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Note not found")
    if not user.is_admin and note["user_id"] != user.id:
        raise HTTPException(status_code=403, detail="You do not have permission to modify this note")
    return note
