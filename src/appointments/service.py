"""Appointment scheduling logic: timestamps, durations, reminders, permissions."""

from datetime import datetime, timedelta

from fastapi import HTTPException

from src.appointments import repository
from src.appointments.schemas import AppointmentForm
from src.auth.dependencies import CurrentUser
from src.db.models import DEFAULT_RDV_DURATION_MINUTES, PRIORITE_RDV_DEFAULT, STATUT_RDV_DEFAULT

# Form field -> rendez_vous column, for fields copied as-is (empty -> NULL)
OPTIONAL_FIELD_COLUMNS = {
    "personne_contact": "personne_contact",
    "tel_contact": "telephone",
    "email_contact": "email",
    "lieu": "adresse",
    "objet": "objet",
    "description": "description",
}


def combine_timestamp(date_rdv: str, heure_debut: str) -> str:
    return f"{date_rdv}T{heure_debut}:00"


def calculate_duration(heure_debut: str, heure_fin: str) -> int:
    """Minutes between two HH:MM times of the same day."""
    hd, md = (int(part) for part in heure_debut.split(":"))
    hf, mf = (int(part) for part in heure_fin.split(":"))
    return (hf * 60 + mf) - (hd * 60 + md)


def calculate_reminder_date(date_rdv: str, minutes_before: int) -> str:
    return (datetime.fromisoformat(date_rdv) - timedelta(minutes=minutes_before)).isoformat()


def build_insert_payload(commercial_id: str, form: AppointmentForm) -> dict:
    if not form.entreprise or not form.date_rdv or not form.heure_debut:
        raise HTTPException(status_code=400, detail="Company, date and start time are required")

    date_rdv = combine_timestamp(form.date_rdv, form.heure_debut)
    payload = {
        "commercial_id": commercial_id,
        "entreprise": form.entreprise,
        "ville": None,
        "zone": None,
        "date_rdv": date_rdv,
        "duree_estimee": (
            calculate_duration(form.heure_debut, form.heure_fin)
            if form.heure_fin
            else DEFAULT_RDV_DURATION_MINUTES
        ),
        "statut": form.statut_rdv or STATUT_RDV_DEFAULT,
        "priorite": form.priorite or PRIORITE_RDV_DEFAULT,
        "rappel_envoye": False,
        "rappel_date": calculate_reminder_date(date_rdv, form.rappel_avant) if form.rappel_avant else None,
        "compte_rendu": None,
        "visite_id": form.visite_id or None,
    }
    for field, column in OPTIONAL_FIELD_COLUMNS.items():
        payload[column] = getattr(form, field) or None
    return payload


def build_update_payload(form: AppointmentForm) -> dict:
    """Map only the fields present in the request onto their columns."""
    provided = form.model_fields_set
    payload: dict = {}

    if "entreprise" in provided:
        payload["entreprise"] = form.entreprise
    for field, column in OPTIONAL_FIELD_COLUMNS.items():
        if field in provided:
            payload[column] = getattr(form, field) or None
    if "statut_rdv" in provided:
        payload["statut"] = form.statut_rdv
    if "priorite" in provided:
        payload["priorite"] = form.priorite

    if form.date_rdv and form.heure_debut:
        payload["date_rdv"] = combine_timestamp(form.date_rdv, form.heure_debut)
    if form.heure_debut and form.heure_fin:
        payload["duree_estimee"] = calculate_duration(form.heure_debut, form.heure_fin)

    if "rappel_avant" in provided:
        if form.rappel_avant and "date_rdv" in payload:
            payload["rappel_date"] = calculate_reminder_date(payload["date_rdv"], form.rappel_avant)
        else:
            payload["rappel_date"] = None
    return payload


def get_appointment(user: CurrentUser, rdv_id: str) -> dict:
    rdv = repository.get_by_id(user.db, rdv_id)
    if not rdv:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return rdv


def get_editable_appointment(user: CurrentUser, rdv_id: str) -> dict:
    rdv = get_appointment(user, rdv_id)
    if not user.is_admin and rdv["commercial_id"] != user.id:
        raise HTTPException(status_code=403, detail="You do not have permission to modify this appointment")
    return rdv


def create_appointment(user: CurrentUser, form: AppointmentForm) -> dict:
    return repository.create(user.db, build_insert_payload(user.id, form))


def update_appointment(user: CurrentUser, rdv_id: str, form: AppointmentForm) -> dict:
    rdv = get_editable_appointment(user, rdv_id)
    payload = build_update_payload(form)
    if not payload:
        return rdv
    return repository.update(user.db, rdv_id, payload) or rdv


def delete_appointment(user: CurrentUser, rdv_id: str) -> None:
    get_editable_appointment(user, rdv_id)
    repository.delete(user.db, rdv_id)
