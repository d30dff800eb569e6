"""Pydantic schemas for appointment requests."""

from typing import Literal

from pydantic import BaseModel, Field

StatutRdv = Literal["planifie", "confirme", "reporte", "annule", "termine"]
PrioriteRdv = Literal["basse", "normale", "haute", "urgente"]

# HH:MM, 24h clock
TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


class AppointmentForm(BaseModel):
    entreprise: str | None = None
    personne_contact: str | None = None
    fonction_contact: str | None = None
    tel_contact: str | None = None
    email_contact: str | None = None
    date_rdv: str | None = Field(default=None, pattern=DATE_PATTERN)
    heure_debut: str | None = Field(default=None, pattern=TIME_PATTERN)
    heure_fin: str | None = Field(default=None, pattern=TIME_PATTERN)
    lieu: str | None = None
    objet: str | None = None
    description: str | None = None
    statut_rdv: StatutRdv | None = None
    priorite: PrioriteRdv | None = None
    rappel_avant: int | None = Field(default=None, ge=0)
    visite_id: str | None = None


class AppointmentRequest(BaseModel):
    data: AppointmentForm
