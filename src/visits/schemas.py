"""Pydantic schemas for visit and visit-note requests."""

from typing import Literal

from pydantic import BaseModel, Field

StatutVisite = Literal["a_faire", "en_cours", "termine"]
StatutAction = Literal["en_attente", "accepte", "refuse"]
Urgence = Literal["basse", "normale", "haute"]
StatutNote = Literal["à faire", "en cours", "terminé"]


# --- Visits ---

class VisitForm(BaseModel):
    entreprise: str = Field(..., min_length=1)
    personne_rencontree: str = Field(..., min_length=1)
    fonction_poste: str | None = None
    ville: str | None = None
    zone: str | None = None
    adresse: str | None = None
    tel_fixe: str | None = None
    mobile: str | None = None
    email: str | None = None
    date_visite: str = Field(..., min_length=1)
    objet_visite: str = Field(..., min_length=1)
    provenance_contact: str | None = None
    interet_client: str | None = None
    actions_a_entreprendre: str | None = None
    montant: float | None = None
    date_prochaine_action: str | None = None
    remarques: str | None = None
    probabilite: float | None = Field(default=None, ge=0, le=100)
    statut_visite: StatutVisite
    statut_action: StatutAction | None = None


class UpdateVisitRequest(BaseModel):
    id: str = Field(..., min_length=1)
    data: VisitForm


class UpdateVisitStatusRequest(BaseModel):
    statut_visite: StatutVisite | None = None
    statut_action: StatutAction | None = None


# --- Notes ---

class CreateNoteRequest(BaseModel):
    visite_id: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    urgence: Urgence = "normale"
    statut: StatutNote = "à faire"


class UpdateNoteRequest(BaseModel):
    id: str = Field(..., min_length=1)
    content: str | None = Field(default=None, min_length=1)
    urgence: Urgence | None = None
    statut: StatutNote | None = None
