"""Appointment CRUD endpoints."""

from fastapi import APIRouter, Depends, Query

from src.appointments import repository, service
from src.appointments.schemas import AppointmentRequest
from src.auth.dependencies import CurrentUser, get_current_user

router = APIRouter(prefix="/api/rendez-vous", tags=["Appointments"])


@router.get("", summary="List appointments", description="Optionally filter by visit, status or date range. Ordered by date.")
async def list_all(
    visite_id: str | None = None,
    statut: str | None = None,
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    user: CurrentUser = Depends(get_current_user),
):
    rows = repository.list_appointments(user.db, visite_id, statut, date_from, date_to)
    return {"status": "success", "data": rows}


@router.post("", status_code=201, summary="Schedule an appointment")
async def create(body: AppointmentRequest, user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": service.create_appointment(user, body.data)}


@router.get("/{rdv_id}", summary="Get an appointment")
async def get(rdv_id: str, user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": service.get_appointment(user, rdv_id)}


@router.patch("/{rdv_id}", summary="Update an appointment", description="Only the provided fields change. Owner or admin only.")
async def patch(rdv_id: str, body: AppointmentRequest, user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": service.update_appointment(user, rdv_id, body.data)}


@router.delete("/{rdv_id}", status_code=204, summary="Delete an appointment")
async def delete(rdv_id: str, user: CurrentUser = Depends(get_current_user)):
    service.delete_appointment(user, rdv_id)
