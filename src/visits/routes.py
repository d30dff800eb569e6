"""Visit endpoints: CRUD, status updates, statistics, duplicates, notes."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query

from src.auth.dependencies import CurrentUser, get_current_user
from src.visits import repository, service
from src.visits.schemas import (
    CreateNoteRequest,
    UpdateNoteRequest,
    UpdateVisitRequest,
    UpdateVisitStatusRequest,
    VisitForm,
)

router = APIRouter(prefix="/api/visites", tags=["Visits"])


@router.get("", summary="List visits", description="List visits visible to the caller, most recent first.")
async def list_visits(
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    statut_visite: str | None = None,
    commercial_id: str | None = None,
    user: CurrentUser = Depends(get_current_user),
):
    visits = repository.list_visits(user.db, commercial_id, statut_visite, date_from, date_to)
    return {"status": "success", "data": visits}


@router.post("", status_code=201, summary="Log a visit")
async def create_visit(body: VisitForm, user: CurrentUser = Depends(get_current_user)):
    return {"status": "success", "data": service.create_visit(user, body)}


@router.get("/doublon", summary="Check for an earlier visit to the same company")
async def check_duplicate(
    entreprise: str = Query(..., min_length=1),
    user: CurrentUser = Depends(get_current_user),
):
    return {"status": "success", "data": service.check_duplicate(user, entreprise, datetime.now())}


@router.get("/stats", summary="Visit statistics", description="Counters over the caller's own visits, optionally within a date range.")
async def stats(
    date_from: str | None = Query(None, alias="from"),
    date_to: str | None = Query(None, alias="to"),
    user: CurrentUser = Depends(get_current_user),
):
    visits = repository.list_for_aggregation(
        user.db,
        "id, statut_visite, statut_action, montant, probabilite",
        commercial_id=user.id,
        date_from=date_from,
        date_to=date_to,
    )
    return {"status": "success", "data": service.compute_stats(visits)}


@router.put("/update", summary="Update a visit", description="Replace every field of a visit. Owner or admin only.")
async def update_visit(body: UpdateVisitRequest, user: CurrentUser = Depends(get_current_user)):
    updated = service.update_visit(user, body.id, body.data)
    return {"status": "success", "data": updated}


@router.patch("/update/{visite_id}", summary="Update visit statuses")
async def update_status(visite_id: str, body: UpdateVisitStatusRequest, user: CurrentUser = Depends(get_current_user)):
    updated = service.update_status(user, visite_id, body.model_dump())
    return {"status": "success", "data": updated}


@router.delete("/delete", summary="Delete a visit")
async def delete_visit(visite_id: str | None = Query(None, alias="id"), user: CurrentUser = Depends(get_current_user)):
    if not visite_id:
        raise HTTPException(status_code=400, detail="Visit id is required")
    service.delete_visit(user, visite_id)
    return {"status": "success", "data": {"message": "Visit deleted"}}


# --- Notes ---

@router.get("/notes", summary="List notes of a visit")
async def list_notes(visite_id: str | None = None, user: CurrentUser = Depends(get_current_user)):
    if not visite_id:
        return {"status": "success", "data": []}
    return {"status": "success", "data": repository.list_notes(user.db, visite_id)}


@router.post("/notes", status_code=201, summary="Add a note to a visit")
async def create_note(body: CreateNoteRequest, user: CurrentUser = Depends(get_current_user)):
    note = repository.create_note(user.db, user.id, body.model_dump())
    return {"status": "success", "data": note}


@router.patch("/notes", summary="Update a note")
async def update_note(body: UpdateNoteRequest, user: CurrentUser = Depends(get_current_user)):
    note = service.get_editable_note(user, body.id)
    data = body.model_dump(exclude={"id"}, exclude_none=True)
    if not data:
        return {"status": "success", "data": note}
    return {"status": "success", "data": repository.update_note(user.db, body.id, data)}


@router.delete("/notes", summary="Delete a note")
async def delete_note(note_id: str | None = Query(None, alias="id"), user: CurrentUser = Depends(get_current_user)):
    if not note_id:
        raise HTTPException(status_code=400, detail="Note id is required")
    service.get_editable_note(user, note_id)
    repository.delete_note(user.db, note_id)
    return {"status": "success", "data": {"message": "Note deleted"}}
