"""Profile endpoints for the authenticated user."""

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import CurrentUser, get_current_user
from src.profiles import repository
from src.profiles.schemas import ProfileResponse, UpdateProfileRequest

router = APIRouter(prefix="/api/profiles", tags=["Profiles"])

# Request field -> profiles column
FIELD_COLUMNS = {"first_name": "prenom", "last_name": "nom", "phone": "telephone"}


@router.get("", summary="Get my profile")
async def get_profile(user: CurrentUser = Depends(get_current_user)):
    if user.role is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    profile = ProfileResponse(
        id=user.id, email=user.email, nom=user.nom, prenom=user.prenom,
        role=user.role, telephone=user.telephone,
    )
    return {"status": "success", "data": profile.model_dump()}


@router.put("", summary="Update my profile", description="Update first name, last name or phone number.")
async def update_profile(body: UpdateProfileRequest, user: CurrentUser = Depends(get_current_user)):
    data = {FIELD_COLUMNS[k]: v for k, v in body.model_dump(exclude_none=True).items()}
    if not data:
        raise HTTPException(status_code=400, detail="Nothing to update")

    updated = repository.update(user.db, user.id, data)
    if not updated:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"status": "success", "data": updated}
