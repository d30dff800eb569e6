"""Team roster endpoint."""

from datetime import datetime

from fastapi import APIRouter, Depends

from src.auth.dependencies import CurrentUser, get_current_user
from src.profiles import repository as profiles_repository
from src.team.service import build_roster
from src.visits import repository as visits_repository

router = APIRouter(prefix="/api/equipe", tags=["Team"])


@router.get("", summary="List team members", description="All profiles ordered by last name, with total, weekly and monthly visit counts.")
async def list_team(user: CurrentUser = Depends(get_current_user)):
    profiles = profiles_repository.list_all(user.db)
    visits = visits_repository.list_for_aggregation(user.db, "id, commercial_id, date_visite")
    return {"status": "success", "data": build_roster(profiles, visits, datetime.now())}
