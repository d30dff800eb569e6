"""Analytics endpoints for the manager dashboards."""

import logging

from fastapi import APIRouter, Depends, Query

from src.analytics import service
from src.auth.dependencies import CurrentUser, get_current_user
from src.profiles import repository as profiles_repository
from src.visits import repository as visits_repository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/performance", summary="Monthly visits and conversions")
async def performance(
    commercial_id: str | None = Query(None, alias="commercialId"),
    societe: str | None = None,
    user: CurrentUser = Depends(get_current_user),
):
    visits = visits_repository.list_for_aggregation(
        user.db, "date_visite, statut_action, statut_visite",
        commercial_id=commercial_id, entreprise=societe,
    )
    return {"status": "success", "data": service.monthly_performance(visits)}


@router.get("/revenue", summary="Monthly revenue against target")
async def revenue(
    commercial_id: str | None = Query(None, alias="commercialId"),
    societe: str | None = None,
    user: CurrentUser = Depends(get_current_user),
):
    visits = visits_repository.list_for_aggregation(
        user.db, "date_visite, statut_action, statut_visite, montant",
        commercial_id=commercial_id, entreprise=societe,
    )
    return {"status": "success", "data": service.monthly_revenue(visits)}


@router.get("/societes", summary="Companies with at least one visit")
async def societes(user: CurrentUser = Depends(get_current_user)):
    visits = visits_repository.list_for_aggregation(user.db, "entreprise")
    return {"status": "success", "data": service.distinct_companies(visits)}


@router.get("/team", summary="Per-commercial performance ranking")
async def team(societe: str | None = None, user: CurrentUser = Depends(get_current_user)):
    profiles = profiles_repository.list_commercials(user.db)
    if not profiles:
        return {"status": "success", "data": []}

    visits = visits_repository.list_for_aggregation(
        user.db, "commercial_id, statut_action, statut_visite, montant", entreprise=societe,
    )
    rows = service.team_performance(profiles, visits)
    logger.debug("Team performance computed for %d commercials", len(rows))
    return {"status": "success", "data": rows}
