"""Product catalog endpoints. Reads are public, writes need an editor role."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from src.auth.dependencies import CurrentUser, get_public_db, require_roles
from src.catalog import repository
from src.catalog.schemas import ProductForm, ProductUpdate
from src.config.settings import get_settings
from src.db.models import CATALOG_EDITOR_ROLES

router = APIRouter(prefix="/api/catalogue", tags=["Catalog"])

require_editor = require_roles(*CATALOG_EDITOR_ROLES)


def price_ttc(prix_ht: float, tva_pct: float | None, prix_ttc: float | None = None) -> float:
    """Explicit TTC price wins, otherwise derive it from HT and VAT (default rate when unset)."""
    if prix_ttc:
        return prix_ttc
    rate = tva_pct or get_settings().DEFAULT_TVA_PCT
    return round(prix_ht * (1 + rate / 100), 2)


@router.get("/familles", summary="List product families")
async def list_families(db: Any = Depends(get_public_db)):
    return {"status": "success", "data": repository.list_families(db)}


@router.get("/categories", summary="List product categories")
async def list_categories(famille_id: str | None = None, db: Any = Depends(get_public_db)):
    return {"status": "success", "data": repository.list_categories(db, famille_id)}


@router.get("/produits", summary="Search products", description="Filter by family, category, or a case-insensitive search on designation and reference.")
async def list_products(
    famille_id: str | None = None,
    categorie_id: str | None = None,
    search: str | None = None,
    db: Any = Depends(get_public_db),
):
    return {"status": "success", "data": repository.list_products(db, famille_id, categorie_id, search)}


@router.get("/produits/{produit_id}", summary="Get a product")
async def get_product(produit_id: str, db: Any = Depends(get_public_db)):
    produit = repository.get_product(db, produit_id)
    if not produit:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"status": "success", "data": produit}


@router.post("/produits", status_code=201, summary="Create a product")
async def create_product(body: ProductForm, user: CurrentUser = Depends(require_editor)):
    data = body.model_dump(exclude_none=True)
    data["prix_ttc"] = price_ttc(body.prix_ht, body.tva_pct, body.prix_ttc)
    return {"status": "success", "data": repository.create_product(user.db, data)}


@router.put("/produits/{produit_id}", summary="Update a product")
async def update_product(produit_id: str, body: ProductUpdate, user: CurrentUser = Depends(require_editor)):
    data = body.model_dump(exclude_unset=True)
    if not data:
        raise HTTPException(status_code=400, detail="Nothing to update")
    if body.prix_ht is not None:
        data["prix_ttc"] = price_ttc(body.prix_ht, body.tva_pct, body.prix_ttc)

    updated = repository.update_product(user.db, produit_id, data)
    if not updated:
        raise HTTPException(status_code=404, detail="Product not found")
    return {"status": "success", "data": updated}


@router.delete("/produits/{produit_id}", status_code=204, summary="Delete a product")
async def delete_product(produit_id: str, user: CurrentUser = Depends(require_editor)):
    if not repository.delete_product(user.db, produit_id):
        raise HTTPException(status_code=404, detail="Product not found")
