"""Pydantic schemas for catalog product requests."""

from pydantic import BaseModel, Field


class ProductForm(BaseModel):
    designation: str = Field(..., min_length=1)
    reference: str = Field(..., min_length=1)
    famille_id: str
    categorie_id: str
    frequence: str | None = None
    prix_ht: float = Field(..., ge=0)
    prix_ttc: float | None = Field(default=None, ge=0)
    tva_pct: float | None = Field(default=None, ge=0)
    description: str | None = None
    stock: int | None = None
    image_url: str | None = None
    images_urls: list[str] | None = None
    actif: bool = True


class ProductUpdate(BaseModel):
    designation: str | None = Field(default=None, min_length=1)
    reference: str | None = Field(default=None, min_length=1)
    famille_id: str | None = None
    categorie_id: str | None = None
    frequence: str | None = None
    prix_ht: float | None = Field(default=None, ge=0)
    prix_ttc: float | None = Field(default=None, ge=0)
    tva_pct: float | None = Field(default=None, ge=0)
    description: str | None = None
    stock: int | None = None
    image_url: str | None = None
    images_urls: list[str] | None = None
    actif: bool | None = None
