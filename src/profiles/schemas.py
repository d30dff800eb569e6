"""Pydantic schemas for profile requests and responses."""

from pydantic import BaseModel, Field


class UpdateProfileRequest(BaseModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=30)


class ProfileResponse(BaseModel):
    id: str
    email: str
    nom: str | None = None
    prenom: str | None = None
    role: str | None = None
    telephone: str | None = None
