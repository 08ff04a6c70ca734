"""Schemas Pydantic pour les avis."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.bootcamp import BootcampSummary


class ReviewCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    text: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=10)


class ReviewUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=100)
    text: str | None = Field(None, min_length=1)
    rating: int | None = Field(None, ge=1, le=10)


class ReviewSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    text: str
    rating: int
    bootcamp_id: int
    user_id: int
    bootcamp: BootcampSummary | None = None
    created_at: datetime | None = None
