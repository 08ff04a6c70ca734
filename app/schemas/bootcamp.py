"""Schemas Pydantic pour les bootcamps."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Career = Literal["Web Development", "Mobile Development", "UI/UX", "Data Science", "Business", "Other"]

_URL_PATTERN = r"^https?://[^\s/]+\.[^\s]+$"
_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class BootcampCreate(BaseModel):
    """Corps de POST /api/v1/bootcamps."""

    name: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    website: str | None = Field(None, pattern=_URL_PATTERN)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN)
    address: str = Field(..., min_length=1)
    careers: list[Career] = Field(..., min_length=1)
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False


class BootcampUpdate(BaseModel):
    """Corps de PUT /api/v1/bootcamps/:id -- tous les champs optionnels."""

    name: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = Field(None, min_length=1, max_length=500)
    website: str | None = Field(None, pattern=_URL_PATTERN)
    phone: str | None = Field(None, max_length=20)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN)
    address: str | None = Field(None, min_length=1)
    careers: list[Career] | None = Field(None, min_length=1)
    housing: bool | None = None
    job_assistance: bool | None = None
    job_guarantee: bool | None = None
    accept_gi: bool | None = None


class LocationSchema(BaseModel):
    latitude: float
    longitude: float
    formatted_address: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


class BootcampSummary(BaseModel):
    """Bootcamp reduit, embarque dans les cursus et avis."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str


class BootcampSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    slug: str | None = None
    description: str
    website: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str
    location: LocationSchema | None = None
    careers: list[str] = []
    average_rating: float | None = None
    average_cost: float | None = None
    photo: str | None = None
    housing: bool = False
    job_assistance: bool = False
    job_guarantee: bool = False
    accept_gi: bool = False
    created_at: datetime | None = None


class CourseBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    weeks: int
    tuition: float
    minimum_skill: str


class BootcampWithCourses(BootcampSchema):
    """Bootcamp avec ses cursus (liste publique)."""

    courses: list[CourseBrief] = []
