"""Schemas Pydantic pour les cursus."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.bootcamp import BootcampSummary

SkillLevel = Literal["beginner", "intermediate", "advanced"]


class CourseCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    weeks: int = Field(..., ge=1)
    tuition: float = Field(..., ge=0)
    minimum_skill: SkillLevel
    scholarship_available: bool = False


class CourseUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1)
    weeks: int | None = Field(None, ge=1)
    tuition: float | None = Field(None, ge=0)
    minimum_skill: SkillLevel | None = None
    scholarship_available: bool | None = None


class CourseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    weeks: int
    tuition: float
    minimum_skill: str
    scholarship_available: bool = False
    bootcamp_id: int
    user_id: int
    bootcamp: BootcampSummary | None = None
    created_at: datetime | None = None
