"""
Job Pydantic schemas.
"""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from hiring_dashboard.schemas.base import CompanyScopedRead


JobStatusLiteral = Literal["draft", "published", "closed"]


class SalaryRange(BaseModel):
    """Optional salary band. Currency has no default."""

    min: Optional[float] = Field(default=None, ge=0)
    max: Optional[float] = Field(default=None, ge=0)
    currency: Optional[str] = Field(default=None, max_length=10)

    @model_validator(mode="after")
    def check_bounds(self) -> "SalaryRange":
        if self.min is not None and self.max is not None and self.min > self.max:
            raise ValueError("Salary minimum cannot exceed maximum")
        return self


class JobCreate(BaseModel):
    """Schema for creating a job posting."""

    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)
    status: JobStatusLiteral = "draft"
    salary_range: Optional[SalaryRange] = None


class JobUpdate(BaseModel):
    """Schema for updating a job posting. All fields optional."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = Field(default=None, max_length=255)
    status: Optional[JobStatusLiteral] = None
    salary_range: Optional[SalaryRange] = None


class JobRead(CompanyScopedRead):
    """Schema for reading job data."""

    title: str
    description: Optional[str] = None
    requirements: Optional[str] = None
    location: Optional[str] = None
    status: str
    salary_range: Optional[SalaryRange] = None
    created_by: Optional[UUID] = None
