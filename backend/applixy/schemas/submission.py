"""Submission Schemas — form payloads for Add Opportunity / Add Mentor / Add Resource.

Invariants:
    - Schemas bound sizes and shapes only; required-field rules live in
      core/submission.py so they apply to every caller, not just HTTP
    - to_fields() drops unset values: absent fields stay absent in the document
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class _Form(BaseModel):
    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True, exclude={"category"})


class OpportunitySubmission(_Form):
    name: str | None = Field(None, max_length=300)
    organization: str | None = Field(None, max_length=300)
    description: str | None = Field(None, max_length=5_000)
    application_deadline: str | None = Field(None, max_length=100)
    award_amount: int | str | None = None
    target_demographic: list[str] | None = Field(None, max_length=50)
    website: str | None = Field(None, max_length=2_000)
    type: str | None = Field(None, max_length=50)
    category: str | None = Field(
        None, max_length=100, pattern=r"^[A-Za-z0-9_\-]+$",
        description="Target collection; defaults to the scholarship collection",
    )

    @field_validator("award_amount")
    @classmethod
    def non_negative_award(cls, v):
        if isinstance(v, int) and v < 0:
            raise ValueError("award_amount cannot be negative")
        return v


class MentorSubmission(_Form):
    name: str | None = Field(None, max_length=200)
    specialty: str | list[str] | None = None
    email: str | None = Field(None, max_length=320)
    phone: str | None = Field(None, max_length=50)
    description: str | None = Field(None, max_length=5_000)
    experience: str | None = Field(None, max_length=200)
    website: str | None = Field(None, max_length=2_000)


class ResourceSubmission(_Form):
    name: str | None = Field(None, max_length=300)
    description: str | None = Field(None, max_length=5_000)
    link: str | None = Field(None, max_length=2_000)
    category: str | None = Field(None, max_length=100)
    icon: str | None = Field(None, max_length=100)
    isExternal: bool | None = None

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SubmissionResponse(BaseModel):
    id: str
    collection: str
