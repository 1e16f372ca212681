"""
Pydantic models for the Canvas planner API.

Only the fields the viewer needs are declared; everything else in the
payload is ignored.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Submissions(BaseModel):
    """Submission summary attached to a planner item."""

    model_config = ConfigDict(extra="ignore")

    submitted: bool = False


class Plannable(BaseModel):
    """The assignment, quiz or discussion behind a planner item."""

    model_config = ConfigDict(extra="ignore")

    title: str = ""
    due_at: datetime | None = None


class PlannerItem(BaseModel):
    """One entry from GET /api/v1/planner/items."""

    model_config = ConfigDict(extra="ignore")

    context_name: str = ""
    html_url: str = ""
    submissions: Submissions = Field(default_factory=Submissions)
    plannable: Plannable

    @field_validator("submissions", mode="before")
    @classmethod
    def _false_means_unsubmittable(cls, value):
        # Canvas sends `false` for items that take no submission
        if value is False or value is None:
            return Submissions()
        return value

    @property
    def submitted(self) -> bool:
        return self.submissions.submitted
