"""Request/response schemas for the LeetRepeat API."""

from typing import List, Optional
from pydantic import BaseModel, Field


# ---- Problems ----

class AddProblemRequest(BaseModel):
    url: str = Field(..., min_length=1, max_length=2000)
    title: Optional[str] = Field(default=None, max_length=512)


class ProblemSummary(BaseModel):
    problem_id: str
    url: str
    title: str
    created_at: str
    easiness_factor: float
    repetition_count: int
    interval_days: int
    next_review_at: str
    last_reviewed_at: Optional[str] = None
    due_label: str


class ProblemsResponse(BaseModel):
    total: int
    problems: List[ProblemSummary]


# ---- Grading ----

class GradeRequest(BaseModel):
    grade: int = Field(..., ge=0, le=5, strict=True)


class GradeInfoSchema(BaseModel):
    grade: int
    label: str
    description: str


class GradesResponse(BaseModel):
    grades: List[GradeInfoSchema]


# ---- Queue ----

class QueueResponse(BaseModel):
    due_count: int
    upcoming_count: int
    total_problems: int
    total_reviews: int
    due: List[ProblemSummary]
    upcoming: List[ProblemSummary]


class StatusResponse(BaseModel):
    status: str
    version: str
    storage_backend: str
    problem_count: int
