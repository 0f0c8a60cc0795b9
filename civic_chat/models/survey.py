"""
Request and Response models for the satisfaction survey API.

SurveySubmission is what clients post; SurveyResponse is the record
kept by the survey stores and returned to clients.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SurveySubmission(BaseModel):
    """
    Incoming survey payload.

    Unknown fields are rejected. The score must be a JSON integer;
    strings and floats are not coerced.
    """
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    score: int = Field(
        ...,
        strict=True,
        description="Satisfaction score from 0 to 10",
        examples=[9]
    )
    classification: Optional[str] = Field(
        default=None,
        description="Optional client-side classification; recomputed by the server"
    )
    reasons: Optional[List[str]] = Field(
        default=None,
        description="Reasons picked by the respondent"
    )
    feedback: Optional[str] = Field(
        default=None,
        description="Free text feedback"
    )
    submitted_at: Optional[str] = Field(
        default=None,
        alias="submittedAt",
        description="RFC 3339 submission time; server time is used when absent or invalid"
    )


class SurveyResponse(BaseModel):
    """
    A stored survey response.

    Immutable once created. `reasons` and `feedback` are left out of the
    serialized record when empty.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    score: int = Field(..., ge=0, le=10)
    classification: str
    reasons: Optional[List[str]] = None
    feedback: Optional[str] = None
    submitted_at: str = Field(..., alias="submittedAt")

    def to_record(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON shape."""
        record: Dict[str, Any] = {
            "score": self.score,
            "classification": self.classification,
        }
        if self.reasons:
            record["reasons"] = list(self.reasons)
        if self.feedback:
            record["feedback"] = self.feedback
        record["submittedAt"] = self.submitted_at
        return record


class SurveyListResponse(BaseModel):
    """Response model for GET /api/nps/responses."""
    responses: List[Dict[str, Any]] = Field(default_factory=list)
