"""
Survey Service - Accepts and lists satisfaction survey responses.

Submissions are validated and normalized here before they reach the
store:
- Score is required and must be an integer from 0 to 10
- Classification is always recomputed from the score
- Reasons are trimmed, de-duplicated and capped
- Submission time is normalized to UTC
"""
import json
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from civic_chat.core.exceptions import ValidationError
from civic_chat.core.logging_config import get_logger
from civic_chat.core.validators import (
    parse_submitted_at,
    resolve_classification,
    sanitize_reasons,
)
from civic_chat.models.survey import SurveyResponse, SurveySubmission
from civic_chat.storage.base import SurveyStore

logger = get_logger(__name__)

DEFAULT_MAX_PAYLOAD_BYTES = 64 * 1024


class SurveyService:
    """
    Service for survey submissions.

    Example:
        >>> service = SurveyService(FileSurveyStore("data/nps-responses.json"))
        >>> entry = service.submit(b'{"score": 9, "reasons": ["Clareza"]}')
        >>> entry.classification
        'promoter'
    """

    def __init__(self, store: SurveyStore, max_payload_bytes: int = DEFAULT_MAX_PAYLOAD_BYTES):
        self.store = store
        self.max_payload_bytes = max_payload_bytes
        logger.info(f"SurveyService initialized with {store.backend_name} backend")

    def submit(self, body: bytes) -> SurveyResponse:
        """
        Validate a raw JSON body and store the resulting response.

        Raises:
            ValidationError: If the payload is malformed, too large,
                has unknown fields, or the score is missing/out of range
            StoreUnavailableError: If the store could not be written
        """
        submission = self.parse_submission(body)
        entry = self.build_entry(submission)
        self.store.add(entry)
        return entry

    def parse_submission(self, body: bytes) -> SurveySubmission:
        if len(body) > self.max_payload_bytes:
            raise ValidationError("Survey payload is too large")

        try:
            payload = json.loads(body or b"null")
        except ValueError:
            raise ValidationError("Could not parse the survey payload")

        if not isinstance(payload, dict):
            raise ValidationError("Survey payload must be a JSON object")

        if payload.get("score") is None:
            raise ValidationError("The score is required", field="score")

        try:
            submission = SurveySubmission.model_validate(payload)
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first.get("loc", ())) or None
            raise ValidationError("Could not parse the survey payload", field=field)

        if not 0 <= submission.score <= 10:
            raise ValidationError("The score must be between 0 and 10", field="score")

        return submission

    def build_entry(self, submission: SurveySubmission) -> SurveyResponse:
        feedback: Optional[str] = (submission.feedback or "").strip() or None

        return SurveyResponse(
            score=submission.score,
            classification=resolve_classification(
                submission.score, submission.classification
            ),
            reasons=sanitize_reasons(submission.reasons),
            feedback=feedback,
            submitted_at=parse_submitted_at(submission.submitted_at),
        )

    def list_responses(self) -> List[SurveyResponse]:
        """Stored responses in the backend's order."""
        return self.store.list()
