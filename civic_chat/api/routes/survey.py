"""
Survey Routes - Satisfaction (NPS) survey endpoints.

- POST /api/nps/responses : submit one response (201 with the stored record)
- GET  /api/nps/responses : list stored responses

List order depends on the storage backend: the file backend returns
oldest first, Firestore newest first.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from civic_chat.api.dependencies import get_survey_service
from civic_chat.core.logging_config import get_logger
from civic_chat.models.chat import ErrorResponse
from civic_chat.models.survey import SurveyListResponse
from civic_chat.services.survey_service import SurveyService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/nps",
    tags=["Survey"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid submission"},
        503: {"model": ErrorResponse, "description": "Survey storage unavailable"}
    }
)


@router.post(
    "/responses",
    status_code=201,
    summary="Submit a survey response",
    description="""
    Body: `{"score": 0-10, "reasons": [...], "feedback": "...", "submittedAt": "RFC 3339"}`.

    The classification is computed from the score; a client-supplied
    value that disagrees is replaced. Unknown fields are rejected.
    """
)
async def submit_response(
    request: Request,
    survey_service: SurveyService = Depends(get_survey_service)
) -> JSONResponse:
    body = await request.body()
    entry = await run_in_threadpool(survey_service.submit, body)
    return JSONResponse(status_code=201, content=entry.to_record())


@router.get(
    "/responses",
    response_model=SurveyListResponse,
    summary="List survey responses"
)
def list_responses(
    survey_service: SurveyService = Depends(get_survey_service)
) -> SurveyListResponse:
    responses = survey_service.list_responses()
    logger.debug(f"Listing {len(responses)} survey responses")
    return SurveyListResponse(responses=[entry.to_record() for entry in responses])
