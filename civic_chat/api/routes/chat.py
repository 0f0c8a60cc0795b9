"""
Chat Routes - API endpoint for conversational interactions.

POST /api/chat answers a message, optionally enriched with live data
from public government APIs, and serves repeated questions from the
response cache.
"""
from fastapi import APIRouter, Depends

from civic_chat.api.dependencies import get_chat_service
from civic_chat.core.exceptions import ValidationError
from civic_chat.core.logging_config import get_logger
from civic_chat.core.validators import validate_message
from civic_chat.models.chat import ChatRequest, ChatResponse, ErrorResponse
from civic_chat.services.chat_service import ChatService

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/chat",
    tags=["Chat"],
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        503: {"model": ErrorResponse, "description": "LLM unavailable"}
    }
)


@router.post(
    "",
    response_model=ChatResponse,
    summary="Send a message to the assistant",
    description="""
    Send a question about Brazilian politics to the assistant.

    Include earlier turns in `context` to keep the conversation going.
    Messages mentioning elections, bills, Congress or recent events are
    enriched with live data from official sources (`realTime: true`);
    those replies are never cached.
    """
)
def send_message(
    request: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service)
) -> ChatResponse:
    """Process a user message and return the assistant's response."""
    is_valid, error = validate_message(request.message)
    if not is_valid:
        raise ValidationError(error, field="message")

    return chat_service.process_message(request)
