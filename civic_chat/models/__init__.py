"""
Models module - Pydantic schemas for data validation.

This module defines:
- Request models: Input validation for API endpoints
- Response models: Output formatting for API responses
- Survey records: The shape persisted by the survey stores
"""
from civic_chat.models.chat import (
    CacheClearResponse,
    CacheInfo,
    ChatContext,
    ChatRequest,
    ChatResponse,
    ErrorResponse,
    HealthResponse,
    Source,
    SourcesResponse,
)
from civic_chat.models.survey import (
    SurveyListResponse,
    SurveyResponse,
    SurveySubmission,
)

__all__ = [
    "CacheClearResponse",
    "CacheInfo",
    "ChatContext",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "Source",
    "SourcesResponse",
    "SurveyListResponse",
    "SurveyResponse",
    "SurveySubmission",
]
