"""
FastAPI dependencies.

Services are created once in create_app() and stored on app.state;
routes receive them through these functions.
"""
from fastapi import Request

from civic_chat.cache import TTLCache
from civic_chat.services.chat_service import ChatService
from civic_chat.services.survey_service import SurveyService


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_survey_service(request: Request) -> SurveyService:
    return request.app.state.survey_service


def get_cache(request: Request) -> TTLCache:
    return request.app.state.cache
