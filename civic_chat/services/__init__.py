"""
Services module - Business logic layer.

- chat_service.py   : Cache check, live data enrichment, LLM call
- survey_service.py : Survey validation and storage
"""
from civic_chat.services.chat_service import ChatService
from civic_chat.services.survey_service import SurveyService

__all__ = [
    "ChatService",
    "SurveyService",
]
