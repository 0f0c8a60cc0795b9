"""
API Routes module - Endpoint definitions.

Each file in this module defines routes for a specific domain:
- chat.py    : Conversational endpoint
- health.py  : Health check endpoint
- sources.py : Official source catalogue and cache maintenance
- survey.py  : Satisfaction survey endpoints
"""
from civic_chat.api.routes.chat import router as chat_router
from civic_chat.api.routes.health import router as health_router
from civic_chat.api.routes.sources import router as sources_router
from civic_chat.api.routes.survey import router as survey_router

__all__ = [
    "chat_router",
    "health_router",
    "sources_router",
    "survey_router",
]
