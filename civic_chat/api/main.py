"""
FastAPI Application Entry Point.

This module builds and configures the FastAPI application.
It handles:
1. Construction of the cache, aggregator, LLM client and survey store
2. Router registration
3. Middleware configuration (audit, security headers, CORS)
4. Exception handlers
5. Shutdown of the survey store and aggregator

Run with: uvicorn civic_chat.api.main:create_app --factory --reload
"""
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from civic_chat.api.routes import chat_router, health_router, sources_router, survey_router
from civic_chat.cache import TTLCache
from civic_chat.core.audit import AuditMiddleware, SecurityHeadersMiddleware
from civic_chat.core.config import Settings, get_settings
from civic_chat.core.exceptions import ChatbotException
from civic_chat.core.logging_config import get_logger, setup_logging
from civic_chat.llm.client import LLMClient
from civic_chat.realtime import RealTimeAggregator
from civic_chat.services.chat_service import ChatService
from civic_chat.services.survey_service import SurveyService
from civic_chat.storage import SurveyStore, create_survey_store

logger = get_logger(__name__)

APP_VERSION = "1.0.0"


def create_app(
    settings: Optional[Settings] = None,
    *,
    cache: Optional[TTLCache] = None,
    aggregator: Optional[RealTimeAggregator] = None,
    llm_client: Optional[LLMClient] = None,
    survey_store: Optional[SurveyStore] = None
) -> FastAPI:
    """
    Build the application and its collaborators.

    Any collaborator can be passed in (tests use fakes); the rest are
    created from settings.

    Raises:
        StoreCorruptedError: If the survey file cannot be decoded
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_dir or None)

    if cache is None:
        cache = TTLCache(max_age_seconds=settings.cache_max_age_seconds)
    if aggregator is None:
        aggregator = RealTimeAggregator(
            timeout_seconds=settings.realtime_timeout_seconds
        )
    if survey_store is None:
        survey_store = create_survey_store(settings)
    if llm_client is None:
        llm_client = LLMClient(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} in {settings.app_env} mode")
        logger.info(f"LLM Model: {settings.gemini_model}")
        logger.info(f"Survey backend: {survey_store.backend_name}")
        logger.info(f"Cache TTL: {settings.cache_max_age_seconds}s")

        yield

        logger.info(f"Shutting down {settings.app_name}")
        try:
            survey_store.close()
        except Exception as e:
            logger.error(f"Error closing survey store: {e}")
        aggregator.close()

    app = FastAPI(
        title="Civic Chat API",
        description="""
        Neutral assistant for questions about Brazilian politics.

        ## Features

        - **Chat** with conversation context, backed by Gemini
        - **Live data** from Câmara, Senado, TSE and Planalto for current topics
        - **Response cache** for repeated questions
        - **Satisfaction survey** storage (local file or Firestore)
        """,
        version=APP_VERSION,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.cache = cache
    app.state.chat_service = ChatService(llm_client, cache, aggregator)
    app.state.survey_service = SurveyService(
        survey_store, max_payload_bytes=settings.survey_max_payload_bytes
    )

    # ============================================================
    # Middleware Configuration (Order matters!)
    # ============================================================

    app.add_middleware(SecurityHeadersMiddleware)

    if settings.enable_audit_logging:
        app.add_middleware(AuditMiddleware)
        logger.info("Audit logging middleware enabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID", "X-Response-Time"],
    )

    # ============================================================
    # Exception Handlers
    # ============================================================

    @app.exception_handler(ChatbotException)
    async def chatbot_exception_handler(request: Request, exc: ChatbotException):
        """Handle all custom chatbot exceptions."""
        content = exc.to_dict()
        content["timestamp"] = datetime.utcnow().isoformat()
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Malformed request bodies are a client error (400)."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Could not decode the request body",
                "details": None,
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handle uncaught exceptions globally.

        Detailed error information is only included in development mode.
        """
        logger.exception(f"Unhandled exception: {exc}")

        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_error",
                "message": "An unexpected error occurred",
                "details": str(exc) if settings.is_development() else None,
                "timestamp": datetime.utcnow().isoformat()
            }
        )

    # ============================================================
    # Routers
    # ============================================================

    app.include_router(health_router)
    app.include_router(chat_router)
    app.include_router(sources_router)
    app.include_router(survey_router)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "civic_chat.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.port,
        reload=settings.is_development()
    )
