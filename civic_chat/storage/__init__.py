"""
Storage Package - Durable survey response storage.

Two interchangeable backends:

## File (default)
- One JSON array on local disk
- Crash-safe rewrite on every add
- Lists oldest first

## Firestore
- One document per response
- Lists newest first

Use `create_survey_store(settings)` to build the configured backend.
"""
from civic_chat.core.config import Settings
from civic_chat.core.logging_config import get_logger
from civic_chat.storage.base import NEWEST_FIRST, OLDEST_FIRST, SurveyStore
from civic_chat.storage.file_store import FileSurveyStore
from civic_chat.storage.firestore_store import (
    FirestoreSurveyStore,
    create_firestore_client,
)

logger = get_logger(__name__)


def create_survey_store(settings: Settings) -> SurveyStore:
    """
    Build the survey store selected by SURVEY_BACKEND.

    Returns:
        - FirestoreSurveyStore if SURVEY_BACKEND=firestore
        - FileSurveyStore otherwise
    """
    if settings.survey_backend == "firestore":
        client = create_firestore_client(settings)
        return FirestoreSurveyStore(client, settings.firestore_collection)

    return FileSurveyStore(settings.survey_store_path)


__all__ = [
    "NEWEST_FIRST",
    "OLDEST_FIRST",
    "SurveyStore",
    "FileSurveyStore",
    "FirestoreSurveyStore",
    "create_firestore_client",
    "create_survey_store",
]
