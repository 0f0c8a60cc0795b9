"""
Firestore Survey Store - Survey responses kept in a Firestore collection.

Each response becomes one document with a server-assigned id and a
`createdAt` stamp separate from the client's `submittedAt`. Listing
returns documents ordered by `submittedAt`, newest first.

Documents written by other tools may hold the score as an integer or a
float; anything that is not an integral number is skipped.
"""
import threading
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

import firebase_admin
from firebase_admin import credentials, firestore
from google.cloud.firestore import Query

from civic_chat.core.config import Settings
from civic_chat.core.exceptions import StoreUnavailableError
from civic_chat.core.logging_config import get_logger
from civic_chat.core.locks import ReadWriteLock
from civic_chat.core.validators import format_submitted_at
from civic_chat.models.survey import SurveyResponse
from civic_chat.storage.base import NEWEST_FIRST, SurveyStore

logger = get_logger(__name__)

DEFAULT_COLLECTION = "nps_responses"

_firebase_lock = threading.Lock()


class FirestoreSurveyStore(SurveyStore):
    """
    Firestore-backed survey store.

    The Firestore client is passed in; see create_firestore_client() for
    building one from Settings.

    Example:
        >>> store = FirestoreSurveyStore(client, "nps_responses")
        >>> store.add(response)
        >>> store.list()[0]  # newest submission
    """

    backend_name = "firestore"
    ordering = NEWEST_FIRST

    def __init__(self, client: Any, collection: str = DEFAULT_COLLECTION):
        self._client = client
        self.collection = collection or DEFAULT_COLLECTION
        self._lock = ReadWriteLock()

        logger.info(f"FirestoreSurveyStore initialized: collection={self.collection}")

    def add(self, entry: SurveyResponse) -> None:
        document = {
            "score": entry.score,
            "classification": entry.classification,
            "reasons": list(entry.reasons) if entry.reasons else None,
            "feedback": entry.feedback or "",
            "submittedAt": entry.submitted_at,
            "createdAt": format_submitted_at(datetime.now(timezone.utc)),
        }

        with self._lock.write():
            try:
                self._client.collection(self.collection).add(document)
            except Exception as e:
                logger.error(f"Failed to add survey response to Firestore: {e}")
                raise StoreUnavailableError("Could not save the survey response") from e

        logger.info(
            f"Survey response saved to Firestore: score={entry.score}, "
            f"classification={entry.classification}"
        )

    def list(self) -> List[SurveyResponse]:
        """All responses ordered by submittedAt, newest first."""
        with self._lock.read():
            try:
                query = self._client.collection(self.collection).order_by(
                    "submittedAt", direction=Query.DESCENDING
                )
                snapshots = list(query.stream())
            except Exception as e:
                logger.error(f"Failed to query survey responses from Firestore: {e}")
                raise StoreUnavailableError("Could not load survey responses") from e

        responses: List[SurveyResponse] = []
        for snapshot in snapshots:
            entry = self._decode_document(snapshot)
            if entry is not None:
                responses.append(entry)
        return responses

    def close(self) -> None:
        close = getattr(self._client, "close", None)
        if callable(close):
            close()
        logger.info("FirestoreSurveyStore closed")

    def _decode_document(self, snapshot: Any) -> Optional[SurveyResponse]:
        doc_id = getattr(snapshot, "id", "?")
        data = snapshot.to_dict() or {}

        score = coerce_score(data.get("score"))
        if score is None:
            logger.warning(
                f"Skipping Firestore document {doc_id}: "
                f"invalid score type {type(data.get('score')).__name__}"
            )
            return None

        try:
            return SurveyResponse(
                score=score,
                classification=_get_string(data, "classification"),
                reasons=_get_strings(data, "reasons"),
                feedback=_get_string(data, "feedback") or None,
                submitted_at=_get_string(data, "submittedAt"),
            )
        except ValueError as e:
            logger.warning(f"Skipping Firestore document {doc_id}: {e}")
            return None


def coerce_score(value: Any) -> Optional[int]:
    """
    Read a stored score.

    Integers are returned as-is and integral floats are converted.
    Booleans, fractional floats and other types give None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _get_string(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _get_strings(data: Mapping[str, Any], key: str) -> Optional[List[str]]:
    value = data.get(key)
    if not isinstance(value, list):
        return None
    strings = [item for item in value if isinstance(item, str)]
    return strings or None


def build_service_account_info(settings: Settings) -> Dict[str, str]:
    """Service-account credentials dict in the layout Google expects."""
    return {
        "type": "service_account",
        "project_id": settings.firebase_project_id,
        "private_key_id": "",
        "private_key": settings.firebase_private_key,
        "client_email": settings.firebase_client_email,
        "client_id": settings.firebase_client_id,
        "token_uri": settings.firebase_token_uri,
    }


def create_firestore_client(settings: Settings) -> Any:
    """
    Build a Firestore client through the Firebase Admin SDK.

    Raises:
        ValueError: If the Firebase settings are incomplete
    """
    if not settings.firebase_project_id:
        raise ValueError("FIREBASE_PROJECT_ID is not configured")
    if not settings.firebase_client_email or not settings.firebase_private_key:
        raise ValueError("FIREBASE_CLIENT_EMAIL and FIREBASE_PRIVATE_KEY are required")

    with _firebase_lock:
        try:
            app = firebase_admin.get_app()
        except ValueError:
            cred = credentials.Certificate(build_service_account_info(settings))
            app = firebase_admin.initialize_app(
                cred, {"projectId": settings.firebase_project_id}
            )
            logger.info(f"Firebase app initialized: project={settings.firebase_project_id}")

    return firestore.client(app)
