"""
Input Validators - Validation and normalization of client input.

This module provides:
- Chat message validation
- Survey score classification
- Survey reason sanitization
- Submission timestamp parsing
"""
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from civic_chat.core.logging_config import get_logger

logger = get_logger(__name__)

MAX_REASONS = 5

DETRACTOR = "detractor"
NEUTRAL = "neutral"
PROMOTER = "promoter"

SUBMITTED_AT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def validate_message(message: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Validate a chat message.

    The message itself is never rewritten: the cache fingerprint is
    derived from the exact text the client sent.

    Args:
        message: Raw user message

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not message or not message.strip():
        return False, "Field 'message' is required"

    return True, None


def classify_score(score: int) -> str:
    """
    Map a 0-10 satisfaction score to its category.

    0-6 is a detractor, 7-8 neutral, 9-10 a promoter.
    """
    if score <= 6:
        return DETRACTOR
    if score <= 8:
        return NEUTRAL
    return PROMOTER


def resolve_classification(score: int, client_value: Optional[str]) -> str:
    """
    Decide the stored classification for a submission.

    The client may send a classification, but it is only kept when it
    agrees with the score. Any other value is replaced without error.
    """
    expected = classify_score(score)
    supplied = (client_value or "").strip().lower()

    if supplied and supplied != expected:
        logger.debug(
            f"Client classification '{supplied}' overridden by '{expected}' (score={score})"
        )
    return expected


def sanitize_reasons(reasons: Optional[Iterable[str]]) -> Optional[List[str]]:
    """
    Clean the list of reasons picked in the survey.

    - Strips surrounding whitespace
    - Drops empty entries
    - Removes exact duplicates, keeping the first occurrence
    - Keeps at most MAX_REASONS entries

    Returns:
        The cleaned list, or None when nothing is left
    """
    if not reasons:
        return None

    cleaned: List[str] = []
    seen = set()

    for reason in reasons:
        trimmed = reason.strip()
        if not trimmed or trimmed in seen:
            continue

        cleaned.append(trimmed)
        seen.add(trimmed)

        if len(cleaned) >= MAX_REASONS:
            break

    return cleaned or None


def format_submitted_at(moment: datetime) -> str:
    """Render a timestamp in the stored UTC format."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(SUBMITTED_AT_FORMAT)


def parse_submitted_at(value: Optional[str], now: Optional[datetime] = None) -> str:
    """
    Normalize a client-supplied submission time.

    RFC 3339 values are converted to UTC. Missing or unparseable values
    fall back to the current time.

    Args:
        value: Timestamp sent by the client, may be empty
        now: Current time, defaults to datetime.now(timezone.utc)

    Returns:
        Timestamp formatted as YYYY-MM-DDTHH:MM:SSZ
    """
    if now is None:
        now = datetime.now(timezone.utc)

    if value:
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            logger.debug(f"Ignoring unparseable submittedAt: {value[:40]}")
        else:
            if parsed.tzinfo is not None:
                return format_submitted_at(parsed)
            logger.debug(f"Ignoring submittedAt without offset: {value[:40]}")

    return format_submitted_at(now)
