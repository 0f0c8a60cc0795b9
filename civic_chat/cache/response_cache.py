"""
Response Cache - Time-bounded cache of chat replies.

Entries are keyed by a conversation fingerprint (message plus ordered
context). Expiry is checked lazily when an entry is read:
- Expired entries look absent to readers
- They are never purged in the background
- They still count toward size() until overwritten or cleared
"""
import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from civic_chat.core.locks import ReadWriteLock
from civic_chat.core.logging_config import get_logger, truncate

logger = get_logger(__name__)

FINGERPRINT_SEPARATOR = "_"


@dataclass(frozen=True)
class CacheEntry:
    """A cached payload and the moment it was stored."""
    fingerprint: str
    payload: Any
    created_at: float


class TTLCache:
    """
    Thread-safe mapping from fingerprint to result with a maximum age.

    Readers share a ReadWriteLock; set() and clear() take it exclusively.

    Example:
        >>> cache = TTLCache(max_age_seconds=300)
        >>> cache.set("hello_", {"reply": "hi"})
        >>> cache.get("hello_")
        ({'reply': 'hi'}, True)
    """

    def __init__(
        self,
        max_age_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize the cache.

        Args:
            max_age_seconds: Entries older than this are treated as absent
            clock: Time source in seconds; injectable for tests
        """
        self._max_age = max_age_seconds
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

        logger.info(f"TTLCache initialized: max_age={max_age_seconds}s")

    @property
    def max_age_seconds(self) -> float:
        return self._max_age

    def get(self, fingerprint: str) -> Tuple[Optional[Any], bool]:
        """
        Look up a fingerprint.

        Returns:
            (payload, True) while the entry is at most max_age old,
            (None, False) if it is missing or expired
        """
        with self._lock.read():
            entry = self._entries.get(fingerprint)
            if entry is None:
                return None, False

            if self._clock() - entry.created_at > self._max_age:
                return None, False

        logger.debug(f"[CACHE HIT] {truncate(fingerprint)}")
        return entry.payload, True

    def set(self, fingerprint: str, payload: Any) -> None:
        """Insert or overwrite an entry, stamping it with the current time."""
        with self._lock.write():
            self._entries[fingerprint] = CacheEntry(
                fingerprint=fingerprint,
                payload=payload,
                created_at=self._clock(),
            )
        logger.debug(f"[CACHE SAVE] {truncate(fingerprint)}")

    def clear(self) -> int:
        """
        Drop every entry.

        Returns:
            Number of entries held before clearing
        """
        with self._lock.write():
            previous = len(self._entries)
            self._entries = {}

        logger.info(f"Cache cleared: {previous} entries removed")
        return previous

    def size(self) -> int:
        """Entry count, including expired entries not yet overwritten."""
        with self._lock.read():
            return len(self._entries)


def build_fingerprint(message: str, context: Iterable[Mapping[str, Any]] = ()) -> str:
    """
    Derive the cache key for a chat request.

    The key is the raw message, the separator, and the compact JSON form
    of the context turns in their original order (empty when there is no
    context). Each turn is serialized as role, content, text.
    """
    turns = [
        {
            "role": turn.get("role", "") or "",
            "content": turn.get("content", "") or "",
            "text": turn.get("text", "") or "",
        }
        for turn in context
    ]

    serialized = ""
    if turns:
        serialized = json.dumps(turns, ensure_ascii=False, separators=(",", ":"))

    return f"{message}{FINGERPRINT_SEPARATOR}{serialized}"
