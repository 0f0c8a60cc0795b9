"""
Cache Package - Short-lived storage of chat replies.

Example:
    >>> from civic_chat.cache import TTLCache, build_fingerprint
    >>> cache = TTLCache(max_age_seconds=300)
    >>> key = build_fingerprint("O que é o PIB?", [])
"""
from civic_chat.cache.response_cache import CacheEntry, TTLCache, build_fingerprint

__all__ = [
    "CacheEntry",
    "TTLCache",
    "build_fingerprint",
]
