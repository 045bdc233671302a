"""LRU response caches for analyses and inflection tables.

Entries are (timestamp, result) pairs in an OrderedDict; reads refresh recency,
writes evict the oldest entry once the cache is full.
"""
import os
import time
import hashlib
from collections import OrderedDict

from log import get_logger

logger = get_logger("grammr.cache")

CACHE_MAX = int(os.environ.get("GRAMMR_CACHE_MAX", "500"))
CACHE_TTL = int(os.environ.get("GRAMMR_CACHE_TTL", str(3600 * 24)))  # 24h

_analysis_cache: OrderedDict = OrderedDict()
_inflection_cache: OrderedDict = OrderedDict()

_caches = {
    "analysis": _analysis_cache,
    "inflection": _inflection_cache,
}


def analysis_cache_key(phrase: str, spoken: str, learned: str, semantic: bool) -> str:
    raw = f"{phrase.strip().lower()}|{spoken}|{learned}|{int(semantic)}"
    return hashlib.sha256(raw.encode()).hexdigest()


def inflection_cache_key(token_text: str, language_code: str) -> str:
    raw = f"{token_text.strip().lower()}|{language_code}"
    return hashlib.sha256(raw.encode()).hexdigest()


def cache_get(name: str, key: str):
    cache = _caches[name]
    entry = cache.get(key)
    if entry is None:
        return None
    ts, result = entry
    if time.time() - ts > CACHE_TTL:
        cache.pop(key, None)
        return None
    cache.move_to_end(key)
    return result


def cache_put(name: str, key: str, result):
    cache = _caches[name]
    cache[key] = (time.time(), result)
    cache.move_to_end(key)
    if len(cache) > CACHE_MAX:
        cache.popitem(last=False)
        logger.debug("Evicted oldest cache entry", extra={"component": "cache", "detail": name})


def cache_clear():
    for cache in _caches.values():
        cache.clear()


def cache_stats() -> dict:
    return {
        "max": CACHE_MAX,
        "ttl_hours": CACHE_TTL / 3600,
        "entries": {name: len(cache) for name, cache in _caches.items()},
    }
