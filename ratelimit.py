"""Per-client sliding-window rate limiting."""
import os
import time
from collections import defaultdict

from fastapi import Request

RATE_LIMIT_REQUESTS = int(os.environ.get("GRAMMR_RATE_LIMIT_REQUESTS", "30"))
RATE_LIMIT_WINDOW = int(os.environ.get("GRAMMR_RATE_LIMIT_WINDOW", "60"))
_rate_buckets: dict = defaultdict(list)
_rate_check_counter = 0


def get_rate_limit_key(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def rate_limit_check(key: str) -> bool:
    """Return True if the request is allowed, False if rate-limited."""
    now = time.time()
    cutoff = now - RATE_LIMIT_WINDOW
    _rate_buckets[key] = [t for t in _rate_buckets[key] if t > cutoff]
    if len(_rate_buckets[key]) >= RATE_LIMIT_REQUESTS:
        return False
    _rate_buckets[key].append(now)
    return True


def rate_limit_cleanup():
    """Drop idle clients every 100 checks."""
    global _rate_check_counter
    _rate_check_counter += 1
    if _rate_check_counter % 100 == 0:
        cutoff = time.time() - RATE_LIMIT_WINDOW
        stale = [key for key, ts in _rate_buckets.items() if not ts or ts[-1] < cutoff]
        for key in stale:
            del _rate_buckets[key]


def rate_limit_reset():
    global _rate_check_counter
    _rate_buckets.clear()
    _rate_check_counter = 0
