"""grammr: translate a phrase and study its grammar, word by word."""
import time
from collections import defaultdict, deque

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from log import get_logger
from interpolation import TokensNotFoundError
from routes import router

logger = get_logger("grammr.backend")

app = FastAPI(title="grammr", description="Token alignment and inflection tables for language learners")

# --- Request latency tracking ---
LATENCY_WINDOW = 200  # samples kept per endpoint
_latencies: dict = defaultdict(lambda: deque(maxlen=LATENCY_WINDOW))


def record_latency(endpoint: str, duration_ms: float):
    _latencies[endpoint].append(duration_ms)


def get_latency_stats() -> dict:
    stats = {}
    for endpoint, samples in _latencies.items():
        if not samples:
            continue
        ordered = sorted(samples)
        p95 = ordered[min(len(ordered) - 1, int(len(ordered) * 0.95))]
        stats[endpoint] = {
            "count": len(ordered),
            "avg_ms": round(sum(ordered) / len(ordered), 1),
            "p95_ms": round(p95, 1),
        }
    return stats


@app.middleware("http")
async def latency_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    path = request.url.path
    if path.startswith("/api/"):
        duration_ms = (time.perf_counter() - start) * 1000
        record_latency(path, duration_ms)
        logger.info("request", extra={
            "endpoint": path,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 1),
        })
    return response


@app.exception_handler(TokensNotFoundError)
async def tokens_not_found_handler(request: Request, exc: TokensNotFoundError):
    logger.warning("Analyzed tokens could not be aligned", extra={
        "component": "interpolation", "endpoint": request.url.path, "missing": exc.missing,
    })
    return JSONResponse(status_code=422, content={"detail": {"message": str(exc), "missing": exc.missing}})


app.include_router(router)
