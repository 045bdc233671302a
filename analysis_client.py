"""Client for the remote analysis backend (translation + inflection lookups)."""
import os
from typing import Optional

import httpx
from pydantic import ValidationError

from log import get_logger

from models import (
    MOCK_ANALYSIS,
    Analysis, AnalysisRequest, Inflections, InflectionsRequest,
)

logger = get_logger("grammr.analysis_client")

# --- Config ---
GRAMMR_ENV = os.environ.get("GRAMMR_ENV", "development")
IS_LOCAL = GRAMMR_ENV == "development"
BACKEND_HOST = "http://localhost:8080" if IS_LOCAL else os.environ.get("GRAMMR_BACKEND_HOST", "")
BACKEND_TIMEOUT = float(os.environ.get("GRAMMR_BACKEND_TIMEOUT", "30"))
MOCK_BACKEND = os.environ.get("GRAMMR_MOCK_BACKEND", "") == "1"

TRANSLATION_PATH = "/api/v1/translation"
INFLECTION_PATH = "/api/v1/inflection"

# Tests install an httpx.MockTransport here.
_transport: Optional[httpx.AsyncBaseTransport] = None


class BackendError(Exception):
    """The backend could not be reached or answered with an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _client(timeout: float) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BACKEND_HOST, timeout=timeout, transport=_transport)


async def backend_post(path: str, payload: dict, timeout: Optional[float] = None) -> dict:
    """POST JSON to the backend and return the decoded body."""
    if timeout is None:
        timeout = BACKEND_TIMEOUT
    try:
        async with _client(timeout) as client:
            resp = await client.post(path, json=payload)
    except httpx.HTTPError as e:
        raise BackendError(f"Backend request to {path} failed: {e}") from e

    if resp.status_code != 200:
        raise BackendError(f"HTTP error! status: {resp.status_code}", status_code=resp.status_code)
    try:
        return resp.json()
    except ValueError as e:
        raise BackendError(f"Backend returned invalid JSON for {path}", status_code=resp.status_code) from e


async def fetch_analysis(req: AnalysisRequest) -> Analysis:
    if MOCK_BACKEND:
        return Analysis.model_validate({"sourcePhrase": req.phrase, **MOCK_ANALYSIS})

    data = await backend_post(TRANSLATION_PATH, req.model_dump())
    try:
        return Analysis.model_validate(data)
    except ValidationError as e:
        raise BackendError("Backend returned a malformed analysis") from e


async def fetch_inflections(req: InflectionsRequest) -> Inflections:
    data = await backend_post(INFLECTION_PATH, req.model_dump())
    try:
        return Inflections.model_validate(data)
    except ValidationError as e:
        raise BackendError("Backend returned malformed inflections") from e


async def check_backend_connectivity() -> bool:
    if MOCK_BACKEND:
        return True
    try:
        async with _client(10) as client:
            resp = await client.get("/")
            return resp.status_code < 500
    except httpx.HTTPError:
        logger.warning("Analysis backend not reachable", extra={"component": "backend"})
        return False
