"""API route handlers for grammr."""
from typing import List

from log import get_logger

logger = get_logger("grammr.routes")

from fastapi import APIRouter, HTTPException, Request

from models import (
    SUPPORTED_LANGUAGES, MAX_INPUT_LEN, language_name,
    Analysis, AnalysisRequest, AlignRequest,
    InflectionsRequest, InflectionTableRequest, InflectionTableResponse,
    Token,
)
from cache import (
    analysis_cache_key, inflection_cache_key,
    cache_get, cache_put, cache_stats,
)
from ratelimit import rate_limit_check, rate_limit_cleanup, get_rate_limit_key
from analysis_client import (
    BackendError,
    fetch_analysis, fetch_inflections, check_backend_connectivity,
)
import analysis_client
from interpolation import interpolate_tokens_with_text
from inflection import organize_inflection_table

router = APIRouter()


def _enforce_rate_limit(request: Request):
    rate_key = get_rate_limit_key(request)
    rate_limit_cleanup()
    if not rate_limit_check(rate_key):
        raise HTTPException(429, "Too many requests. Please wait a minute.")


def _require_language(code: str):
    if code not in SUPPORTED_LANGUAGES:
        raise HTTPException(400, "Unsupported language")


@router.post("/api/translate", tags=["Learning"], summary="Translate a phrase and align its analyzed tokens",
             response_model=Analysis)
async def translate(request: Request, req: AnalysisRequest):
    _enforce_rate_limit(request)

    if not req.phrase or not req.phrase.strip():
        raise HTTPException(400, "Please enter some text to translate")
    if len(req.phrase) > MAX_INPUT_LEN:
        raise HTTPException(400, f"Input too long (max {MAX_INPUT_LEN} characters)")
    _require_language(req.userLanguageSpoken)
    _require_language(req.userLanguageLearned)

    ck = analysis_cache_key(req.phrase, req.userLanguageSpoken, req.userLanguageLearned,
                            req.performSemanticTranslation)
    cached = cache_get("analysis", ck)
    if cached is not None:
        return cached

    try:
        analysis = await fetch_analysis(req)
    except BackendError as e:
        logger.warning("Translation request failed", extra={
            "component": "backend", "endpoint": "/api/translate",
            "status_code": e.status_code, "detail": str(e),
        })
        raise HTTPException(502, "Failed to get translation. Please try again.")

    # TokensNotFoundError propagates to the app-level handler
    aligned = interpolate_tokens_with_text(
        analysis.semanticTranslation.translatedPhrase,
        analysis.analyzedTokens,
    )
    result = analysis.model_copy(update={"analyzedTokens": aligned})
    cache_put("analysis", ck, result)
    return result


@router.post("/api/inflection", tags=["Learning"], summary="Inflection table for a token",
             response_model=InflectionTableResponse)
async def inflection(request: Request, req: InflectionsRequest):
    _enforce_rate_limit(request)

    if not req.token.text.strip():
        raise HTTPException(400, "Token text cannot be empty")
    _require_language(req.languageCode)

    ck = inflection_cache_key(req.token.text, req.languageCode)
    cached = cache_get("inflection", ck)
    if cached is not None:
        return cached

    try:
        inflections = await fetch_inflections(req)
    except BackendError as e:
        logger.warning("Inflection request failed", extra={
            "component": "backend", "endpoint": "/api/inflection",
            "status_code": e.status_code, "detail": str(e),
        })
        raise HTTPException(502, "Failed to fetch inflections")

    result = InflectionTableResponse(
        lemma=inflections.lemma,
        partOfSpeech=inflections.partOfSpeech,
        table=organize_inflection_table(inflections.partOfSpeech, inflections.inflections),
    )
    cache_put("inflection", ck, result)
    return result


@router.post("/api/align", tags=["Learning"], summary="Interleave tokens with the literal text")
async def align(req: AlignRequest):
    tokens: List[Token] = interpolate_tokens_with_text(req.text, req.tokens)
    return {"tokens": tokens}


@router.post("/api/inflection-table", tags=["Learning"], summary="Project inflections onto a table",
             response_model=InflectionTableResponse)
async def inflection_table(req: InflectionTableRequest):
    return InflectionTableResponse(
        partOfSpeech=req.partOfSpeech,
        table=organize_inflection_table(req.partOfSpeech, req.inflections),
    )


@router.get("/api/languages", tags=["Reference"], summary="List supported languages")
async def get_languages():
    return {code: language_name(code) for code in SUPPORTED_LANGUAGES}


@router.get("/api/health", tags=["System"], summary="Health check with stats")
async def health_check():
    from backend import get_latency_stats
    backend_ok = await check_backend_connectivity()
    return {
        "status": "ok" if backend_ok else "degraded",
        "backend": {"reachable": backend_ok, "url": analysis_client.BACKEND_HOST, "mock": analysis_client.MOCK_BACKEND},
        "cache": cache_stats(),
        "latency": get_latency_stats(),
    }
