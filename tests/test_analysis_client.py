"""Tests for the analysis backend client."""
import asyncio

import httpx
import pytest

import analysis_client
from analysis_client import BackendError, backend_post, fetch_analysis, fetch_inflections
from models import AnalysisRequest, InflectionsRequest, Token


def test_fetch_inflections(backend_stub):
    backend_stub.respond("/api/v1/inflection", 200, {
        "lemma": "gehen",
        "partOfSpeech": "VERB",
        "inflections": [{"lemma": "gehen", "inflected": "gehst",
                         "features": [{"type": "PERSON", "value": "SECOND"}, {"type": "NUMBER", "value": "SING"}]}],
    })

    result = asyncio.run(fetch_inflections(InflectionsRequest(token=Token(text="geht"), languageCode="de")))
    assert result.partOfSpeech == "VERB"
    assert result.inflections[0].inflected == "gehst"
    assert str(backend_stub.requests[0].url) == "http://backend.test/api/v1/inflection"


def test_non_200_raises_with_status(backend_stub):
    backend_stub.respond("/api/v1/translation", 404, {"error": "nope"})

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(fetch_analysis(AnalysisRequest(phrase="Hallo")))
    assert exc_info.value.status_code == 404
    assert "404" in str(exc_info.value)


def test_invalid_json_raises(backend_stub):
    backend_stub.respond("/api/v1/translation", 200, "<html>not json</html>")

    with pytest.raises(BackendError):
        asyncio.run(backend_post("/api/v1/translation", {"phrase": "x"}))


def test_backend_post_timeout_defaults_to_config(backend_stub, monkeypatch):
    monkeypatch.setattr(analysis_client, "BACKEND_TIMEOUT", 7.0)
    backend_stub.respond("/api/v1/translation", 200, {"ok": True})

    asyncio.run(backend_post("/api/v1/translation", {"phrase": "x"}))
    asyncio.run(backend_post("/api/v1/translation", {"phrase": "x"}, timeout=2.5))
    assert backend_stub.requests[0].extensions["timeout"]["read"] == 7.0
    assert backend_stub.requests[1].extensions["timeout"]["read"] == 2.5


def test_network_error_raises_backend_error(monkeypatch):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(analysis_client, "_transport", httpx.MockTransport(refuse))
    monkeypatch.setattr(analysis_client, "MOCK_BACKEND", False)

    with pytest.raises(BackendError) as exc_info:
        asyncio.run(fetch_analysis(AnalysisRequest(phrase="Hallo")))
    assert exc_info.value.status_code is None


def test_connectivity_false_on_network_error(monkeypatch):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    monkeypatch.setattr(analysis_client, "_transport", httpx.MockTransport(refuse))
    monkeypatch.setattr(analysis_client, "MOCK_BACKEND", False)

    assert asyncio.run(analysis_client.check_backend_connectivity()) is False


def test_mock_backend_skips_network(backend_stub, monkeypatch):
    monkeypatch.setattr(analysis_client, "MOCK_BACKEND", True)

    analysis = asyncio.run(fetch_analysis(AnalysisRequest(phrase="wie geht es dir?")))
    assert analysis.sourcePhrase == "wie geht es dir?"
    assert analysis.semanticTranslation.translatedPhrase == "Как дела?"
    assert backend_stub.requests == []
