"""Tests for the summarization client."""

import json

import httpx
import pytest

from agents.node3_summarize import MAX_INPUT_CHARS, SummarizationClient, failure_marker, parse_summary
from core.exceptions import SummarizationError, UnexpectedResponseShape
from schemas.pipeline_schemas import Language


def _client(settings, handler):
    return SummarizationClient(settings, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


async def test_submits_first_2000_characters_with_bearer_token(settings):
    seen = {}

    def handler(request):
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json=[{"summary_text": "A short summary."}])

    text = "".join(chr(ord("a") + i % 26) for i in range(5000))
    result = await _client(settings, handler).summarize(text, Language.ENGLISH)

    assert seen["url"] == "https://inference.test/en"
    assert seen["auth"] == "Bearer test-token"
    assert seen["body"] == {"inputs": text[:2000]}
    assert len(seen["body"]["inputs"]) == MAX_INPUT_CHARS
    assert result.summary_text == "A short summary."
    assert result.model_label == "English"


async def test_arabic_uses_arabic_endpoint(settings):
    urls = []

    def handler(request):
        urls.append(str(request.url))
        return httpx.Response(200, json=[{"summary_text": "ملخص"}])

    result = await _client(settings, handler).summarize("نص", Language.ARABIC)
    assert urls == ["https://inference.test/ar"]
    assert result.model_label == "Arabic"


async def test_non_success_status_raises(settings):
    client = _client(settings, lambda request: httpx.Response(503, json={"error": "loading"}))
    with pytest.raises(SummarizationError, match="503"):
        await client.summarize("text", Language.ENGLISH)


async def test_transport_error_raises(settings):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(SummarizationError):
        await _client(settings, handler).summarize("text", Language.ENGLISH)


async def test_object_response_is_unexpected_shape(settings):
    client = _client(settings, lambda request: httpx.Response(200, json={"summary_text": "not a list"}))
    with pytest.raises(UnexpectedResponseShape):
        await client.summarize("text", Language.ENGLISH)


async def test_non_json_response_is_unexpected_shape(settings):
    client = _client(settings, lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(UnexpectedResponseShape):
        await client.summarize("text", Language.ENGLISH)


@pytest.mark.parametrize("payload", [[], [{}], [{"summary_text": ""}], ["text"], None])
def test_parse_summary_rejects_other_shapes(payload):
    with pytest.raises(UnexpectedResponseShape):
        parse_summary(payload)


def test_parse_summary_takes_first_object():
    assert parse_summary([{"summary_text": "one"}, {"summary_text": "two"}]) == "one"


def test_failure_marker_text():
    assert failure_marker(UnexpectedResponseShape()) == (
        "Summarization failed: Unexpected response from Hugging Face API"
    )
