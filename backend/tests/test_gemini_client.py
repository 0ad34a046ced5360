import asyncio
import json

import httpx
import pytest

from conftest import make_settings
from language_coach.errors import ProviderCallError
from language_coach.gemini_client import GeminiClient


def _envelope(text: str) -> dict:
	return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _client(handler, **kwargs) -> GeminiClient:
	return GeminiClient(config=make_settings(), transport=httpx.MockTransport(handler), **kwargs)


def _call(client: GeminiClient, coro_factory):
	async def runner():
		try:
			return await coro_factory(client)
		finally:
			await client.aclose()
	return asyncio.run(runner())


def test_generate_posts_json_request():
	seen = {}

	def handler(request: httpx.Request) -> httpx.Response:
		seen["url"] = str(request.url)
		seen["key"] = request.headers.get("x-goog-api-key")
		seen["body"] = json.loads(request.content)
		return httpx.Response(200, json=_envelope('{"ok": true}'))

	client = _client(handler, model="gemini-test")
	text = _call(client, lambda c: c.generate("prompt text", system_instruction="be brief", temperature=0.3))

	assert text == '{"ok": true}'
	assert seen["url"].endswith("/gemini-test:generateContent")
	assert seen["key"] == "test-key"
	assert seen["body"]["contents"][0]["parts"][0]["text"] == "prompt text"
	assert seen["body"]["generationConfig"] == {"temperature": 0.3, "responseMimeType": "application/json"}
	assert seen["body"]["systemInstruction"]["parts"][0]["text"] == "be brief"


def test_generate_multimodal_sends_parts():
	seen = {}

	def handler(request: httpx.Request) -> httpx.Response:
		seen["body"] = json.loads(request.content)
		return httpx.Response(200, json=_envelope("transcript"))

	parts = [{"text": "transcribe"}, {"inline_data": {"mime_type": "audio/webm", "data": "AAAA"}}]
	text = _call(_client(handler), lambda c: c.generate_multimodal(parts))

	assert text == "transcript"
	assert seen["body"]["contents"][0]["parts"] == parts
	assert "responseMimeType" not in seen["body"]["generationConfig"]


@pytest.mark.parametrize(
	"response",
	[
		httpx.Response(500, json={"error": {"message": "boom"}}),
		httpx.Response(200, json={"candidates": []}),
		httpx.Response(200, text="not json"),
		httpx.Response(200, json=_envelope("   ")),
	],
)
def test_bad_responses_raise_provider_error(response):
	client = _client(lambda request: response)
	with pytest.raises(ProviderCallError):
		_call(client, lambda c: c.generate("prompt"))


def test_network_error_raises_provider_error():
	def handler(request: httpx.Request) -> httpx.Response:
		raise httpx.ConnectError("connection refused", request=request)

	with pytest.raises(ProviderCallError):
		_call(_client(handler), lambda c: c.generate("prompt"))


def test_missing_key_is_rejected():
	with pytest.raises(ValueError):
		GeminiClient(config=make_settings(gemini_api_key=None))
