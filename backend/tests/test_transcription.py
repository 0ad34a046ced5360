import asyncio

import pytest

from conftest import FakeGeminiClient, make_settings
from language_coach.errors import ProviderCallError, TranscriptionError
from language_coach.transcription import (
	GeminiTranscriber,
	GoogleSpeechTranscriber,
	build_transcriber,
	normalize_base64,
)


class FakeMultimodalClient(FakeGeminiClient):
	async def generate_multimodal(self, parts, **kwargs):
		self.calls.append({"parts": parts, **kwargs})
		reply = self.replies.pop(0)
		if isinstance(reply, Exception):
			raise reply
		return reply


def test_normalize_base64_strips_data_url_prefix():
	assert normalize_base64("  data:audio/webm;base64,QUJD  ") == "QUJD"
	assert normalize_base64("QUJD") == "QUJD"
	assert normalize_base64("") == ""


def test_gemini_transcriber_sends_inline_audio():
	client = FakeMultimodalClient(["  hello world \n"])
	transcriber = GeminiTranscriber(lambda: client)

	text = asyncio.run(transcriber.transcribe("data:audio/webm;base64,QUJDRA=="))

	assert text == "hello world"
	inline = client.calls[0]["parts"][1]["inline_data"]
	assert inline == {"mime_type": "audio/webm", "data": "QUJDRA=="}
	assert client.closed == 1


def test_gemini_transcriber_wraps_provider_errors():
	client = FakeMultimodalClient([ProviderCallError("HTTP 503")])
	transcriber = GeminiTranscriber(lambda: client)

	with pytest.raises(TranscriptionError):
		asyncio.run(transcriber.transcribe("QUJDRA=="))
	assert client.closed == 1


def test_google_speech_rejects_invalid_base64():
	transcriber = GoogleSpeechTranscriber()
	with pytest.raises(TranscriptionError):
		asyncio.run(transcriber.transcribe("***not base64***"))


def test_build_transcriber_selects_backend():
	assert isinstance(build_transcriber(make_settings()), GeminiTranscriber)
	speech = build_transcriber(make_settings(transcriber="google_speech", speech_language_code="en-GB"))
	assert isinstance(speech, GoogleSpeechTranscriber)
	assert speech.language_code == "en-GB"
