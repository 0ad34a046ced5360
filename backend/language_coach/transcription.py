"""
Speech transcription
====================

Turns a base64 recording (browser webm/opus) into text before practice
evaluation. Two backends are available, chosen by the TRANSCRIBER setting:

- ``gemini``: the recording is sent inline to the Gemini model with a
  verbatim-transcription instruction.
- ``google_speech``: Google Cloud Speech-to-Text recognizes the audio.

Every backend raises ``TranscriptionError`` on failure; the caller decides
how to degrade.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import Callable, Optional, Protocol

from google.cloud import speech_v1p1beta1 as speech
from google.api_core.exceptions import GoogleAPIError

from .errors import ProviderCallError, TranscriptionError
from .gemini_client import GeminiClient
from .settings import Settings

AUDIO_MIME_TYPE = "audio/webm"

TRANSCRIBE_INSTRUCTION = (
	"Transcribe the learner's speech in this recording verbatim. "
	"Keep grammar mistakes and filler words exactly as spoken. "
	"Return only the transcript text, without quotes or commentary."
)


def normalize_base64(value: str) -> str:
	"""Drop a ``data:audio/webm;base64,`` style prefix if present."""
	trimmed = (value or "").strip()
	if "," not in trimmed:
		return trimmed
	return trimmed.split(",")[-1].strip()


class Transcriber(Protocol):
	async def transcribe(self, audio_base64: str) -> str: ...


class GeminiTranscriber:
	def __init__(self, client_factory: Callable[[], GeminiClient]) -> None:
		self._client_factory = client_factory

	async def transcribe(self, audio_base64: str) -> str:
		parts = [
			{"text": TRANSCRIBE_INSTRUCTION},
			{"inline_data": {"mime_type": AUDIO_MIME_TYPE, "data": normalize_base64(audio_base64)}},
		]
		client: Optional[GeminiClient] = None
		try:
			client = self._client_factory()
			raw = await client.generate_multimodal(parts, temperature=0.0)
		except (ProviderCallError, ValueError) as err:
			raise TranscriptionError(f"Gemini transcription failed: {err}") from err
		finally:
			if client is not None:
				await client.aclose()
		return raw.strip()


class GoogleSpeechTranscriber:
	def __init__(self, language_code: str = "en-US") -> None:
		self.language_code = language_code

	async def transcribe(self, audio_base64: str) -> str:
		try:
			audio_content = base64.b64decode(normalize_base64(audio_base64), validate=True)
		except (binascii.Error, ValueError) as err:
			raise TranscriptionError("Audio payload is not valid base64") from err
		if not audio_content:
			raise TranscriptionError("Empty audio payload received")
		return await asyncio.to_thread(self._recognize, audio_content)

	def _recognize(self, audio_content: bytes) -> str:
		try:
			client = speech.SpeechClient()
		except Exception as err:
			raise TranscriptionError(f"Speech-to-Text client unavailable: {err}") from err

		audio = speech.RecognitionAudio(content=audio_content)
		config = speech.RecognitionConfig(
			encoding=speech.RecognitionConfig.AudioEncoding.WEBM_OPUS,
			language_code=self.language_code,
			enable_automatic_punctuation=True,
			model="default",
		)
		try:
			response = client.recognize(config=config, audio=audio)
		except GoogleAPIError as err:
			raise TranscriptionError(f"Speech-to-Text API error: {err}") from err
		pieces = [result.alternatives[0].transcript for result in response.results if result.alternatives]
		return " ".join(piece.strip() for piece in pieces if piece.strip())


def build_transcriber(config: Settings) -> Transcriber:
	if config.transcriber == "google_speech":
		return GoogleSpeechTranscriber(language_code=config.speech_language_code)
	return GeminiTranscriber(lambda: GeminiClient(config=config, model=config.gemini_transcription_model))
