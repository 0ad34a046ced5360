"""
Language Service
================

Provider-call pipeline shared by the practice, vocabulary and translation
endpoints. Each operation:

1. Short-circuits to its static payload in mock mode (no key, or MOCK_MODE).
2. Assembles the learner input (inline audio, or audio handed off earlier).
3. Transcribes audio for practice evaluation; a failed transcription only
   drops the spoken part of the input.
4. Renders the prompt and makes a single low-temperature JSON call.
5. Parses the reply against the operation's shape and normalizes it.
6. On any failure serves the static payload when FALLBACK_ON_ERROR is set,
   otherwise raises ``ServiceUnavailableError``.

There are no retries anywhere in the pipeline.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

from ..errors import ServiceUnavailableError
from ..fallbacks import practice_fallback, translation_fallback, vocabulary_fallback
from ..gemini_client import GeminiClient
from ..handoff import HandoffStore
from ..log import get_logger
from ..parsing import expect_parsed, parse_structured
from ..schemas import (
	PracticeFeedback,
	PracticeRequest,
	TranslationRequest,
	TranslationResult,
	VocabularyRequest,
	VocabularyResult,
)
from ..settings import Settings
from ..tools import contextual_translation, practice_evaluation, vocabulary_lookup
from ..transcription import Transcriber, normalize_base64

logger = get_logger("service")

ResultT = TypeVar("ResultT")
ShapeT = TypeVar("ShapeT", bound=BaseModel)


class LanguageService:
	def __init__(
		self,
		config: Settings,
		store: HandoffStore,
		*,
		client_factory: Optional[Callable[[], GeminiClient]] = None,
		transcriber: Optional[Transcriber] = None,
	) -> None:
		self.config = config
		self.store = store
		self._client_factory = client_factory or (lambda: GeminiClient(config=config))
		self.transcriber = transcriber

	def should_mock(self) -> bool:
		return self.config.mock_mode or not self.config.provider_configured

	def store_audio(self, audio_base64: str) -> str:
		return self.store.store(audio_base64)

	# ------------------------------------------------------------------
	# operations
	# ------------------------------------------------------------------

	async def generate_practice_feedback(self, request: PracticeRequest) -> PracticeFeedback:
		meta = {
			"language": request.language,
			"nativeLanguage": request.native_language,
			"proficiency": request.proficiency,
			"focus": request.focus,
			"hasAudio": bool(request.audio_base64 or request.audio_id),
		}

		async def live() -> PracticeFeedback:
			audio = self._resolve_audio(request)
			spoken_text = await self._transcribe(audio) if audio else None
			prompt = practice_evaluation.build_prompt(request, spoken_text)
			reply = await self._invoke_structured(
				"practice",
				prompt,
				practice_evaluation.PracticeReply,
				system_instruction=practice_evaluation.SYSTEM_INSTRUCTION,
				temperature=practice_evaluation.TEMPERATURE,
			)
			return practice_evaluation.normalize(reply, spoken_text, request)

		return await self._run("practice", meta, practice_fallback, live)

	async def query_vocabulary(self, request: VocabularyRequest) -> VocabularyResult:
		language = vocabulary_lookup.resolve_language(request)
		meta = {"word": request.word, "language": language}

		async def live() -> VocabularyResult:
			reply = await self._invoke_structured(
				"vocabulary",
				vocabulary_lookup.build_prompt(request),
				vocabulary_lookup.VocabularyReply,
				system_instruction=vocabulary_lookup.SYSTEM_INSTRUCTION,
				temperature=vocabulary_lookup.TEMPERATURE,
			)
			return vocabulary_lookup.normalize(reply, request)

		return await self._run(
			"vocabulary",
			meta,
			lambda: vocabulary_fallback(request.word, language),
			live,
		)

	async def generate_contextual_translation(self, request: TranslationRequest) -> TranslationResult:
		meta = {
			"scene": contextual_translation.resolve_scene(request),
			"tone": contextual_translation.resolve_tone(request),
			"textLength": len(request.text),
		}

		async def live() -> TranslationResult:
			reply = await self._invoke_structured(
				"translation",
				contextual_translation.build_prompt(request),
				contextual_translation.TranslationReply,
				system_instruction=contextual_translation.SYSTEM_INSTRUCTION,
				temperature=contextual_translation.TEMPERATURE,
			)
			return contextual_translation.normalize(reply)

		return await self._run("translation", meta, translation_fallback, live)

	# ------------------------------------------------------------------
	# pipeline steps
	# ------------------------------------------------------------------

	async def _run(
		self,
		operation: str,
		meta: Dict[str, Any],
		fallback: Callable[[], ResultT],
		live: Callable[[], Awaitable[ResultT]],
	) -> ResultT:
		if self.should_mock():
			logger.warning(
				"returning mock %s response", operation,
				extra={"operation": operation, "meta": meta},
			)
			return fallback()

		logger.info("language service start", extra={"operation": operation, "meta": meta})
		try:
			result = await live()
		except Exception as err:
			logger.error(
				"language service error",
				exc_info=err,
				extra={"operation": operation, "meta": meta},
			)
			if self.config.fallback_on_error:
				logger.warning(
					"serving %s fallback due to failure", operation,
					extra={"operation": operation},
				)
				return fallback()
			raise ServiceUnavailableError(operation) from err
		logger.info("language service success", extra={"operation": operation})
		return result

	def _resolve_audio(self, request: PracticeRequest) -> Optional[str]:
		# A referenced hand-off is consumed even when inline audio wins.
		payload = None
		if request.audio_id:
			payload = self.store.consume(request.audio_id)
			if payload is None:
				logger.warning(
					"audio payload missing or already consumed",
					extra={"operation": "practice", "detail": request.audio_id},
				)
		inline = (request.audio_base64 or "").strip()
		return inline or payload or None

	async def _transcribe(self, audio_base64: str) -> Optional[str]:
		if self.transcriber is None:
			return None
		try:
			text = await self.transcriber.transcribe(normalize_base64(audio_base64))
		except Exception as err:
			# Never fatal: the learner's typed input is still evaluated.
			logger.warning(
				"transcription failed, continuing with text input",
				exc_info=err,
				extra={"operation": "practice", "component": "transcription"},
			)
			return None
		return text.strip() or None

	async def _invoke_structured(
		self,
		operation: str,
		prompt: str,
		shape: Type[ShapeT],
		*,
		system_instruction: str,
		temperature: float,
	) -> ShapeT:
		client = self._client_factory()
		try:
			raw = await client.generate(
				prompt,
				system_instruction=system_instruction,
				temperature=temperature,
				json_output=True,
			)
		finally:
			await client.aclose()
		return expect_parsed(parse_structured(raw, shape), operation)
