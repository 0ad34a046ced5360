"""Request and response models for the language endpoints.

Python attributes are snake_case; the JSON contract is camelCase.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

Proficiency = Literal["beginner", "intermediate", "advanced"]
Focus = Literal["fluency", "accuracy", "confidence"]
Tone = Literal["formal", "neutral", "friendly", "concise"]

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

# Normalization caps
MAX_NOTES = 4
MAX_NOTE_ITEMS = 4
MAX_ISSUES = 6
MAX_DRILL_CHARS = 110
MAX_VOCAB_LIST = 6
MAX_ALTERNATIVES = 3
MAX_GLOSSARY = 4
MIN_AUDIO_CHARS = 20
MAX_SCENE_CHARS = 120


class CamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---- requests ----

class PracticeRequest(CamelModel):
	language: str
	native_language: str
	proficiency: Proficiency
	focus: Focus
	audio_base64: Optional[str] = Field(default=None, min_length=MIN_AUDIO_CHARS)
	audio_id: Optional[str] = Field(default=None, max_length=64)
	transcript: Optional[str] = None
	# Declared last so the other inputs are already in info.data.
	prompt: Optional[str] = Field(default=None, validate_default=True)

	@field_validator("prompt")
	@classmethod
	def _require_some_input(cls, value: Optional[str], info: ValidationInfo) -> Optional[str]:
		has_text = bool((value or "").strip()) or bool((info.data.get("transcript") or "").strip())
		has_audio = bool(info.data.get("audio_base64")) or bool((info.data.get("audio_id") or "").strip())
		if not (has_text or has_audio):
			raise ValueError("at least one of prompt, transcript or audio input is required")
		return value


class VocabularyRequest(CamelModel):
	language: str
	word: NonEmptyStr


class TranslationRequest(CamelModel):
	text: str = Field(min_length=2)
	scene: Optional[str] = Field(default=None, max_length=MAX_SCENE_CHARS)
	tone: Optional[Tone] = None


class AudioUploadRequest(CamelModel):
	audio_base64: str = Field(min_length=MIN_AUDIO_CHARS)


# ---- responses ----

class ScoreDetail(FrozenCamelModel):
	score: int = Field(ge=0, le=100)
	explanation: str


class PracticeScores(FrozenCamelModel):
	grammar: ScoreDetail
	pronunciation: ScoreDetail
	fluency: ScoreDetail


class PracticeNote(FrozenCamelModel):
	title: str
	items: List[str]


class PracticeDrills(FrozenCamelModel):
	pronunciation_drill: str
	speaking_prompt: str
	encouragement: str


class PracticeFeedback(FrozenCamelModel):
	summary: str
	follow_up_question: str
	transcript: Optional[str] = None
	scores: PracticeScores
	notes: List[PracticeNote] = Field(default_factory=list)
	practice: PracticeDrills
	pronunciation_issues: List[str] = Field(default_factory=list)
	grammar_issues: List[str] = Field(default_factory=list)
	corrected_response: str


class VocabularyEntry(FrozenCamelModel):
	word: str
	ipa: Optional[str] = None
	phonetic_spelling: Optional[str] = None
	part_of_speech: Optional[str] = None
	definition: str
	example: str
	synonyms: Optional[List[str]] = None


class VocabularyResult(FrozenCamelModel):
	entry: VocabularyEntry
	related_words: List[str] = Field(default_factory=list)


class GlossaryEntry(FrozenCamelModel):
	term: str
	meaning: str
	note: Optional[str] = None


class TranslationResult(FrozenCamelModel):
	translation: str
	explanation: str
	alternatives: List[str] = Field(default_factory=list)
	glossary: List[GlossaryEntry] = Field(default_factory=list)


class AudioUploadResult(FrozenCamelModel):
	audio_id: str


class HealthStatus(FrozenCamelModel):
	status: str = "ok"
	service_ready: bool
	provider_configured: bool
	mock_mode: bool
