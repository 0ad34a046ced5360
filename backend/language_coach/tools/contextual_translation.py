from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from ..fallbacks import TRANSLATION_FALLBACK
from ..normalization import clamp_list, clean_text
from ..schemas import MAX_ALTERNATIVES, MAX_GLOSSARY, GlossaryEntry, TranslationRequest, TranslationResult

TEMPERATURE = 0.3
DEFAULT_SCENE = "General conversation"
DEFAULT_TONE = "neutral"

SYSTEM_INSTRUCTION = (
	"You are a bilingual localization specialist. Return ONLY JSON matching "
	'{"translation":string,"explanation":string,"alternatives":string[],'
	'"glossary":[{"term":string,"meaning":string,"note":string}]}.'
)


class ReplyGlossaryEntry(BaseModel):
	model_config = ConfigDict(extra="ignore")

	term: Optional[str] = None
	meaning: Optional[str] = None
	note: Optional[str] = None


class TranslationReply(BaseModel):
	model_config = ConfigDict(extra="ignore")

	translation: str
	explanation: str
	alternatives: Optional[List[str]] = None
	glossary: Optional[List[ReplyGlossaryEntry]] = None


def resolve_scene(request: TranslationRequest) -> str:
	return clean_text(request.scene) or DEFAULT_SCENE


def resolve_tone(request: TranslationRequest) -> str:
	return request.tone or DEFAULT_TONE


def build_prompt(request: TranslationRequest) -> str:
	return (
		f"Chinese input: {request.text}\n"
		f"Scene: {resolve_scene(request)}\n"
		f"Desired tone: {resolve_tone(request)}\n"
		"Give the most natural English rendering for this scene, explain the choice briefly, "
		"offer up to 3 alternatives and up to 4 glossary entries."
	)


def normalize(reply: TranslationReply) -> TranslationResult:
	glossary: List[GlossaryEntry] = []
	seen_terms = set()
	for item in reply.glossary or []:
		term = clean_text(item.term)
		meaning = clean_text(item.meaning)
		if not term or not meaning or term in seen_terms:
			continue
		seen_terms.add(term)
		glossary.append(GlossaryEntry(term=term, meaning=meaning, note=clean_text(item.note)))
		if len(glossary) >= MAX_GLOSSARY:
			break

	return TranslationResult(
		translation=clean_text(reply.translation) or TRANSLATION_FALLBACK.translation,
		explanation=clean_text(reply.explanation) or TRANSLATION_FALLBACK.explanation,
		alternatives=clamp_list(reply.alternatives, MAX_ALTERNATIVES),
		glossary=glossary,
	)
