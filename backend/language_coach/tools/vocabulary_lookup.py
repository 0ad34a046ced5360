from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..normalization import clamp_list, clean_text, placeholder_definition, placeholder_example
from ..schemas import MAX_VOCAB_LIST, VocabularyEntry, VocabularyRequest, VocabularyResult

TEMPERATURE = 0.2
DEFAULT_EXPLANATION_LANGUAGE = "Chinese"

SYSTEM_INSTRUCTION = (
	"You are an English dictionary tool. Respond ONLY with JSON containing word, ipa, "
	"phoneticSpelling, partOfSpeech, definition, example, synonyms (array), relatedWords (array)."
)


class VocabularyReply(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

	word: Optional[str] = None
	ipa: Optional[str] = None
	phonetic_spelling: Optional[str] = None
	part_of_speech: Optional[str] = None
	definition: Optional[str] = None
	example: Optional[str] = None
	synonyms: Optional[List[str]] = None
	related_words: Optional[List[str]] = None


def resolve_language(request: VocabularyRequest) -> str:
	return clean_text(request.language) or DEFAULT_EXPLANATION_LANGUAGE


def build_prompt(request: VocabularyRequest) -> str:
	return (
		f"word: {request.word}\n"
		f"targetLanguage: {resolve_language(request)}\n"
		"Include IPA, concise definition and example sentence.\n"
		'Respond ONLY with minified JSON: {"word":string,"ipa":string,"phoneticSpelling":string,'
		'"partOfSpeech":string,"definition":string,"example":string,"synonyms":string[],"relatedWords":string[]}'
	)


def normalize(reply: VocabularyReply, request: VocabularyRequest) -> VocabularyResult:
	word = clean_text(reply.word) or request.word
	return VocabularyResult(
		entry=VocabularyEntry(
			word=word,
			ipa=clean_text(reply.ipa),
			phonetic_spelling=clean_text(reply.phonetic_spelling),
			part_of_speech=clean_text(reply.part_of_speech),
			definition=clean_text(reply.definition) or placeholder_definition(request.word),
			example=clean_text(reply.example) or placeholder_example(request.word),
			synonyms=None if reply.synonyms is None else clamp_list(reply.synonyms, MAX_VOCAB_LIST),
		),
		related_words=clamp_list(reply.related_words, MAX_VOCAB_LIST),
	)
