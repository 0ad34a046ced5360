"""
Practice evaluation
===================

Prompt, provider reply shape and normalization for grading a learner's
speaking/writing attempt on grammar, pronunciation and fluency.
"""

from __future__ import annotations

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

from ..normalization import clamp_list, clamp_score, clean_text, truncate
from ..schemas import (
	MAX_DRILL_CHARS,
	MAX_ISSUES,
	MAX_NOTE_ITEMS,
	MAX_NOTES,
	PracticeDrills,
	PracticeFeedback,
	PracticeNote,
	PracticeRequest,
	PracticeScores,
	ScoreDetail,
)

TEMPERATURE = 0.2

SYSTEM_INSTRUCTION = (
	"You are an encouraging bilingual language coach. "
	"Provide concise actionable feedback and obey the response schema."
)

RESPONSE_SCHEMA = (
	'{"summary":string,"followUpQuestion":string,"transcript":string,'
	'"scores":{"grammar":{"score":number,"explanation":string},'
	'"pronunciation":{"score":number,"explanation":string},'
	'"fluency":{"score":number,"explanation":string}},'
	'"notes":[{"title":string,"items":string[]}],'
	'"practice":{"pronunciationDrill":string,"speakingPrompt":string,"encouragement":string},'
	'"pronunciationIssues":string[],"grammarIssues":string[],"correctedResponse":string}'
)


# Required reply text must survive trimming.
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class _ReplyModel(BaseModel):
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ReplyScore(_ReplyModel):
	score: float
	explanation: Text


class ReplyScores(_ReplyModel):
	grammar: ReplyScore
	pronunciation: ReplyScore
	fluency: ReplyScore


class ReplyNote(_ReplyModel):
	title: str
	items: Optional[List[str]] = None


class ReplyPractice(_ReplyModel):
	pronunciation_drill: Text
	speaking_prompt: Text
	encouragement: Text


class PracticeReply(_ReplyModel):
	summary: Text
	follow_up_question: Text
	transcript: Optional[str] = None
	scores: ReplyScores
	notes: Optional[List[ReplyNote]] = None
	practice: ReplyPractice
	pronunciation_issues: Optional[List[str]] = None
	grammar_issues: Optional[List[str]] = None
	corrected_response: Text


def resolve_transcript(request: PracticeRequest, spoken_text: Optional[str]) -> Optional[str]:
	return clean_text(request.transcript) or clean_text(spoken_text)


def build_prompt(request: PracticeRequest, spoken_text: Optional[str] = None) -> str:
	typed = clean_text(request.prompt)
	transcript = resolve_transcript(request, spoken_text)
	blocks = []
	if typed:
		blocks.append(f"Typed/context input:\n{typed}")
	if transcript:
		blocks.append(f"Transcribed speech:\n{transcript}")
	submission = "\n---\n".join(blocks) if blocks else "Learner provided no content."

	return f"""
Target language: {request.language}
Native language: {request.native_language}
Proficiency: {request.proficiency}
Primary focus: {request.focus}
Learner submission (text + speech transcription):
{submission}

Tasks:
1. Point out the main pronunciation issues, explained in the learner's native language, with the spelling/IPA of each word.
2. Point out grammar issues, explained in the learner's native language, with a better sentence fragment for each.
3. Give a correctedResponse: the learner's answer rewritten as natural {request.language}.
4. Give one follow-up question that continues the conversation.

Constraints:
- scores must be integers between 0 and 100
- keep summary concise and positive
- every notes entry needs at least one actionable bullet (max 4 items each)
- pronunciationDrill should be an imperative exercise of at most 110 characters

Respond ONLY with minified JSON exactly matching this schema:
{RESPONSE_SCHEMA}
""".strip()


def _score(reply: ReplyScore) -> ScoreDetail:
	return ScoreDetail(score=clamp_score(reply.score), explanation=reply.explanation.strip())


def normalize(reply: PracticeReply, spoken_text: Optional[str] = None, request: Optional[PracticeRequest] = None) -> PracticeFeedback:
	notes: List[PracticeNote] = []
	for note in reply.notes or []:
		title = note.title.strip()
		items = clamp_list(note.items, MAX_NOTE_ITEMS)
		if title and items:
			notes.append(PracticeNote(title=title, items=items))
		if len(notes) >= MAX_NOTES:
			break

	transcript = clean_text(reply.transcript)
	if transcript is None:
		transcript = resolve_transcript(request, spoken_text) if request is not None else clean_text(spoken_text)

	return PracticeFeedback(
		summary=reply.summary.strip(),
		follow_up_question=reply.follow_up_question.strip(),
		transcript=transcript,
		scores=PracticeScores(
			grammar=_score(reply.scores.grammar),
			pronunciation=_score(reply.scores.pronunciation),
			fluency=_score(reply.scores.fluency),
		),
		notes=notes,
		practice=PracticeDrills(
			pronunciation_drill=truncate(reply.practice.pronunciation_drill, MAX_DRILL_CHARS),
			speaking_prompt=reply.practice.speaking_prompt.strip(),
			encouragement=reply.practice.encouragement.strip(),
		),
		pronunciation_issues=clamp_list(reply.pronunciation_issues, MAX_ISSUES),
		grammar_issues=clamp_list(reply.grammar_issues, MAX_ISSUES),
		corrected_response=reply.corrected_response.strip(),
	)
