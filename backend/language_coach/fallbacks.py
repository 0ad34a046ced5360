"""Static payloads served in mock mode or when a live provider call fails."""
from __future__ import annotations

from .schemas import (
	GlossaryEntry,
	PracticeDrills,
	PracticeFeedback,
	PracticeNote,
	PracticeScores,
	ScoreDetail,
	TranslationResult,
	VocabularyEntry,
	VocabularyResult,
)

PRACTICE_FALLBACK = PracticeFeedback(
	summary="Great job on your greeting! Your enthusiasm really shines through.",
	follow_up_question="If you met a new teammate today, what would you ask to keep the chat flowing?",
	transcript="Hi there, I will going to the new gallery with my friend this weekend.",
	scores=PracticeScores(
		grammar=ScoreDetail(
			score=95,
			explanation="Grammar is strong overall; only minor tense slips appear when you describe future plans.",
		),
		pronunciation=ScoreDetail(
			score=85,
			explanation='Clear articulation, though the ending consonants in words like "meet" could be sharper.',
		),
		fluency=ScoreDetail(
			score=90,
			explanation="Smooth pacing with natural pauses, but you can add more detail to extend turns.",
		),
	),
	notes=[
		PracticeNote(
			title="Pronunciation",
			items=[
				'Work on sharper "t" sounds in "meet" and "night".',
				'Emphasize the "h" sound in "hello" so it does not disappear.',
			],
		),
		PracticeNote(
			title="Fluency",
			items=[
				"Try adding a follow-up question after your greeting to keep the dialogue active.",
				"Mix short and longer sentences to create a more dynamic rhythm.",
			],
		),
	],
	practice=PracticeDrills(
		pronunciation_drill='Repeat "Hello, nice to meet you" three times, focusing on crisp consonants.',
		speaking_prompt="Tell me about a recent conversation that made you smile.",
		encouragement="Keep up the great work! I cannot wait to hear your next recording.",
	),
	pronunciation_issues=[
		"“gallery” 中的 /ˈɡæl/ 重音需要更明显，结尾 /ri/ 轻读。",
		"句末 “friend” 的 /d/ 没有落地，建议着重收音。",
	],
	grammar_issues=[
		"将 “I will going” 改成 “I am going to” 描述计划更自然。",
		"使用 “a few different dishes” 而不是 “a different foods”。",
	],
	corrected_response=(
		"I am going to the new gallery with my friend this weekend "
		"and we plan to try a few different dishes afterward."
	),
)

TRANSLATION_FALLBACK = TranslationResult(
	translation="I really appreciate your help. Which day works best for you to meet?",
	explanation="Provides a polite, natural English tone suitable for most daily conversations.",
	alternatives=["Thanks so much for your help. When would be a good time for us to meet?"],
	glossary=[
		GlossaryEntry(
			term="appreciate your help",
			meaning="表达感谢的地道说法",
			note='比直接说 "thank you" 更真诚、更正式。',
		),
	],
)


def practice_fallback() -> PracticeFeedback:
	return PRACTICE_FALLBACK.model_copy(deep=True)


def translation_fallback() -> TranslationResult:
	return TRANSLATION_FALLBACK.model_copy(deep=True)


def vocabulary_fallback(word: str, language: str) -> VocabularyResult:
	return VocabularyResult(
		entry=VocabularyEntry(
			word=word,
			definition=(
				f"The language service is unavailable, so this is a placeholder {language} "
				f'definition for "{word}". Please try again later.'
			),
			example=f'Fallback response for "{word}" when the AI provider is unavailable.',
			synonyms=[],
		),
		related_words=[],
	)
