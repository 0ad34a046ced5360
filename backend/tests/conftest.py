"""Shared fixtures for the language coach test suite."""
import json
from typing import Any, Dict, List, Optional, Union

import pytest
from fastapi.testclient import TestClient

from language_coach.handoff import InMemoryHandoffStore
from language_coach.main import create_app
from language_coach.settings import Settings


PRACTICE_REPLY: Dict[str, Any] = {
	"summary": "Clear answer with a small tense slip.",
	"followUpQuestion": "What did you enjoy most about the gallery?",
	"transcript": "I will going to the gallery this weekend.",
	"scores": {
		"grammar": {"score": 72.6, "explanation": "Future tense is mixed up."},
		"pronunciation": {"score": 130, "explanation": "Very clear."},
		"fluency": {"score": -5, "explanation": "Several long pauses."},
	},
	"notes": [
		{"title": "Grammar", "items": ["Use 'going to'", "Use 'going to'", " ", "Check articles", "Link ideas", "Vary verbs"]},
		{"title": "Empty", "items": []},
	],
	"practice": {
		"pronunciationDrill": "Say " + "gallery " * 30,
		"speakingPrompt": "Describe your favourite painting.",
		"encouragement": "Nice progress!",
	},
	"pronunciationIssues": ["gallery stress", "gallery stress", "final /d/ in friend"],
	"grammarIssues": ["will going -> am going to"],
	"correctedResponse": "I am going to the gallery this weekend.",
}


class FakeGeminiClient:
	"""Stands in for GeminiClient; replies are consumed in order."""

	def __init__(self, replies: Optional[List[Union[str, Exception]]] = None) -> None:
		self.replies = list(replies or [])
		self.calls: List[Dict[str, Any]] = []
		self.closed = 0

	async def generate(self, prompt: str, **kwargs: Any) -> str:
		self.calls.append({"prompt": prompt, **kwargs})
		if not self.replies:
			raise AssertionError("unexpected provider call")
		reply = self.replies.pop(0)
		if isinstance(reply, Exception):
			raise reply
		return reply

	async def aclose(self) -> None:
		self.closed += 1


class FakeTranscriber:
	def __init__(self, text: str = "", error: Optional[Exception] = None) -> None:
		self.text = text
		self.error = error
		self.calls: List[str] = []

	async def transcribe(self, audio_base64: str) -> str:
		self.calls.append(audio_base64)
		if self.error is not None:
			raise self.error
		return self.text


def make_settings(**overrides: Any) -> Settings:
	values: Dict[str, Any] = {
		"gemini_api_key": "test-key",
		"mock_mode": False,
		"fallback_on_error": False,
		"transcriber": "gemini",
		"log_level": "WARNING",
	}
	values.update(overrides)
	return Settings(_env_file=None, **values)


@pytest.fixture()
def practice_reply_json() -> str:
	return json.dumps(PRACTICE_REPLY)


@pytest.fixture()
def fake_client() -> FakeGeminiClient:
	return FakeGeminiClient()


@pytest.fixture()
def fake_transcriber() -> FakeTranscriber:
	return FakeTranscriber(text="I will going to the gallery.")


@pytest.fixture()
def store() -> InMemoryHandoffStore:
	return InMemoryHandoffStore(ttl_seconds=None, max_entries=None)


@pytest.fixture()
def build_client(fake_client, fake_transcriber, store):
	"""Factory for a TestClient wired to the fakes; pass Settings overrides as kwargs."""
	def _build(**overrides: Any) -> TestClient:
		app = create_app(
			make_settings(**overrides),
			store=store,
			client_factory=lambda: fake_client,
			transcriber=fake_transcriber,
		)
		return TestClient(app)
	return _build
