import json

import pytest

from language_coach.errors import MalformedProviderResponse, ProviderCallError
from language_coach.parsing import Parsed, ShapeMismatch, Unparseable, expect_parsed, parse_structured, strip_code_fence
from language_coach.tools.contextual_translation import TranslationReply

REPLY = {"translation": "Thanks!", "explanation": "Casual.", "alternatives": ["Cheers"], "glossary": []}


def test_strip_code_fence_variants():
	body = json.dumps(REPLY)
	assert strip_code_fence(body) == body
	assert strip_code_fence(f"```json\n{body}\n```") == body
	assert strip_code_fence(f"```JSON {body}```") == body
	assert strip_code_fence(f"```\n{body}\n```") == body


def test_fenced_reply_parses_like_plain_reply():
	body = json.dumps(REPLY)
	plain = parse_structured(body, TranslationReply)
	fenced = parse_structured(f"```json\n{body}\n```", TranslationReply)

	assert isinstance(plain, Parsed)
	assert isinstance(fenced, Parsed)
	assert plain.value == fenced.value


def test_invalid_json_is_unparseable():
	result = parse_structured("Sure! Here is your translation: Thanks", TranslationReply)
	assert isinstance(result, Unparseable)
	assert isinstance(parse_structured("   ", TranslationReply), Unparseable)


def test_wrong_shape_is_a_mismatch():
	result = parse_structured(json.dumps({"translation": "Thanks"}), TranslationReply)
	assert isinstance(result, ShapeMismatch)
	assert any(error["loc"] == ("explanation",) for error in result.errors)


def test_expect_parsed_raises_provider_error():
	with pytest.raises(MalformedProviderResponse):
		expect_parsed(Unparseable("invalid JSON"), "translation")
	with pytest.raises(ProviderCallError):
		expect_parsed(ShapeMismatch([]), "translation")
	assert expect_parsed(Parsed("value"), "translation") == "value"
