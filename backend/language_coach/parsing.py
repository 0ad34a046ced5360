from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Generic, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .errors import MalformedProviderResponse

ShapeT = TypeVar("ShapeT", bound=BaseModel)

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*\s*")
_FENCE_CLOSE = re.compile(r"\s*```$")


@dataclass(frozen=True)
class Parsed(Generic[ShapeT]):
	value: ShapeT


@dataclass(frozen=True)
class Unparseable:
	reason: str


@dataclass(frozen=True)
class ShapeMismatch:
	errors: List[Any] = field(default_factory=list)


ParseResult = Union[Parsed[ShapeT], Unparseable, ShapeMismatch]


def strip_code_fence(text: str) -> str:
	"""Remove a surrounding ```json ... ``` fence if the model added one."""
	trimmed = (text or "").strip()
	if trimmed.startswith("```"):
		return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", trimmed)).strip()
	return trimmed


def parse_structured(raw: str, shape: Type[ShapeT]) -> ParseResult:
	body = strip_code_fence(raw)
	if not body:
		return Unparseable("empty response")
	try:
		data = json.loads(body)
	except json.JSONDecodeError as err:
		return Unparseable(f"invalid JSON: {err.msg}")
	try:
		return Parsed(shape.model_validate(data))
	except ValidationError as err:
		return ShapeMismatch(err.errors(include_url=False, include_input=False))


def expect_parsed(result: ParseResult, operation: str) -> ShapeT:
	if isinstance(result, Parsed):
		return result.value
	if isinstance(result, ShapeMismatch):
		raise MalformedProviderResponse(f"{operation}: response does not match the expected shape", errors=result.errors)
	raise MalformedProviderResponse(f"{operation}: {result.reason}")
