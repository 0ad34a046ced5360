from __future__ import annotations
from typing import Any, Iterable, List, Optional

SCORE_MIN = 0
SCORE_MAX = 100


def clamp_list(items: Optional[Iterable[Any]], limit: int) -> List[str]:
	"""Trim, drop blanks, dedupe (first occurrence wins) and cap a list of strings."""
	seen = set()
	result: List[str] = []
	for item in items or []:
		if item is None:
			continue
		text = str(item).strip()
		if not text or text in seen:
			continue
		seen.add(text)
		result.append(text)
		if len(result) >= limit:
			break
	return result


def clamp_score(value: Any) -> int:
	try:
		score = int(round(float(value)))
	except (TypeError, ValueError, OverflowError):
		return SCORE_MIN
	return max(SCORE_MIN, min(score, SCORE_MAX))


def truncate(text: str, limit: int) -> str:
	text = (text or "").strip()
	if len(text) <= limit:
		return text
	return text[: limit - 1].rstrip() + "…"


def clean_text(value: Any) -> Optional[str]:
	if value is None:
		return None
	text = str(value).strip()
	return text or None


def placeholder_definition(word: str) -> str:
	return f'No definition provided for "{word}" due to provider response.'


def placeholder_example(word: str) -> str:
	return f'Example unavailable for "{word}" because the provider returned incomplete data.'
