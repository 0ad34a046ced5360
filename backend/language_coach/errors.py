from __future__ import annotations
from typing import Any, List, Optional


class LanguageServiceError(Exception):
	pass


class ProviderCallError(LanguageServiceError):
	"""The generation provider could not be reached or answered with an error."""


class MalformedProviderResponse(ProviderCallError):
	"""The provider answered, but not with the JSON shape that was asked for."""

	def __init__(self, message: str, *, errors: Optional[List[Any]] = None) -> None:
		super().__init__(message)
		self.errors = errors or []


class TranscriptionError(LanguageServiceError):
	pass


class ServiceUnavailableError(LanguageServiceError):
	def __init__(self, operation: str) -> None:
		super().__init__(f"{operation} is temporarily unavailable")
		self.operation = operation
