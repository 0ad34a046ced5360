from __future__ import annotations
import httpx
from typing import Any, Dict, List, Optional
from .errors import ProviderCallError
from .settings import Settings, settings as default_settings

class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		model: Optional[str] = None,
		base_url: Optional[str] = None,
		timeout: Optional[float] = None,
		config: Optional[Settings] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		config = config or default_settings
		self.api_key = api_key or config.gemini_api_key
		if not self.api_key:
			raise ValueError("GEMINI_API_KEY is not configured")
		self.model = model or config.gemini_model
		root = (base_url or config.gemini_base_url).rstrip("/")
		# Google AI Studio (Generative Language API), key sent as a header
		self.base_url = f"{root}/{self.model}:generateContent"
		self._client = httpx.AsyncClient(timeout=timeout or config.gemini_timeout_seconds, transport=transport)

	async def generate(
		self,
		prompt: str,
		*,
		system_instruction: Optional[str] = None,
		temperature: float = 0.2,
		json_output: bool = True,
	) -> str:
		payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
		generation_config: Dict[str, Any] = {"temperature": temperature}
		if json_output:
			generation_config["responseMimeType"] = "application/json"
		payload["generationConfig"] = generation_config
		if system_instruction:
			payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
		return await self._post_payload(payload)

	async def generate_multimodal(
		self,
		parts: List[Dict[str, Any]],
		*,
		role: str = "user",
		system_instruction: Optional[str] = None,
		temperature: float = 0.0,
	) -> str:
		payload: Dict[str, Any] = {
			"contents": [{"role": role, "parts": parts}],
			"generationConfig": {"temperature": temperature},
		}
		if system_instruction:
			payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
		return await self._post_payload(payload)

	async def _post_payload(self, payload: Dict[str, Any]) -> str:
		headers = {"x-goog-api-key": self.api_key}
		try:
			r = await self._client.post(self.base_url, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			raise ProviderCallError(
				f"Gemini returned HTTP {http_err.response.status_code}"
			) from http_err
		except httpx.HTTPError as net_err:
			raise ProviderCallError(f"Gemini request failed: {net_err.__class__.__name__}") from net_err
		try:
			data = r.json()
			parts = data["candidates"][0]["content"]["parts"]
			text = "".join(part.get("text", "") for part in parts)
		except Exception as err:
			raise ProviderCallError("Unexpected Gemini response envelope") from err
		if not text.strip():
			raise ProviderCallError("Gemini returned an empty response")
		return text

	async def aclose(self) -> None:
		await self._client.aclose()
