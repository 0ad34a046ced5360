from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Model to use, default to Gemini 2.5 Flash
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	# Optional: model override for speech transcription
	gemini_transcription_model: str | None = Field(default=None, validation_alias="GEMINI_TRANSCRIPTION_MODEL")
	gemini_base_url: str = Field(
		default="https://generativelanguage.googleapis.com/v1beta/models",
		validation_alias="GEMINI_BASE_URL",
	)
	gemini_timeout_seconds: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT_SECONDS")

	# Speech-to-text backend: "gemini" (inline audio) or "google_speech" (Cloud Speech-to-Text)
	transcriber: str = Field(default="gemini", validation_alias="TRANSCRIBER")
	speech_language_code: str = Field(default="en-US", validation_alias="SPEECH_LANGUAGE_CODE")

	# Never call the provider, always serve the static payloads
	mock_mode: bool = Field(default=False, validation_alias=AliasChoices("MOCK_MODE", "ALLOW_MOCK_DATA"))
	# Serve the static payloads when a live provider call fails
	fallback_on_error: bool = Field(default=False, validation_alias="FALLBACK_ON_ERROR")

	port: int = Field(default=8787, validation_alias="PORT")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	log_format: str = Field(default="json", validation_alias="LOG_FORMAT")
	cors_origins: str = Field(default="*", validation_alias="CORS_ORIGINS")

	# Audio hand-off cache bounds
	audio_ttl_seconds: float = Field(default=600.0, validation_alias="AUDIO_TTL_SECONDS")
	audio_max_entries: int = Field(default=256, validation_alias="AUDIO_MAX_ENTRIES")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	@property
	def provider_configured(self) -> bool:
		return bool(self.gemini_api_key and self.gemini_api_key.strip())

	@property
	def cors_origin_list(self) -> list[str]:
		return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

settings = Settings()
