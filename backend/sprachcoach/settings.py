from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	# LLM provider (OpenAI-compatible chat completions, OpenRouter by default)
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="google/gemini-2.5-flash", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="https://localhost", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="Sprachcoach", validation_alias="OPENROUTER_TITLE")

	# Exercise generation: retries for malformed or duplicate responses
	generation_max_attempts: int = Field(default=3, validation_alias="GENERATION_MAX_ATTEMPTS")

	# Recently generated content, used for duplicate detection
	content_cache_size: int = Field(default=100, validation_alias="CONTENT_CACHE_SIZE")
	content_cache_ttl_seconds: float = Field(default=30 * 60, validation_alias="CONTENT_CACHE_TTL_SECONDS")

	# Listening evaluation rejects transcripts longer than this many words
	max_transcript_tokens: int = Field(default=500, validation_alias="MAX_TRANSCRIPT_TOKENS")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
