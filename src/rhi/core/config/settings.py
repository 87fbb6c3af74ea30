"""Application settings loaded from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Reproductive health insight server configuration."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Server
    # Default to loopback; the server carries health data and has no auth layer.
    rhi_host: str = "127.0.0.1"
    rhi_port: int = 8001
    rhi_log_level: str = "info"
    rhi_allow_insecure_bind: bool = False

    # Provider fallback order, primary first (comma separated).
    llm_providers: str = "gemini,ollama"

    # Gemini (primary). GEMINI_API_KEYS holds extra comma-separated keys
    # rotated through on quota errors.
    gemini_api_key: str = ""
    gemini_api_keys: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    # Ollama (local fallback). An empty base URL marks it not configured.
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:8b"

    # Optional hosted providers
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"

    # Generation
    llm_temperature: float = 0.7
    llm_top_k: int = 40
    llm_top_p: float = 0.95
    llm_max_output_tokens: int = 1024
    llm_timeout_seconds: float = 30.0

    # Domain schemas (defaults to the packaged schemas/ directory)
    schema_dir: str = ""

    @property
    def provider_order(self) -> list[str]:
        return [p.strip().lower() for p in self.llm_providers.split(",") if p.strip()]

    @property
    def extra_gemini_keys(self) -> list[str]:
        return [k.strip() for k in self.gemini_api_keys.split(",") if k.strip()]


def get_settings() -> Settings:
    """Create and return a Settings instance."""
    return Settings()
