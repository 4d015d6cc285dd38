"""Configuration management for the Multi-AI Chat server."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


def _load_env_file(env_path: Optional[Path] = None) -> None:
    """Load .env from root directory if present, without overriding the environment."""
    env_path = env_path or Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                key, value = stripped.split("=", 1)
                key, value = key.strip(), value.strip().strip("'\"")
                if key and value and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        pass


_load_env_file()


DEFAULT_APP_NAME = "Multi-AI Chat Server"
DEFAULT_APP_VERSION = "1.0.0"
DEFAULT_PROVIDER_PRIORITY = "gemini,huggingface,openai,mistral"


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_float(name: str, fallback: float) -> float:
    try:
        return float(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env(name: str, fallback: Optional[str] = None):
    return lambda: os.getenv(name, fallback)


class Settings(BaseModel):
    """Application settings with environment fallbacks."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default_factory=_env("HOST", "0.0.0.0"))
    server_port: int = Field(default_factory=lambda: _env_int("PORT", 3001))

    # Provider credentials (absence disables that provider)
    gemini_api_key: Optional[str] = Field(default_factory=_env("GEMINI_API_KEY"))
    huggingface_api_key: Optional[str] = Field(default_factory=_env("HUGGINGFACE_API_KEY"))
    openai_api_key: Optional[str] = Field(default_factory=_env("OPENAI_API_KEY"))
    mistral_api_key: Optional[str] = Field(default_factory=_env("MISTRAL_API_KEY"))

    # Provider models
    gemini_model: str = Field(default_factory=_env("GEMINI_MODEL", "gemini-1.5-flash"))
    huggingface_model: str = Field(default_factory=_env("HUGGINGFACE_MODEL", "microsoft/DialoGPT-medium"))
    openai_model: str = Field(default_factory=_env("OPENAI_MODEL", "gpt-4o-mini"))
    mistral_model: str = Field(default_factory=_env("MISTRAL_MODEL", "mistral-small-latest"))

    # Provider endpoints
    gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta")
    huggingface_base_url: str = Field(default="https://api-inference.huggingface.co/models")
    openai_base_url: str = Field(default="https://api.openai.com/v1")
    mistral_base_url: str = Field(default="https://api.mistral.ai/v1")

    # Generation budget, fixed for the process lifetime
    max_tokens: int = Field(default_factory=lambda: _env_int("MULTICHAT_MAX_TOKENS", 150))
    temperature: float = Field(default_factory=lambda: _env_float("MULTICHAT_TEMPERATURE", 0.7))

    # Routing
    provider_priority_raw: str = Field(
        default_factory=_env("MULTICHAT_PROVIDER_PRIORITY", DEFAULT_PROVIDER_PRIORITY)
    )
    request_timeout: float = Field(default_factory=lambda: _env_float("MULTICHAT_REQUEST_TIMEOUT", 30.0))
    history_window: int = Field(default_factory=lambda: _env_int("MULTICHAT_HISTORY_WINDOW", 10))
    disconnect_poll_interval: float = Field(default=0.5)

    # HTTP behaviour
    client_url: str = Field(default_factory=_env("CLIENT_URL", "http://localhost:5173"))
    enable_docs: bool = Field(default_factory=lambda: os.getenv("MULTICHAT_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default="/docs")

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.client_url.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.client_url.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None

    @property
    def provider_priority(self) -> List[str]:
        """Configured fallback order, lower-cased, duplicates removed."""
        seen: List[str] = []
        for name in self.provider_priority_raw.split(","):
            name = name.strip().lower()
            if name and name not in seen:
                seen.append(name)
        return seen

    @property
    def api_keys(self) -> Dict[str, Optional[str]]:
        """Credential per provider identifier."""
        return {
            "gemini": self.gemini_api_key,
            "huggingface": self.huggingface_api_key,
            "openai": self.openai_api_key,
            "mistral": self.mistral_api_key,
        }

    @property
    def secrets(self) -> List[str]:
        """Configured credential values, for log and error redaction."""
        return [key for key in self.api_keys.values() if key]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
