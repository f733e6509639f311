from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

# Load .env file if present (no extra dependency needed)
_env_path = Path(__file__).resolve().parent / ".env"
if _env_path.exists():
    for line in _env_path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key, value = key.strip(), value.strip()
        if value and key not in os.environ:  # don't override existing env vars
            os.environ[key] = value


def _split_origins(raw: str) -> tuple[str, ...]:
    return tuple(o.strip() for o in raw.split(",") if o.strip())


@dataclass(frozen=True)
class Settings:
    """Application-wide settings resolved from environment variables."""

    # GitHub
    github_api_base: str = field(
        default_factory=lambda: os.getenv("GITHUB_API_BASE", "https://api.github.com")
    )
    github_token: str | None = field(
        default_factory=lambda: os.getenv("GITHUB_TOKEN")
    )
    github_timeout: float = field(
        default_factory=lambda: float(os.getenv("GITHUB_TIMEOUT", "30"))
    )
    github_user_agent: str = field(
        default_factory=lambda: os.getenv("GITHUB_USER_AGENT", "GitHubDashboardAPI")
    )

    # Cache
    cache_ttl_seconds: float = field(
        default_factory=lambda: float(os.getenv("CACHE_TTL_SECONDS", "60"))
    )

    # LLM (Groq's OpenAI-compatible endpoint by default)
    llm_api_key: str = field(
        default_factory=lambda: os.getenv("LLM_API_KEY", "")
    )
    llm_api_base: str = field(
        default_factory=lambda: os.getenv(
            "LLM_API_BASE", "https://api.groq.com/openai/v1"
        )
    )
    llm_model: str = field(
        default_factory=lambda: os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
    )
    llm_temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.7"))
    )
    llm_max_tokens: int = field(
        default_factory=lambda: int(os.getenv("LLM_MAX_TOKENS", "1024"))
    )
    llm_timeout: float = field(
        default_factory=lambda: float(os.getenv("LLM_TIMEOUT", "60"))
    )

    # CORS
    cors_allowed_origins: tuple[str, ...] = field(
        default_factory=lambda: _split_origins(
            os.getenv(
                "CORS_ALLOWED_ORIGINS",
                "http://localhost:5173,https://localhost:5173",
            )
        )
    )


def get_settings() -> Settings:
    return Settings()
