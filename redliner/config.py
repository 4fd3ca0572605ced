from typing import Literal

from pydantic_settings import BaseSettings

# Placeholder key shipped in example .env files; treated the same as no key.
PLACEHOLDER_API_KEY = "sk-..."


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All values come from .env file or environment. Validated at startup:
    missing required values cause an immediate error with a clear message.
    """

    # LLM
    OPENAI_API_KEY: str = ""
    LLM_PROVIDER: Literal["openai"] = "openai"
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_BASE_URL: str | None = None  # OpenAI-compatible gateway, e.g. https://api.aimlapi.com/v1
    LLM_TIMEOUT_SECONDS: float = 60.0
    LLM_MAX_CHARS: int = 400_000
    LLM_MAX_OUTPUT_TOKENS: int = 4000

    # Analysis
    ANALYSIS_LIMIT: int = 5
    REFERENCE_CLAUSES_PATH: str | None = None

    # Database
    DATABASE_URL: str  # async driver (asyncpg)
    DATABASE_URL_SYNC: str  # sync driver (for Alembic CLI)

    # Redis
    REDIS_URL: str = "redis://redis:6379/0"

    # Documents
    DOCUMENT_TTL_HOURS: int = 24
    MAX_UPLOAD_SIZE_MB: int = 10

    # App
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def llm_enabled(self) -> bool:
        key = self.OPENAI_API_KEY.strip()
        return bool(key) and key != PLACEHOLDER_API_KEY
