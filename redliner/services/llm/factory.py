import logging

from redliner.services.llm.base import LLMProvider

logger = logging.getLogger(__name__)


def create_llm_provider(settings) -> LLMProvider | None:
    """Create and return the configured LLM provider.

    Returns None when no usable API key is configured; callers then take their
    deterministic fallback paths. Adding a new provider = one new elif block here,
    zero changes to business logic elsewhere.
    """
    if not settings.llm_enabled:
        logger.info("No valid LLM API key configured, LLM features disabled")
        return None

    if settings.LLM_PROVIDER == "openai":
        from redliner.services.llm.openai_provider import OpenAIProvider
        return OpenAIProvider(
            api_key=settings.OPENAI_API_KEY,
            model=settings.LLM_MODEL,
            base_url=settings.LLM_BASE_URL,
            timeout=settings.LLM_TIMEOUT_SECONDS,
        )

    raise ValueError(f"Unsupported LLM provider: {settings.LLM_PROVIDER!r}")
