# app/core/provider_clients.py
from functools import lru_cache

from app.core.config import get_settings
from app.core.openrouter_client import OpenRouterClient
from app.services.ai_service import AIService
from app.services.translation_providers import (
    DisabledTranslator,
    MyMemoryTranslator,
    OpenRouterTranslator,
)
from app.services.translation_service import TranslationService

settings = get_settings()


@lru_cache
def get_openrouter_client() -> OpenRouterClient:
    """
    OpenRouter client shared by translation and explanation.

    A missing OPENROUTER_API_KEY does not fail startup; every call then
    raises ProviderError instead.
    """
    return OpenRouterClient(
        api_key=settings.OPENROUTER_API_KEY,
        model=settings.OPENROUTER_MODEL,
        base_url=settings.OPENROUTER_BASE_URL,
        timeout=settings.PROVIDER_TIMEOUT_SECONDS,
    )


@lru_cache
def get_translation_service() -> TranslationService:
    """
    Fallback chain in fixed order:
      1. OpenRouter (LLM)
      2. MyMemory
      3. reserved slot (disabled)
    """
    return TranslationService(
        providers=[
            OpenRouterTranslator(get_openrouter_client()),
            MyMemoryTranslator(
                url=settings.MYMEMORY_URL,
                email=settings.MYMEMORY_EMAIL,
                timeout=settings.PROVIDER_TIMEOUT_SECONDS,
            ),
            DisabledTranslator("reserved"),
        ]
    )


@lru_cache
def get_ai_service() -> AIService:
    return AIService(get_openrouter_client())
