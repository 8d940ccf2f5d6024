# app/services/translation_providers.py
"""
Interchangeable translation providers used by the fallback chain.

Each provider exposes:

    name: str
    async translate(text, source, target) -> str   # raises ProviderError
"""

import logging
from typing import Protocol

import httpx
from pydantic import ValidationError

from app.core.errors import ProviderError
from app.core.openrouter_client import OpenRouterClient
from app.schemas.providers import MyMemoryResponse

logger = logging.getLogger(__name__)

LANGUAGE_NAMES: dict[str, str] = {
    "en": "English",
    "id": "Indonesian",
}


def source_language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, "English")


def target_language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code, "Indonesian")


class Translator(Protocol):
    name: str

    async def translate(self, text: str, source: str, target: str) -> str:
        ...


class OpenRouterTranslator:
    """Primary provider: LLM translation via OpenRouter chat completions."""

    name = "openrouter"

    def __init__(self, client: OpenRouterClient):
        self.client = client

    async def translate(self, text: str, source: str, target: str) -> str:
        src = source_language_name(source)
        dst = target_language_name(target)
        return await self.client.chat(
            system_prompt=(
                f"You are a professional translator. Translate the given {src} "
                f"text to {dst}. Only return the translation, nothing else."
            ),
            user_prompt=f"Translate this {src} text to {dst}: {text}",
            max_tokens=100,
            temperature=0.3,
        )


class MyMemoryTranslator:
    """
    Secondary provider: MyMemory REST API.

    GET {url}?q=<text>&langpair=<source>|<target>[&de=<email>]
    -> {"responseData": {"translatedText": "..."}, "responseStatus": 200}
    """

    name = "mymemory"

    def __init__(
        self,
        url: str = "https://api.mymemory.translated.net/get",
        email: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.email = email
        self.timeout = timeout
        self.transport = transport

    async def translate(self, text: str, source: str, target: str) -> str:
        params = {"q": text, "langpair": f"{source}|{target}"}
        if self.email:
            params["de"] = self.email

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.url, params=params)
                response.raise_for_status()
                parsed = MyMemoryResponse.model_validate(response.json())
        except httpx.TimeoutException as e:
            raise ProviderError("MyMemory timeout") from e
        except httpx.HTTPStatusError as e:
            raise ProviderError(f"MyMemory HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ProviderError("MyMemory network error") from e
        except (ValueError, ValidationError) as e:
            raise ProviderError("MyMemory malformed response") from e

        if not parsed.is_ok():
            raise ProviderError(f"MyMemory status {parsed.responseStatus}")
        return parsed.responseData.translatedText.strip()


class DisabledTranslator:
    """
    Reserved slot in the chain. Always fails, so the ordering stays
    stable while no third provider is wired in.
    """

    def __init__(self, name: str = "reserved"):
        self.name = name

    async def translate(self, text: str, source: str, target: str) -> str:
        raise ProviderError(f"Provider '{self.name}' is disabled")
