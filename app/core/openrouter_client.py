# app/core/openrouter_client.py
import logging

import httpx
from pydantic import ValidationError

from app.core.errors import ProviderError
from app.schemas.providers import ChatCompletionResponse

logger = logging.getLogger(__name__)


class OpenRouterClient:
    """
    Minimal OpenRouter (OpenAI-compatible) chat-completions client.

    Every call:
      - carries a bounded timeout,
      - is attempted once (no retries),
      - raises ProviderError on missing key, timeout, network error,
        non-2xx status, or a payload that does not match
        ChatCompletionResponse.
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str = "https://openrouter.ai/api/v1",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def chat(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """Return the trimmed content of the first choice."""
        if not self.api_key:
            raise ProviderError("OpenRouter API key not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(
                    "/chat/completions", headers=headers, json=payload
                )
                response.raise_for_status()
                parsed = ChatCompletionResponse.model_validate(response.json())
        except httpx.TimeoutException as e:
            logger.warning("OpenRouter request timed out after %ss", self.timeout)
            raise ProviderError("OpenRouter timeout") from e
        except httpx.HTTPStatusError as e:
            logger.warning(
                "OpenRouter returned HTTP %s: %s",
                e.response.status_code,
                e.response.text[:200],
            )
            raise ProviderError(f"OpenRouter HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.warning("Network error calling OpenRouter: %s", e)
            raise ProviderError("OpenRouter network error") from e
        except (ValueError, ValidationError) as e:
            # ValueError covers a non-JSON body.
            logger.warning("Unexpected OpenRouter payload: %s", e)
            raise ProviderError("OpenRouter malformed response") from e

        content = parsed.first_content()
        if not content:
            raise ProviderError("OpenRouter returned empty content")
        return content
