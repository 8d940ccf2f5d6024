# app/services/ai_service.py
import json
import logging
import re

from app.core.errors import ProviderError, UpstreamUnavailableError
from app.core.openrouter_client import OpenRouterClient

logger = logging.getLogger(__name__)

EXPLAIN_SYSTEM_PROMPT = (
    "You are an assistant that analyzes English sentences for Indonesian "
    "learners, give the analysis directly in Indonesian (no introduction), "
    "focusing on grammar and natural alternatives, and always use this format: "
    "1. **Grammar Analysis** - jelaskan tenses, aspek, struktur "
    "subjek-kata kerja-objek, dan poin grammar penting; "
    "2. **Natural Alternatives** - berikan cara lain yang lebih natural untuk "
    "menyampaikan ide yang sama dalam bahasa Inggris."
)

EXTRACT_SYSTEM_PROMPT = (
    "You are a language learning assistant. Extract the most important "
    "vocabulary words from an English sentence that would be valuable for "
    "Indonesian learners to learn. Focus on:\n"
    "- Key nouns, verbs, adjectives, and adverbs\n"
    "- Words that are central to understanding the sentence\n"
    "- Words that might be challenging for language learners\n"
    "- Avoid very common words like 'the', 'a', 'is', 'are', 'and', 'or', 'but'\n\n"
    "Return only a JSON array of strings containing the vocabulary words, "
    'nothing else. Example: ["important", "vocabulary", "words"]'
)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def parse_vocabulary(content: str) -> list[str]:
    """
    Parse the model's JSON array answer.

    Markdown code fences are tolerated. Anything that is not a JSON list
    of strings yields an empty list.
    """
    cleaned = _CODE_FENCE.sub("", content.strip())
    try:
        data = json.loads(cleaned)
    except ValueError:
        logger.info("Vocabulary answer was not JSON; returning empty list")
        return []
    if not isinstance(data, list):
        return []

    words: list[str] = []
    for item in data:
        if not isinstance(item, str):
            return []
        item = item.strip()
        if item and item not in words:
            words.append(item)
    return words


class AIService:
    """
    Sentence explanation and vocabulary extraction.

    Single provider, no fallback: a provider failure is surfaced as
    UpstreamUnavailableError (503) rather than masked.
    """

    def __init__(self, client: OpenRouterClient):
        self.client = client

    async def explain_sentence(self, sentence: str) -> str:
        try:
            return await self.client.chat(
                system_prompt=EXPLAIN_SYSTEM_PROMPT,
                user_prompt=f'Please explain this English sentence: "{sentence}"',
                max_tokens=800,
                temperature=0.5,
            )
        except ProviderError as e:
            logger.warning("Sentence explanation failed: %s", e)
            raise UpstreamUnavailableError(
                "Explanation service temporarily unavailable"
            ) from e

    async def extract_vocabulary(self, sentence: str) -> list[str]:
        try:
            content = await self.client.chat(
                system_prompt=EXTRACT_SYSTEM_PROMPT,
                user_prompt=(
                    "Extract key vocabulary words from this English sentence: "
                    f'"{sentence}"'
                ),
                max_tokens=200,
                temperature=0.3,
            )
        except ProviderError as e:
            logger.warning("Vocabulary extraction failed: %s", e)
            raise UpstreamUnavailableError(
                "Vocabulary extraction service temporarily unavailable"
            ) from e

        return parse_vocabulary(content)
