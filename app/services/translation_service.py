# app/services/translation_service.py
import logging
from typing import Sequence

from app.core.errors import ProviderError
from app.services.translation_providers import Translator

logger = logging.getLogger(__name__)

UNAVAILABLE = "Translation unavailable"

DEFAULT_SOURCE = "en"
DEFAULT_TARGET = "id"

# Last-resort English -> Indonesian lookups for very common words.
STATIC_DICTIONARY: dict[str, str] = {
    "hello": "halo",
    "hi": "hai",
    "goodbye": "selamat tinggal",
    "bye": "dah",
    "thank you": "terima kasih",
    "thanks": "terima kasih",
    "please": "tolong",
    "sorry": "maaf",
    "yes": "ya",
    "no": "tidak",
    "good": "baik",
    "bad": "buruk",
    "good morning": "selamat pagi",
    "good night": "selamat malam",
    "water": "air",
    "food": "makanan",
    "eat": "makan",
    "drink": "minum",
    "house": "rumah",
    "book": "buku",
    "friend": "teman",
    "family": "keluarga",
    "love": "cinta",
    "cat": "kucing",
    "dog": "anjing",
    "car": "mobil",
    "school": "sekolah",
    "work": "kerja",
    "today": "hari ini",
    "tomorrow": "besok",
    "yesterday": "kemarin",
}


def validate(candidate: str | None, original: str) -> bool:
    """
    Heuristic acceptance gate for a provider result.

    Rejects:
      - empty or single-character results
      - echoes of the input (case-insensitive)
      - provider error sentinels containing both "translation" and "fail"
    """
    if candidate is None:
        return False
    text = candidate.strip()
    if len(text) <= 1:
        return False
    lowered = text.lower()
    if lowered == original.strip().lower():
        return False
    if "translation" in lowered and "fail" in lowered:
        return False
    return True


class TranslationService:
    """
    Ordered fallback chain over translation providers.

    Strategy:
      1. normalize input (trim, lower-case)
      2. try each provider in order; first validated result wins
      3. static dictionary
      4. UNAVAILABLE sentinel (a successful return, never an error)

    A failing provider is skipped, not retried.
    """

    def __init__(
        self,
        providers: Sequence[Translator],
        dictionary: dict[str, str] | None = None,
    ):
        self.providers = list(providers)
        self.dictionary = STATIC_DICTIONARY if dictionary is None else dictionary

    @staticmethod
    def normalize(text: str) -> str:
        return text.strip().lower()

    async def translate(
        self,
        text: str,
        source: str | None = None,
        target: str | None = None,
    ) -> str:
        normalized = self.normalize(text)
        source = (source or DEFAULT_SOURCE).strip().lower()
        target = (target or DEFAULT_TARGET).strip().lower()

        for provider in self.providers:
            try:
                candidate = await provider.translate(normalized, source, target)
            except ProviderError as e:
                logger.warning("Translation provider %s failed: %s", provider.name, e)
                continue

            if validate(candidate, normalized):
                logger.info("Translation served by %s", provider.name)
                return candidate.strip()

            logger.info("Rejected result from %s for %r", provider.name, normalized)

        fallback = None
        if (source, target) == (DEFAULT_SOURCE, DEFAULT_TARGET):
            fallback = self.dictionary.get(normalized)
        if fallback:
            logger.info("Translation served from static dictionary")
            return fallback

        logger.warning("No translation available for %r", normalized)
        return UNAVAILABLE
