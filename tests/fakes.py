"""Test doubles for the notifier and translation providers."""

from app.core.errors import ProviderError


class EmailRecorder:
    """Notifier stand-in that remembers (email, code) pairs."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []

    def __call__(self, to_email: str, code: str) -> None:
        self.sent.append((to_email, code))

    def last_code_for(self, email: str) -> str:
        for to_email, code in reversed(self.sent):
            if to_email == email:
                return code
        raise AssertionError(f"no code sent to {email}")


class FakeTranslator:
    """
    Provider stand-in. `result` is returned, or raised when it is an
    exception instance.
    """

    def __init__(self, name: str, result):
        self.name = name
        self.result = result
        self.calls: list[tuple[str, str, str]] = []

    async def translate(self, text: str, source: str, target: str) -> str:
        self.calls.append((text, source, target))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def failing(name: str) -> FakeTranslator:
    return FakeTranslator(name, ProviderError(f"{name} down"))


class FakeAIService:
    """Canned AIService replacement; raises `error` when set."""

    def __init__(self, explanation: str = "", words: list[str] | None = None, error=None):
        self.explanation = explanation
        self.words = words or []
        self.error = error

    async def explain_sentence(self, sentence: str) -> str:
        if self.error:
            raise self.error
        return self.explanation

    async def extract_vocabulary(self, sentence: str) -> list[str]:
        if self.error:
            raise self.error
        return self.words
