# app/schemas/providers.py
"""
Typed views of third-party response payloads.

Only the fields we read are declared; anything else is ignored. A payload
that fails validation is treated as a provider failure by the caller.
"""

from pydantic import BaseModel, ConfigDict, Field


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


# ----- OpenRouter (OpenAI-compatible chat completions) -----


class ChatMessage(_Lenient):
    role: str | None = None
    content: str | None = None


class ChatChoice(_Lenient):
    message: ChatMessage


class ChatCompletionResponse(_Lenient):
    choices: list[ChatChoice] = Field(min_length=1)

    def first_content(self) -> str | None:
        content = self.choices[0].message.content
        return content.strip() if content else None


# ----- MyMemory (GET /get?q=...&langpair=en|id) -----


class MyMemoryResponseData(_Lenient):
    translatedText: str


class MyMemoryResponse(_Lenient):
    responseData: MyMemoryResponseData
    # MyMemory sends 200 as an int but error codes as strings ("403").
    responseStatus: int | str | None = None

    def is_ok(self) -> bool:
        if self.responseStatus is None:
            return True
        try:
            return int(self.responseStatus) == 200
        except ValueError:
            return False
