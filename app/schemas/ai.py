# app/schemas/ai.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class TranslateRequest(SQLModel):
    """
    `from` / `to` are language codes ("en", "id"); both optional,
    defaulting to English -> Indonesian.
    """

    model_config = ConfigDict(populate_by_name=True)

    text: str = Field(max_length=2000)
    source: str | None = Field(default=None, alias="from", max_length=10)
    target: str | None = Field(default=None, alias="to", max_length=10)

    @field_validator("text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class TranslateResponse(SQLModel):
    translation: str


class SentenceRequest(SQLModel):
    """Body of /explain-sentence and /extract-vocabulary."""

    sentence: str = Field(max_length=2000)

    @field_validator("sentence")
    @classmethod
    def sentence_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class ExplainSentenceResponse(SQLModel):
    translation: str
    explanation: str


class ExtractVocabularyResponse(SQLModel):
    vocabulary: list[str]
