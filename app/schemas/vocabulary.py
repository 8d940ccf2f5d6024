# app/schemas/vocabulary.py
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from app.core.security import ensure_aware


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty")
    return v


class _UtcRead(SQLModel):
    """Read model whose datetimes are always emitted with a UTC offset."""

    @field_validator("*")
    @classmethod
    def assume_utc(cls, v):
        if isinstance(v, datetime):
            return ensure_aware(v)
        return v


# ----- Directories -----


class DirectoryCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class DirectoryUpdate(DirectoryCreate):
    pass


class DirectoryRead(_UtcRead):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


# ----- Words -----


class WordCreate(SQLModel):
    """
    Payload for adding a word.

    `indonesian` may be left empty and filled later via
    POST /words/{id}/ai-translate.
    """

    model_config = ConfigDict(extra="forbid")

    english: str = Field(max_length=255)
    indonesian: str | None = Field(default=None, max_length=500)
    directory_id: int | None = None

    @field_validator("english")
    @classmethod
    def english_not_blank(cls, v: str) -> str:
        return _strip_required(v)


class WordUpdate(SQLModel):
    """Partial update; only provided fields are applied."""

    model_config = ConfigDict(extra="forbid")

    english: str | None = Field(default=None, max_length=255)
    indonesian: str | None = Field(default=None, max_length=500)
    directory_id: int | None = None

    @field_validator("english")
    @classmethod
    def english_not_blank(cls, v: str | None) -> str:
        # Omitted means unchanged; an explicit null is not a valid word.
        if v is None:
            raise ValueError("must not be empty")
        return _strip_required(v)


class WordRead(_UtcRead):
    id: int
    english: str
    indonesian: str | None = None
    directory_id: int | None = None
    correct_count: int
    wrong_count: int
    last_practiced: datetime | None = None
    created_at: datetime
    updated_at: datetime


# ----- Progress / practice history -----


class ProgressResult(SQLModel):
    word_id: int
    correct: bool


class ProgressCreate(SQLModel):
    """
    Results of one flashcard run.

    total_words defaults to the number of counted results and is never
    stored below it.
    """

    directory_id: int | None = None
    total_words: int | None = Field(default=None, ge=0)
    results: list[ProgressResult] = Field(default_factory=list)


class PracticeSessionRead(_UtcRead):
    id: int
    directory_id: int | None = None
    directory_name: str | None = None
    total_words: int
    correct: int
    wrong: int
    score_percentage: float
    created_at: datetime
