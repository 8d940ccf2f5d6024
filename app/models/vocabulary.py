# app/models/vocabulary.py
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Directory(SQLModel, table=True):
    """
    User-defined category grouping words (e.g. "Travel", "Verbs").
    """

    __tablename__ = "directories"

    id: int | None = Field(default=None, primary_key=True)

    name: str = Field(max_length=100, index=True)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )


class Word(SQLModel, table=True):
    """
    Vocabulary entry: English term with its Indonesian translation
    and flashcard quiz counters.
    """

    __tablename__ = "words"

    id: int | None = Field(default=None, primary_key=True)

    english: str = Field(max_length=255, index=True)
    indonesian: str | None = Field(default=None, max_length=500)

    # null => not in any directory
    directory_id: int | None = Field(
        default=None,
        foreign_key="directories.id",
        index=True,
    )

    correct_count: int = Field(default=0, ge=0)
    wrong_count: int = Field(default=0, ge=0)
    last_practiced: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )
