# app/models/practice.py
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class PracticeSession(SQLModel, table=True):
    """
    Summary of one finished flashcard run (memorization history).

    Snapshot only: counters are copied at save time and never recomputed.
    """

    __tablename__ = "practice_sessions"

    id: int | None = Field(default=None, primary_key=True)

    # null => practiced across all words
    directory_id: int | None = Field(
        default=None,
        foreign_key="directories.id",
        index=True,
    )

    total_words: int = Field(default=0, ge=0)
    correct: int = Field(default=0, ge=0)
    wrong: int = Field(default=0, ge=0)
    score_percentage: float = Field(default=0.0)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        index=True,
    )
