# app/routers/progress.py
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session

from app.database import get_session
from app.repositories.vocabulary_repo import (
    DirectoryRepository,
    PracticeRepository,
    WordRepository,
)
from app.schemas.common import ApiResponse
from app.schemas.vocabulary import PracticeSessionRead, ProgressCreate
from app.services.vocabulary_service import VocabularyService

router = APIRouter(tags=["Progress"])

service = VocabularyService(
    DirectoryRepository(), WordRepository(), PracticeRepository()
)


@router.post(
    "/progress",
    response_model=ApiResponse[PracticeSessionRead],
    status_code=status.HTTP_201_CREATED,
)
def save_progress(
    payload: ProgressCreate,
    session: Session = Depends(get_session),
):
    """
    Save the results of a flashcard run.

    Updates each word's correct/wrong counters and records a
    memorization-history entry.
    """
    practice = service.record_progress(session, payload)
    directory_name = None
    if practice.directory_id is not None:
        directory_name = service.get_directory(session, practice.directory_id).name

    return ApiResponse[PracticeSessionRead](
        message="Progress saved successfully",
        data=PracticeSessionRead(
            id=practice.id,
            directory_id=practice.directory_id,
            directory_name=directory_name,
            total_words=practice.total_words,
            correct=practice.correct,
            wrong=practice.wrong,
            score_percentage=practice.score_percentage,
            created_at=practice.created_at,
        ),
    )


@router.get("/sessions", response_model=ApiResponse[list[PracticeSessionRead]])
def list_sessions(
    page: int = Query(default=1, ge=1),
    session: Session = Depends(get_session),
):
    """Memorization history, 15 entries per page, newest first."""
    return ApiResponse[list[PracticeSessionRead]](
        message="Sessions retrieved successfully",
        data=service.list_sessions(session, page=page),
    )
