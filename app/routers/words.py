# app/routers/words.py
from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session

from app.core.provider_clients import get_translation_service
from app.database import get_session
from app.repositories.vocabulary_repo import (
    DirectoryRepository,
    PracticeRepository,
    WordRepository,
)
from app.schemas.ai import TranslateResponse
from app.schemas.common import ApiResponse
from app.schemas.vocabulary import WordCreate, WordRead, WordUpdate
from app.services.translation_service import UNAVAILABLE, TranslationService
from app.services.vocabulary_service import VocabularyService

router = APIRouter(prefix="/words", tags=["Words"])

service = VocabularyService(
    DirectoryRepository(), WordRepository(), PracticeRepository()
)


@router.get("", response_model=ApiResponse[list[WordRead]])
def list_words(
    directory_id: int | None = None,
    session: Session = Depends(get_session),
):
    """List words, newest first. Filter with ?directory_id=."""
    words = service.list_words(session, directory_id=directory_id)
    return ApiResponse[list[WordRead]](
        message="Words retrieved successfully",
        data=[WordRead.model_validate(w) for w in words],
    )


@router.post(
    "",
    response_model=ApiResponse[WordRead],
    status_code=status.HTTP_201_CREATED,
)
def create_word(
    payload: WordCreate,
    session: Session = Depends(get_session),
):
    word = service.create_word(session, payload)
    return ApiResponse[WordRead](
        message="Word created successfully",
        data=WordRead.model_validate(word),
    )


@router.get("/{word_id}", response_model=ApiResponse[WordRead])
def get_word(
    word_id: int,
    session: Session = Depends(get_session),
):
    word = service.get_word(session, word_id)
    return ApiResponse[WordRead](
        message="Word retrieved successfully",
        data=WordRead.model_validate(word),
    )


@router.put("/{word_id}", response_model=ApiResponse[WordRead])
@router.patch("/{word_id}", response_model=ApiResponse[WordRead])
def update_word(
    word_id: int,
    payload: WordUpdate,
    session: Session = Depends(get_session),
):
    """Partial update: only fields present in the body are changed."""
    word = service.update_word(session, word_id, payload)
    return ApiResponse[WordRead](
        message="Word updated successfully",
        data=WordRead.model_validate(word),
    )


@router.delete("/{word_id}", response_model=ApiResponse[None])
def delete_word(
    word_id: int,
    session: Session = Depends(get_session),
):
    service.delete_word(session, word_id)
    return ApiResponse[None](message="Word deleted successfully")


@router.post("/{word_id}/ai-translate", response_model=ApiResponse[TranslateResponse])
async def ai_translate_word(
    word_id: int,
    session: Session = Depends(get_session),
    translator: TranslationService = Depends(get_translation_service),
):
    """
    Run the translation fallback chain on the word's English text and
    store the result. The "unavailable" sentinel is returned but not saved.

    Storage calls run in the threadpool; only the provider calls are awaited
    on the event loop.
    """
    word = await run_in_threadpool(service.get_word, session, word_id)
    translation = await translator.translate(word.english)
    if translation != UNAVAILABLE:
        await run_in_threadpool(service.set_translation, session, word_id, translation)
    return ApiResponse[TranslateResponse](
        message="Translation completed successfully",
        data=TranslateResponse(translation=translation),
    )
