# app/routers/directories.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from app.database import get_session
from app.repositories.vocabulary_repo import (
    DirectoryRepository,
    PracticeRepository,
    WordRepository,
)
from app.schemas.common import ApiResponse
from app.schemas.vocabulary import DirectoryCreate, DirectoryRead, DirectoryUpdate
from app.services.vocabulary_service import VocabularyService

router = APIRouter(prefix="/directories", tags=["Directories"])

service = VocabularyService(
    DirectoryRepository(), WordRepository(), PracticeRepository()
)


@router.get("", response_model=ApiResponse[list[DirectoryRead]])
def list_directories(session: Session = Depends(get_session)):
    """All directories ordered by name."""
    directories = service.list_directories(session)
    return ApiResponse[list[DirectoryRead]](
        message="Directories retrieved successfully",
        data=[DirectoryRead.model_validate(d) for d in directories],
    )


@router.post(
    "",
    response_model=ApiResponse[DirectoryRead],
    status_code=status.HTTP_201_CREATED,
)
def create_directory(
    payload: DirectoryCreate,
    session: Session = Depends(get_session),
):
    directory = service.create_directory(session, payload)
    return ApiResponse[DirectoryRead](
        message="Directory created successfully",
        data=DirectoryRead.model_validate(directory),
    )


@router.put("/{directory_id}", response_model=ApiResponse[DirectoryRead])
def rename_directory(
    directory_id: int,
    payload: DirectoryUpdate,
    session: Session = Depends(get_session),
):
    directory = service.rename_directory(session, directory_id, payload)
    return ApiResponse[DirectoryRead](
        message="Directory updated successfully",
        data=DirectoryRead.model_validate(directory),
    )


@router.delete("/{directory_id}", response_model=ApiResponse[None])
def delete_directory(
    directory_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete a directory.

    Words inside it are kept and moved to "no directory".
    """
    service.delete_directory(session, directory_id)
    return ApiResponse[None](message="Directory deleted successfully")
