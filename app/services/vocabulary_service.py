# app/services/vocabulary_service.py
from datetime import datetime, timezone

from sqlmodel import Session

from app.core.errors import NotFoundError
from app.models.practice import PracticeSession
from app.models.vocabulary import Directory, Word
from app.repositories.vocabulary_repo import (
    DirectoryRepository,
    PracticeRepository,
    WordRepository,
)
from app.schemas.vocabulary import (
    DirectoryCreate,
    DirectoryUpdate,
    PracticeSessionRead,
    ProgressCreate,
    WordCreate,
    WordUpdate,
)

SESSIONS_PAGE_SIZE = 15


def _now() -> datetime:
    return datetime.now(timezone.utc)


class VocabularyService:
    """
    Business logic for words, directories and practice history.

    Responsibilities:
      - existence checks for referenced rows (404 otherwise)
      - flashcard counters and practice-session summaries
    """

    def __init__(
        self,
        directories: DirectoryRepository,
        words: WordRepository,
        practice: PracticeRepository,
    ):
        self.directories = directories
        self.words = words
        self.practice = practice

    # ---- internal helpers ----

    def _ensure_directory(self, session: Session, directory_id: int | None) -> None:
        if directory_id is None:
            return
        if self.directories.get_by_id(session, directory_id) is None:
            raise NotFoundError("Directory not found")

    # ----- Directories -----

    def list_directories(self, session: Session) -> list[Directory]:
        return self.directories.list(session)

    def get_directory(self, session: Session, directory_id: int) -> Directory:
        directory = self.directories.get_by_id(session, directory_id)
        if directory is None:
            raise NotFoundError("Directory not found")
        return directory

    def create_directory(self, session: Session, payload: DirectoryCreate) -> Directory:
        return self.directories.create(session, Directory(name=payload.name))

    def rename_directory(
        self, session: Session, directory_id: int, payload: DirectoryUpdate
    ) -> Directory:
        directory = self.get_directory(session, directory_id)
        directory.name = payload.name
        directory.updated_at = _now()
        return self.directories.update(session, directory)

    def delete_directory(self, session: Session, directory_id: int) -> None:
        """Delete a directory; its words are kept and detached."""
        directory = self.get_directory(session, directory_id)
        self.directories.delete(session, directory)

    # ----- Words -----

    def list_words(
        self, session: Session, directory_id: int | None = None
    ) -> list[Word]:
        return self.words.list(session, directory_id=directory_id)

    def get_word(self, session: Session, word_id: int) -> Word:
        word = self.words.get_by_id(session, word_id)
        if word is None:
            raise NotFoundError("Word not found")
        return word

    def create_word(self, session: Session, payload: WordCreate) -> Word:
        self._ensure_directory(session, payload.directory_id)
        word = Word(
            english=payload.english,
            indonesian=payload.indonesian,
            directory_id=payload.directory_id,
        )
        return self.words.create(session, word)

    def update_word(
        self, session: Session, word_id: int, payload: WordUpdate
    ) -> Word:
        """Apply only the fields present in the request body."""
        word = self.get_word(session, word_id)
        changes = payload.model_dump(exclude_unset=True)

        if "directory_id" in changes:
            self._ensure_directory(session, changes["directory_id"])

        for field, value in changes.items():
            setattr(word, field, value)
        word.updated_at = _now()
        return self.words.update(session, word)

    def set_translation(self, session: Session, word_id: int, translation: str) -> Word:
        word = self.get_word(session, word_id)
        word.indonesian = translation
        word.updated_at = _now()
        return self.words.update(session, word)

    def delete_word(self, session: Session, word_id: int) -> None:
        word = self.get_word(session, word_id)
        self.words.delete(session, word)

    # ----- Progress / history -----

    def record_progress(
        self, session: Session, payload: ProgressCreate
    ) -> PracticeSession:
        """
        Apply flashcard results and store a session summary.

        - each known word gets correct_count/wrong_count += 1 and last_practiced
        - unknown word ids are skipped
        - total_words is at least correct + wrong, so the score stays within 0..100
        - score_percentage = correct / total_words * 100 (0 when total is 0)
        """
        self._ensure_directory(session, payload.directory_id)

        now = _now()
        known = self.words.get_many(session, [r.word_id for r in payload.results])

        correct = 0
        wrong = 0
        touched: list[Word] = []
        for result in payload.results:
            word = known.get(result.word_id)
            if word is None:
                continue
            if result.correct:
                word.correct_count += 1
                correct += 1
            else:
                word.wrong_count += 1
                wrong += 1
            word.last_practiced = now
            word.updated_at = now
            touched.append(word)

        total = max(payload.total_words or 0, correct + wrong)
        score = round(correct / total * 100, 1) if total else 0.0

        practice = PracticeSession(
            directory_id=payload.directory_id,
            total_words=total,
            correct=correct,
            wrong=wrong,
            score_percentage=score,
            created_at=now,
        )
        return self.practice.record(session, practice, touched)

    def list_sessions(self, session: Session, page: int = 1) -> list[PracticeSessionRead]:
        """Paginated history, SESSIONS_PAGE_SIZE rows per page (1-based)."""
        page = max(page, 1)
        rows = self.practice.list_page(
            session,
            skip=(page - 1) * SESSIONS_PAGE_SIZE,
            limit=SESSIONS_PAGE_SIZE,
        )
        return [
            PracticeSessionRead(
                id=row.id,
                directory_id=row.directory_id,
                directory_name=directory_name,
                total_words=row.total_words,
                correct=row.correct,
                wrong=row.wrong,
                score_percentage=row.score_percentage,
                created_at=row.created_at,
            )
            for row, directory_name in rows
        ]
