# app/repositories/vocabulary_repo.py
from sqlmodel import Session, select

from app.models.practice import PracticeSession
from app.models.vocabulary import Directory, Word


class DirectoryRepository:
    """
    Data access layer for Directory.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    def get_by_id(self, session: Session, directory_id: int) -> Directory | None:
        return session.get(Directory, directory_id)

    def list(self, session: Session) -> list[Directory]:
        stmt = select(Directory).order_by(Directory.name)
        return session.exec(stmt).all()

    def create(self, session: Session, directory: Directory) -> Directory:
        session.add(directory)
        session.commit()
        session.refresh(directory)
        return directory

    def update(self, session: Session, directory: Directory) -> Directory:
        session.add(directory)
        session.commit()
        session.refresh(directory)
        return directory

    def delete(self, session: Session, directory: Directory) -> None:
        """
        Delete a directory. Words and practice history that point at it
        are detached (directory_id = NULL) in the same transaction.
        """
        words = session.exec(
            select(Word).where(Word.directory_id == directory.id)
        ).all()
        for word in words:
            word.directory_id = None
            session.add(word)

        history = session.exec(
            select(PracticeSession).where(
                PracticeSession.directory_id == directory.id
            )
        ).all()
        for row in history:
            row.directory_id = None
            session.add(row)

        # Flush the detaches before the parent row goes away (FK order).
        session.flush()
        session.delete(directory)
        session.commit()


class WordRepository:

    def get_by_id(self, session: Session, word_id: int) -> Word | None:
        return session.get(Word, word_id)

    def get_many(self, session: Session, word_ids: list[int]) -> dict[int, Word]:
        if not word_ids:
            return {}
        stmt = select(Word).where(Word.id.in_(word_ids))
        return {w.id: w for w in session.exec(stmt).all()}

    def list(
        self,
        session: Session,
        directory_id: int | None = None,
    ) -> list[Word]:
        stmt = select(Word)
        if directory_id is not None:
            stmt = stmt.where(Word.directory_id == directory_id)
        stmt = stmt.order_by(Word.created_at.desc(), Word.id.desc())
        return session.exec(stmt).all()

    def create(self, session: Session, word: Word) -> Word:
        session.add(word)
        session.commit()
        session.refresh(word)
        return word

    def update(self, session: Session, word: Word) -> Word:
        session.add(word)
        session.commit()
        session.refresh(word)
        return word

    def delete(self, session: Session, word: Word) -> None:
        session.delete(word)
        session.commit()


class PracticeRepository:

    def record(
        self,
        session: Session,
        practice: PracticeSession,
        words: list[Word],
    ) -> PracticeSession:
        """
        Persist updated word counters and the session summary together.
        """
        for word in words:
            session.add(word)
        session.add(practice)
        session.commit()
        session.refresh(practice)
        return practice

    def list_page(
        self,
        session: Session,
        skip: int = 0,
        limit: int = 15,
    ) -> list[tuple[PracticeSession, str | None]]:
        """
        Newest-first history joined with the directory name
        (None when the run covered all words).
        """
        stmt = (
            select(PracticeSession, Directory.name)
            .join(
                Directory,
                PracticeSession.directory_id == Directory.id,
                isouter=True,
            )
            .order_by(PracticeSession.created_at.desc(), PracticeSession.id.desc())
            .offset(skip)
            .limit(limit)
        )
        return session.exec(stmt).all()
