# app/repositories/session_repo.py
from datetime import datetime

from sqlmodel import Session, select

from app.models.user import UserSession


class SessionRepository:
    """
    Data access layer for login sessions (table user_sessions).
    """

    def create(self, session: Session, row: UserSession) -> UserSession:
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def get_by_token(self, session: Session, token: str) -> UserSession | None:
        stmt = select(UserSession).where(UserSession.session_token == token)
        return session.exec(stmt).first()

    def delete_by_token(self, session: Session, token: str) -> int:
        """Delete every row for this token. Returns the number removed."""
        stmt = select(UserSession).where(UserSession.session_token == token)
        rows = session.exec(stmt).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)

    def delete_expired_for_user(
        self, session: Session, user_id: int, now: datetime
    ) -> int:
        stmt = select(UserSession).where(
            UserSession.user_id == user_id,
            UserSession.expires_at <= now,
        )
        rows = session.exec(stmt).all()
        for row in rows:
            session.delete(row)
        session.commit()
        return len(rows)
