# app/repositories/subscription_repo.py
from sqlmodel import Session, select

from app.models.subscription import Subscription


class SubscriptionRepository:

    def get_latest_active(
        self, session: Session, user_id: int
    ) -> Subscription | None:
        """Newest subscription with status 'active', or None."""
        stmt = (
            select(Subscription)
            .where(
                Subscription.user_id == user_id,
                Subscription.status == "active",
            )
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
            .limit(1)
        )
        return session.exec(stmt).first()
