# app/models/subscription.py
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


class Subscription(SQLModel, table=True):
    """
    Billing plan attached to a user.

    Rows are written by the billing side; this service only reads the
    newest active one to decorate login / profile responses.
    """

    __tablename__ = "subscriptions"

    id: int | None = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)

    plan_type: str = Field(default="free", max_length=50)
    status: str = Field(
        default="active",
        index=True,
        max_length=50,
        description="active | canceled | past_due | ...",
    )

    stripe_customer_id: str | None = None
    stripe_subscription_id: str | None = None

    current_period_start: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )
    current_period_end: datetime | None = Field(
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
