"""SQLAlchemy model for browser push subscriptions."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from thesisflow.infrastructure.database import Base


class PushSubscriptionModel(Base):
    """Database representation of a Web Push endpoint."""

    __tablename__ = "push_subscription"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    endpoint = Column(Text, nullable=False, unique=True)
    p256dh = Column(String(255), nullable=False)
    auth = Column(String(255), nullable=False)
    content_encoding = Column(String(30), nullable=True)
    created_at = Column(DateTime(), nullable=False)
    updated_at = Column(DateTime(), nullable=False, index=True)


__all__ = ["PushSubscriptionModel"]
