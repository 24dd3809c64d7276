"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text

from thesisflow.infrastructure.database import Base


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"
    __table_args__ = (
        Index("ix_notification_user_created", "user_id", "created_at"),
        Index("ix_notification_user_read", "user_id", "read_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(50), nullable=False, default="general")
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    data = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False)
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel"]
