"""SQLAlchemy model for locally stored notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from forum_notifications.infrastructure.database import Base


class NotificationPreferencesModel(Base):
    """Database representation of one preference record.

    Columns are nullable so records written by older versions, which lack
    some toggles or the version itself, are migrated on read instead of being
    rejected.
    """

    __tablename__ = "notification_preferences"

    id = Column(Integer, primary_key=True, index=True)
    storage_key = Column(String(120), nullable=False, unique=True, index=True)
    version = Column(Integer, nullable=True)
    replies = Column(Boolean, nullable=True)
    mentions = Column(Boolean, nullable=True)
    likes = Column(Boolean, nullable=True)
    private_messages = Column(Boolean, nullable=True)
    badges = Column(Boolean, nullable=True)
    system = Column(Boolean, nullable=True)
    following = Column(Boolean, nullable=True)
    like_frequency = Column(String(10), nullable=True)
    push_enabled = Column(Boolean, nullable=True)
    push_sound = Column(Boolean, nullable=True)
    push_alert = Column(Boolean, nullable=True)
    updated_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationPreferencesModel"]
