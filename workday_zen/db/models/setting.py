"""SQLAlchemy ORM model for the settings key-value table"""

from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from workday_zen.db.base import Base


class Setting(Base):
    """
    One persisted key with its string-encoded value.
    Every session field (timer state, duration, flags) is a separate row.
    """
    __tablename__ = "settings"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Setting(key='{self.key}', value='{self.value}')>"
