"""SQLAlchemy ORM models"""

from workday_zen.db.models.setting import Setting

__all__ = ["Setting"]
