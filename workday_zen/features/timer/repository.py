"""SQLAlchemy repository for the settings key-value table"""

import logging
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.orm import sessionmaker

from workday_zen.db.models.setting import Setting

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Raw string key-value access. Every write commits immediately."""

    def __init__(self, session_factory: sessionmaker):
        """
        Initialize the repository with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker for the settings database
        """
        self._session_factory = session_factory

    def get(self, key: str) -> Optional[str]:
        with self._session_factory() as session:
            row = session.get(Setting, key)
            return row.value if row is not None else None

    def set(self, key: str, value: str) -> None:
        with self._session_factory() as session:
            row = session.get(Setting, key)
            if row is None:
                session.add(Setting(key=key, value=value))
            else:
                row.value = value
            session.commit()

    def delete(self, key: str) -> bool:
        with self._session_factory() as session:
            row = session.get(Setting, key)
            if row is None:
                return False
            session.delete(row)
            session.commit()
            return True

    def all(self) -> Dict[str, str]:
        with self._session_factory() as session:
            rows = session.execute(select(Setting)).scalars().all()
            return {row.key: row.value for row in rows}
