from workday_zen.db.session import create_session_factory

__all__ = ["create_session_factory"]
