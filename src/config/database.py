"""
Database Engine
Lazily created SQLAlchemy engine for the stored-procedure store
"""

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from src.config.settings import settings


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """
    Build the process-wide engine on first use.

    The DBAPI driver is only imported here, so importing the application
    does not require the ODBC driver to be installed.
    """
    return create_engine(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=True,
    )
