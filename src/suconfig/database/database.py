"""
Database management for the structured settings store.

This module provides engine initialization, session handling and table
creation for the SQL database that holds settings-store keys.

Key Features:
- SQLite by default, any SQLAlchemy URL via ``SUCONFIG_DATABASE_URL``
- One session per operation, committed before returning
- Process-wide manager instance
"""

from typing import Optional
from urllib.parse import urlparse

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from suconfig.core.utils.logger import get_logger
from suconfig.core.utils.paths import get_default_database_url

logger = get_logger()


class SettingsDatabase:
    """
    Database manager for the settings store.

    The manager owns the engine and session factory. Callers obtain short
    lived sessions through :meth:`get_session`.
    """

    def __init__(self, database_url: Optional[str] = None):
        """
        Initialize the database manager.

        Args:
            database_url: Database connection URL. If not provided, the
                        environment or the default SQLite file is used.
        """
        self.database_url = database_url or get_default_database_url()
        self.engine = None
        self.SessionLocal = None
        self._initialized = False

        logger.debug(f"Settings database URL: {self._mask_database_url()}")

    def _mask_database_url(self) -> str:
        """Mask sensitive information in database URL for logging."""
        if not self.database_url:
            return "None"

        parsed = urlparse(self.database_url)
        if parsed.password:
            netloc = parsed.netloc.replace(f":{parsed.password}@", ":***@")
            return f"{parsed.scheme}://{netloc}{parsed.path}"

        return self.database_url

    def initialize(self) -> None:
        """
        Initialize the database engine and session factory and create the
        settings tables if they do not exist.
        """
        if self._initialized:
            return

        if self.database_url.startswith("sqlite"):
            self._initialize_sqlite()
        else:
            self.engine = create_engine(self.database_url, pool_pre_ping=True)

        self.SessionLocal = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )

        self._test_connection()
        self.create_tables()

        self._initialized = True
        logger.debug("Settings database initialized")

    def _initialize_sqlite(self) -> None:
        """Initialize SQLite engine; a single shared connection keeps ``sqlite://`` usable."""
        self.engine = create_engine(
            self.database_url,
            connect_args={"check_same_thread": False, "timeout": 30},
            poolclass=StaticPool,
            echo=False,
        )

        @event.listens_for(self.engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=FULL")
            cursor.close()

    def _test_connection(self) -> None:
        """Test database connection."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except Exception as e:
            logger.error(f"Settings database connection test failed: {e}")
            raise

    def create_tables(self) -> None:
        """Create the settings tables."""
        from .models import Base

        try:
            Base.metadata.create_all(bind=self.engine)
        except Exception as e:
            logger.error(f"Failed to create settings tables: {e}")
            raise

    def get_session(self) -> Session:
        """
        Get a database session.

        Example:
            with settings_db.get_session() as session:
                ...
        """
        if not self._initialized:
            raise RuntimeError("Database not initialized. Call initialize() first.")

        return self.SessionLocal()

    def close(self) -> None:
        """Close database connections and cleanup resources."""
        if self.engine:
            self.engine.dispose()
            logger.debug("Settings database connections closed")

        self._initialized = False


# Global database manager instance
_settings_db: Optional[SettingsDatabase] = None


def get_settings_database() -> SettingsDatabase:
    """Get the global, initialized settings database manager."""
    global _settings_db

    if _settings_db is None:
        _settings_db = SettingsDatabase()
        _settings_db.initialize()

    return _settings_db


def close_settings_database() -> None:
    """Close the global settings database manager, if any."""
    global _settings_db

    if _settings_db:
        _settings_db.close()
        _settings_db = None
