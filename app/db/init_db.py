"""
==============================================================================
Database Initialization Module
==============================================================================

Creates the schema at application startup.

Usage:
------
    from app.db import init_db

    init_db()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Optional

from app.db.database import DatabaseManager
# Registers every model on Base.metadata before create_all runs
from app.db import models  # noqa: F401


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        self._db_manager = db_manager or DatabaseManager()

    def initialize(self) -> bool:
        """
        Create missing tables and verify the connection.

        Returns:
            True if the database is reachable after initialization
        """
        logger.info("Initializing database...")
        self._db_manager.create_tables()

        if not self._db_manager.verify_connection():
            logger.error("❌ Database initialization failed: connection check")
            return False

        logger.info("✅ Database initialization complete")
        return True


def init_db() -> bool:
    """Initialize the database with default settings."""
    return DatabaseInitializer().initialize()
