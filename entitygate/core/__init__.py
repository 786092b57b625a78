"""Core utilities and configuration."""

from entitygate.core.config import Settings, get_settings
from entitygate.core.database import Base, db_manager, get_session, transaction
from entitygate.core.logging import db_logger, get_logger, setup_logging

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "Base",
    "db_manager",
    "get_session",
    "transaction",
    # Logging
    "db_logger",
    "get_logger",
    "setup_logging",
]
