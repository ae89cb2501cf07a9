"""
This module provides a factory for creating database service instances based on configuration.
"""
from typing import Dict, Any
from services.db_implementations.db_interface import DatabaseInterface
from services.db_implementations.sqlite_implementation import SQLiteDBService
from utils.animewatch_config import get_config_value, DEFAULT_DB_FILE

def create_db_service(config: Dict[str, Any], read_only: bool = False) -> DatabaseInterface:
    """
    Create and return the appropriate database service based on configuration.

    Args:
        config (Dict[str, Any]): Normalized configuration dictionary.
        read_only (bool): If True, create database in read-only mode.

    Returns:
        DatabaseInterface: An instance of the appropriate database service.

    Raises:
        ValueError: If the database type is not supported.
    """
    db_type = get_config_value(config, "database", "type", fallback="sqlite").lower()

    if db_type == "sqlite":
        db_file = get_config_value(config, "sqlite", "db_file", fallback=DEFAULT_DB_FILE)
        return SQLiteDBService(db_file, read_only=read_only)

    raise ValueError(f"Unsupported database type: {db_type}")
