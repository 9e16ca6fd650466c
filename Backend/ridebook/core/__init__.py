"""
Core module - configuration, database, and response formatting.
"""
from .config import Settings, get_settings
from .db import AsyncSessionLocal, Base, engine, get_session, init_db
from .responses import (
    ErrorCodes,
    ErrorDetail,
    error_json,
    error_response,
    internal_error_json,
    validation_error_json,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Database
    "get_session",
    "init_db",
    "Base",
    "engine",
    "AsyncSessionLocal",
    # Responses
    "ErrorDetail",
    "ErrorCodes",
    "error_response",
    "error_json",
    "validation_error_json",
    "internal_error_json",
]
