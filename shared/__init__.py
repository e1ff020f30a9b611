"""
Member Registry Shared Library
==============================

Common utilities, configuration and models used by the member registry
service and its scripts.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - database: PostgreSQL client (SQLAlchemy async)
    - models: Shared Pydantic record and paging models

Version: 0.1.0
"""

__version__ = "0.1.0"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
