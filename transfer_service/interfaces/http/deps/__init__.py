"""Reusable FastAPI dependencies."""

from .database import get_db_session
from .transactions import get_query_service, get_summary_service, get_transfer_service

__all__ = [
    "get_db_session",
    "get_query_service",
    "get_summary_service",
    "get_transfer_service",
]
