"""Shared abstractions used across domain modules."""

from .repository import AsyncRepository
from .unit_of_work import UnitOfWork

__all__ = ["AsyncRepository", "UnitOfWork"]
