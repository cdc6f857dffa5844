"""Core services for the catalog API."""

from .database import DbManageService, DbSessionService

__all__ = ["DbManageService", "DbSessionService"]
