"""
Storage Package.

This package manages all data persistence.

Modules:
- database: Async engine and session factory
- models/: ORM models
- repositories/: Data access layer
- migrations/: Optional SQL for PostgreSQL deployments
"""

from storage.database import Database, DatabaseConfig

__all__ = [
    "Database",
    "DatabaseConfig",
]
