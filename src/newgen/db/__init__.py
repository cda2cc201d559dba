"""Database module for SQLite persistence.

Provides:
- Database connection management
- Schema initialization
- Repository functions for users, test_results and saved_careers
"""

from newgen.db.database import (
    DuplicateEntryError,
    StoreError,
    get_db,
    init_db,
    ping,
)

__all__ = ["DuplicateEntryError", "StoreError", "get_db", "init_db", "ping"]
