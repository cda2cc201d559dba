"""Repository functions for users table.

Provides lookup and insert operations. Users are never updated or
deleted through the API.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from newgen.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class UserRecord:
    """User record from database."""

    id: int
    name: str
    email: str
    password: str

    def summary(self) -> dict[str, int | str]:
        """Public view of the user (no password)."""
        return {"id": self.id, "name": self.name, "email": self.email}


def insert_user(name: str, email: str, password: str) -> int:
    """Insert a new user.

    Args:
        name: Display name (also the login username)
        email: Email address
        password: Stored password digest

    Returns:
        The store-assigned user id

    Raises:
        DuplicateEntryError: If the email is already registered
        StoreError: On any other store failure
    """
    with get_db() as conn:
        cursor = conn.execute(
            "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
            (name, email, password),
        )
        user_id = cursor.lastrowid

    logger.debug("users.inserted", user_id=user_id)
    return user_id


def get_user_by_email(email: str) -> UserRecord | None:
    """Get user by email.

    Returns:
        UserRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE email = ?", (email,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def get_users_by_name(name: str) -> list[UserRecord]:
    """Get all users sharing a name, oldest first.

    Names are not unique, so login checks the password against each.
    """
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM users WHERE name = ? ORDER BY id", (name,)
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def get_user_by_id(user_id: int) -> UserRecord | None:
    """Get user by id.

    Returns:
        UserRecord if found, None otherwise
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM users WHERE id = ?", (user_id,)
        ).fetchone()

    if row is None:
        return None

    return _row_to_record(row)


def _row_to_record(row) -> UserRecord:
    """Convert database row to UserRecord."""
    return UserRecord(
        id=row["id"],
        name=row["name"],
        email=row["email"],
        password=row["password"],
    )
