"""Repository functions for saved_careers table.

Provides the existence check, insert and read queries used by the
save-course and profile endpoints.
"""

from __future__ import annotations

import structlog

from newgen.db.database import get_db

logger = structlog.get_logger(__name__)


def saved_career_exists(user_id: int | str, career_name: str) -> bool:
    """Check whether a user already bookmarked a career.

    Args:
        user_id: User identifier as received from the client
        career_name: Career title

    Returns:
        True if the (user_id, career_name) pair is stored
    """
    with get_db() as conn:
        row = conn.execute(
            "SELECT 1 FROM saved_careers WHERE user_id = ? AND career_name = ?",
            (user_id, career_name),
        ).fetchone()

    return row is not None


def insert_saved_career(user_id: int | str, career_name: str) -> None:
    """Bookmark a career for a user.

    Raises:
        DuplicateEntryError: If the pair was stored concurrently
        StoreError: On any other store failure
    """
    with get_db() as conn:
        conn.execute(
            "INSERT INTO saved_careers (user_id, career_name) VALUES (?, ?)",
            (user_id, career_name),
        )

    logger.debug("careers.saved", user_id=user_id, career_name=career_name)


def get_saved_careers(user_id: int) -> list[dict[str, str]]:
    """Get a user's saved careers as [{"career_name": ...}], oldest first."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT career_name FROM saved_careers WHERE user_id = ? ORDER BY id",
            (user_id,),
        ).fetchall()

    return [{"career_name": row["career_name"]} for row in rows]


def get_distinct_career_names() -> list[str]:
    """Get every career name saved by anyone, each once, sorted."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT DISTINCT career_name FROM saved_careers ORDER BY career_name"
        ).fetchall()

    return [row["career_name"] for row in rows]
