"""
Business logic for users.

Users are created through registration (plus the seeded initial user)
and can be looked up, filtered by username or deleted.  Deleting a
user removes all of their decks and cards through the foreign key
cascades declared in the schema.
"""

import logging
import sqlite3
from typing import List, Optional

from ..core.errors import ConflictError, NotFoundError, ValidationFailure
from ..core.ids import new_id
from ..schemas.user import UserCreate, UserRead
from .base import BaseService, is_blank, like_pattern

logger = logging.getLogger(__name__)


class UserService(BaseService):
    """Repository operations for the ``users`` table."""

    def create_user(self, data: UserCreate) -> UserRead:
        """Insert a new user and return it.

        Raises ``ValidationFailure`` for a blank username and
        ``ConflictError`` when the username is already taken.
        """
        if is_blank(data.username):
            raise ValidationFailure("username required")
        user_id = new_id()
        conn = self.db.connect()
        try:
            conn.execute(
                "INSERT INTO users (id, username) VALUES (?, ?)",
                (user_id, data.username),
            )
            conn.commit()
        except sqlite3.IntegrityError as exc:
            conn.rollback()
            if "UNIQUE" in str(exc):
                logger.info("Rejected duplicate username %r", data.username)
                raise ConflictError("username already exists") from exc
            raise self.storage_error(exc) from exc
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        logger.info("Created user %s", user_id)
        return UserRead(id=user_id, username=data.username)

    def list_users(self, username: Optional[str] = None) -> List[UserRead]:
        """Return all users, or those whose username contains ``username``."""
        conn = self.db.connect()
        try:
            if username:
                rows = conn.execute(
                    "SELECT id, username FROM users WHERE username LIKE ? ESCAPE '\\' ORDER BY rowid",
                    (like_pattern(username),),
                ).fetchall()
            else:
                rows = conn.execute("SELECT id, username FROM users ORDER BY rowid").fetchall()
        except sqlite3.Error as exc:
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        return [UserRead(id=row["id"], username=row["username"]) for row in rows]

    def get_user(self, user_id: str) -> UserRead:
        conn = self.db.connect()
        try:
            row = conn.execute(
                "SELECT id, username FROM users WHERE id = ?", (user_id,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("user")
        return UserRead(id=row["id"], username=row["username"])

    def delete_user(self, user_id: str) -> None:
        """Delete a user together with (via cascade) their decks and cards."""
        conn = self.db.connect()
        try:
            cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            affected = cursor.rowcount
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise self.storage_error(exc) from exc
        finally:
            conn.close()
        if not affected:
            raise NotFoundError("user")
        logger.info("Deleted user %s", user_id)
