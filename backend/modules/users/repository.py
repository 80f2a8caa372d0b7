"""
User repository for database access.

Wraps the `users` table: lookup by id/username/email, insert, and
field-limited update by id. Uniqueness of username and email is enforced by
the table's constraints; violations surface as UserAlreadyExistsError.
"""

from datetime import datetime, timezone
from typing import Optional, Any

from postgrest.exceptions import APIError

from shared.repository import BaseRepository
from .models import User
from .exceptions import UserAlreadyExistsError

USERS_TABLE = "users"
UNIQUE_VIOLATION = "23505"


class UserRepository(BaseRepository[User]):
    """
    Repository for user records.

    Note: This repository does NOT hash passwords or check credentials.
    The service layer is responsible for both.
    """

    table = USERS_TABLE

    def find_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by ID, or None."""
        return self._find_one("id", user_id)

    def find_by_username(self, username: str) -> Optional[User]:
        """Get a user by username, or None."""
        return self._find_one("username", username)

    def find_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, or None."""
        return self._find_one("email", email)

    def insert(self, data: dict[str, Any]) -> User:
        """
        Create a new user record.

        Args:
            data: Column values (username, email, password hash...)

        Returns:
            Created User with generated ID and timestamps.

        Raises:
            UserAlreadyExistsError: If the username or email is already taken
        """
        try:
            result = self._query().insert(data).execute()
        except APIError as e:
            raise self._map_unique_violation(e) from e
        return self._map_to_user(result.data[0])

    def update_by_id(self, user_id: str, fields: dict[str, Any]) -> Optional[User]:
        """
        Update the given columns of a user.

        Args:
            user_id: The user's ID.
            fields: Column values to change; nothing else is touched.

        Returns:
            The updated User, or None if no row matched.
        """
        data = dict(fields)
        data["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            result = self._query().update(data).eq("id", user_id).execute()
        except APIError as e:
            raise self._map_unique_violation(e) from e

        row = self._first(result)
        return self._map_to_user(row) if row else None

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _find_one(self, column: str, value: str) -> Optional[User]:
        result = (
            self._query()
            .select("*")
            .eq(column, value)
            .limit(1)
            .execute()
        )
        row = self._first(result)
        return self._map_to_user(row) if row else None

    @staticmethod
    def _map_unique_violation(error: APIError) -> Exception:
        if error.code != UNIQUE_VIOLATION:
            return error
        field = "email" if "email" in (error.message or "") else "username"
        return UserAlreadyExistsError(field)

    def _map_to_user(self, row: dict[str, Any]) -> User:
        """Map a database row to a User model."""
        return User(
            id=str(row["id"]),
            username=row["username"],
            email=row["email"],
            password=row["password"],
            github=row.get("github"),
            website=row.get("website"),
            bio=row.get("bio"),
            location=row.get("location"),
            phone=row.get("phone"),
            theme=row.get("theme") or "dark",
            is_verified=row.get("is_verified", False),
            is_admin=row.get("is_admin", False),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
