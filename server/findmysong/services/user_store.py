from typing import Any

from findmysong.services.database import Database


class UserStore:
    """Account rows in the ``users`` table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_user(self, name: str, email: str, password_hash: str) -> dict[str, Any] | None:
        """Insert a user; returns None when the email is already registered."""
        return await self._db.fetchrow(
            "INSERT INTO users (name, email, password_hash) VALUES ($1, $2, $3) "
            "ON CONFLICT (email) DO NOTHING RETURNING id, name, email",
            name, email, password_hash,
        )

    async def get_by_email(self, email: str) -> dict[str, Any] | None:
        return await self._db.fetchrow(
            "SELECT id, name, email, password_hash FROM users WHERE LOWER(email) = LOWER($1)",
            email,
        )

    async def get_by_id(self, user_id: int) -> dict[str, Any] | None:
        return await self._db.fetchrow("SELECT id, name, email FROM users WHERE id = $1", user_id)
