"""Shared fakes for the persistence layer."""

from typing import Any

import pytest

from findmysong.services.security import hash_password


class FakeDatabase:
    """Records statements and replays canned results in call order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, tuple[Any, ...]]] = []
        self.results: list[Any] = []

    def _next(self, default: Any) -> Any:
        return self.results.pop(0) if self.results else default

    async def fetch(self, sql: str, *params: Any) -> list[dict[str, Any]]:
        self.calls.append(("fetch", sql, params))
        return self._next([])

    async def fetchrow(self, sql: str, *params: Any) -> dict[str, Any] | None:
        self.calls.append(("fetchrow", sql, params))
        return self._next(None)

    async def execute(self, sql: str, *params: Any) -> str:
        self.calls.append(("execute", sql, params))
        return self._next("OK 0")


class FakeUserStore:
    def __init__(self) -> None:
        self.users: dict[int, dict[str, Any]] = {}

    def add(self, name: str, email: str, password: str) -> dict[str, Any]:
        user_id = len(self.users) + 1
        self.users[user_id] = {
            "id": user_id,
            "name": name,
            "email": email,
            "password_hash": hash_password(password),
        }
        return self.users[user_id]

    async def create_user(self, name: str, email: str, password_hash: str) -> dict[str, Any] | None:
        if await self.get_by_email(email):
            return None
        user_id = len(self.users) + 1
        self.users[user_id] = {"id": user_id, "name": name, "email": email, "password_hash": password_hash}
        return {"id": user_id, "name": name, "email": email}

    async def get_by_email(self, email: str) -> dict[str, Any] | None:
        for user in self.users.values():
            if user["email"].lower() == email.lower():
                return user
        return None

    async def get_by_id(self, user_id: int) -> dict[str, Any] | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        return {k: user[k] for k in ("id", "name", "email")}


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def user_store() -> FakeUserStore:
    return FakeUserStore()
