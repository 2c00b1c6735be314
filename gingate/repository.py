"""Users and members read from the SQL database."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Optional, Protocol, runtime_checkable

from sqlalchemy import text
from sqlalchemy.engine import Engine

USERS_QUERY = "SELECT id, name, password, email FROM sys_ms_users"
MEMBERS_QUERY = "SELECT id, first_name, last_name, email FROM sys_ms_member"


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password: str
    email: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation of the user."""
        return asdict(self)


@dataclass(frozen=True)
class Member:
    id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON representation; nullable columns carry a validity flag."""
        result: dict[str, Any] = {"id": self.id}
        for key in ("first_name", "last_name", "email"):
            value = getattr(self, key)
            result[key] = {"String": value or "", "Valid": value is not None}
        return result


@runtime_checkable
class UserRepository(Protocol):
    def find_users(self) -> list[User]: ...


@runtime_checkable
class MemberRepository(Protocol):
    def find_members(self) -> list[Member]: ...


class SqlRepository:
    """User and member repository backed by an SQLAlchemy engine."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def _rows(self, query: str) -> list[Any]:
        with self.engine.connect() as connection:
            return connection.execute(text(query)).all()

    def find_users(self) -> list[User]:
        users = []
        for row in self._rows(USERS_QUERY):
            for column, value in zip(("id", "name", "password", "email"), row):
                if value is None:
                    raise ValueError(f"converting NULL in column {column!r} is unsupported")
            users.append(User(int(row[0]), row[1], row[2], row[3]))
        return users

    def find_members(self) -> list[Member]:
        members = []
        for member_id, first_name, last_name, email in self._rows(MEMBERS_QUERY):
            if member_id is None:
                raise ValueError("converting NULL in column 'id' is unsupported")
            members.append(Member(int(member_id), first_name, last_name, email))
        return members