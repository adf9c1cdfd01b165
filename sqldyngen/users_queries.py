"""Queries from users.sql: basic user management."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqldyngen.dbtx import NoRowsError
from sqldyngen.models import User
from sqldyngen.tracing import start_tracing

CREATE_USER = """-- name: CreateUser :one
INSERT INTO users (name, email)
VALUES ($1, $2)
RETURNING id, name, email, created_at, phone
"""

DELETE_USER = """-- name: DeleteUser :exec
DELETE FROM users WHERE id = $1
"""

GET_USER = """-- name: GetUser :one
SELECT id, name, email, created_at, phone FROM users WHERE id = $1 LIMIT 1
"""

LIST_USERS = """-- name: ListUsers :many
SELECT id, name, email, created_at, phone FROM users WHERE name = ANY($1::text[]) ORDER BY name
"""

UPDATE_USER = """-- name: UpdateUser :one
UPDATE users
SET name = $1, email = $2
WHERE id = $3
RETURNING id, name, email, created_at, phone
"""


@dataclass
class CreateUserParams:
    name: str
    email: str


@dataclass
class DeleteUserParams:
    id: int


@dataclass
class GetUserParams:
    id: int


@dataclass
class ListUsersParams:
    names: list[str] = field(default_factory=list)


@dataclass
class UpdateUserParams:
    name: str
    email: str
    id: int


class UsersQueries:
    """Queries defined in users.sql."""

    def create_user(self, db: Any, arg: CreateUserParams) -> User:
        """Insert a user and return the stored row."""
        with start_tracing("UsersQueries.CreateUser"):
            row = db.query_row(CREATE_USER, arg.name, arg.email)
            return User.from_row(row)

    def delete_user(self, db: Any, arg: DeleteUserParams) -> None:
        """Delete the user with the given id."""
        with start_tracing("UsersQueries.DeleteUser"):
            db.exec(DELETE_USER, arg.id)

    def get_user(self, db: Any, arg: GetUserParams) -> User | None:
        """Fetch a user by id; None if there is no such user."""
        with start_tracing("UsersQueries.GetUser"):
            try:
                row = db.query_row(GET_USER, arg.id)
            except NoRowsError:
                return None
            return User.from_row(row)

    def list_users(self, db: Any, arg: ListUsersParams) -> list[User]:
        """Return users whose name is one of ``arg.names``."""
        with start_tracing("UsersQueries.ListUsers"):
            return [User.from_row(row) for row in db.query(LIST_USERS, arg.names)]

    def update_user(self, db: Any, arg: UpdateUserParams) -> User:
        """Change a user's name and email and return the stored row."""
        with start_tracing("UsersQueries.UpdateUser"):
            row = db.query_row(UPDATE_USER, arg.name, arg.email, arg.id)
            return User.from_row(row)