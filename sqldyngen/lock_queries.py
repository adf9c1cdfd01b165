"""Queries from lock.sql: optional row locking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from sqldyngen.dbtx import NoRowsError
from sqldyngen.dynsql import compile_dyn_sql
from sqldyngen.models import User
from sqldyngen.tracing import start_tracing

GET_USER_WITH_LOCK = """-- name: GetUserWithLock :one
SELECT id, name, email, created_at, phone
FROM users
WHERE id = $1
LIMIT 1
FOR UPDATE -- :if $2
"""

_GET_USER_WITH_LOCK_DYN = compile_dyn_sql(GET_USER_WITH_LOCK)


@dataclass
class GetUserWithLockParams:
    id: int
    lock: bool = False


class LockQueries:
    """Queries defined in lock.sql."""

    def get_user_with_lock(self, db: Any, arg: GetUserWithLockParams) -> User | None:
        """Fetch a user, adding FOR UPDATE when ``arg.lock`` is set; None if absent."""
        with start_tracing("LockQueries.GetUserWithLock"):
            sql, args = _GET_USER_WITH_LOCK_DYN.build([arg.id, arg.lock])
            try:
                row = db.query_row(sql, *args)
            except NoRowsError:
                return None
            return User.from_row(row)