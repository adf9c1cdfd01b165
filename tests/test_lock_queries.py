from datetime import datetime

from sqldyngen.dbtx import NoRowsError
from sqldyngen.dynsql import dynamic_sql
from sqldyngen.lock_queries import GET_USER_WITH_LOCK, GetUserWithLockParams, LockQueries

UNLOCKED_SQL = """-- name: GetUserWithLock :one
SELECT id, name, email, created_at, phone
FROM users
WHERE id = $1
LIMIT 1"""

LOCKED_SQL = UNLOCKED_SQL + "\nFOR UPDATE"


class FakeDB:
    def __init__(self, row=None):
        self.row = row
        self.calls = []

    def query_row(self, sql, *args):
        self.calls.append((sql, list(args)))
        if self.row is None:
            raise NoRowsError("no rows")
        return self.row


def test_lock_false():
    sql, args = dynamic_sql(GET_USER_WITH_LOCK, [1, False])
    assert sql == UNLOCKED_SQL
    assert len(args) == 1


def test_lock_true():
    sql, args = dynamic_sql(GET_USER_WITH_LOCK, [1, True])
    assert sql == LOCKED_SQL
    assert len(args) == 1


def test_method_with_lock_sends_for_update():
    row = (5, "lockuser", "lockuser@example.com", datetime(2024, 1, 1), None)
    db = FakeDB(row)
    user = LockQueries().get_user_with_lock(db, GetUserWithLockParams(id=5, lock=True))
    assert db.calls == [(LOCKED_SQL, [5])]
    assert user.id == 5 and user.name == "lockuser"


def test_method_without_lock():
    row = (5, "lockuser", "lockuser@example.com", datetime(2024, 1, 1), None)
    db = FakeDB(row)
    LockQueries().get_user_with_lock(db, GetUserWithLockParams(id=5))
    assert db.calls == [(UNLOCKED_SQL, [5])]


def test_method_not_found_returns_none():
    db = FakeDB()
    assert LockQueries().get_user_with_lock(db, GetUserWithLockParams(id=-1)) is None