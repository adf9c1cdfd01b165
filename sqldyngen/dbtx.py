"""Connection adapter that runs queries written with ``$N`` placeholders."""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Any, Iterator

_PLACEHOLDER_RE = re.compile(r"\$([0-9]+)")


class NoRowsError(LookupError):
    """Raised by ``query_row`` when the query returned no rows."""


class DBTX:
    """Runs ``$N``-style queries on a DB-API 2 connection.

    ``placeholder`` controls how ``$N`` is rewritten before execution:
    ``None`` leaves the text unchanged; a format containing ``{n}`` (such as
    ``"?{n}"`` or ``":{n}"``) renumbers each placeholder in place; any other
    string (such as ``"?"`` or ``"%s"``) is substituted for every occurrence and
    the arguments are repeated and reordered to match.
    """

    def __init__(self, connection: Any, placeholder: str | None = None) -> None:
        self.connection = connection
        self.placeholder = placeholder

    def _prepare(self, sql: str, args: tuple[Any, ...]) -> tuple[str, tuple[Any, ...]]:
        if self.placeholder is None:
            return sql, args
        placeholder = self.placeholder
        numbered = "{n}" in placeholder
        ordered: list[Any] = []

        def replace(match: re.Match[str]) -> str:
            number = int(match.group(1))
            if not 1 <= number <= len(args):
                raise ValueError(f"no argument for ${number}")
            if numbered:
                return placeholder.format(n=number)
            ordered.append(args[number - 1])
            return placeholder

        rewritten = _PLACEHOLDER_RE.sub(replace, sql)
        return rewritten, args if numbered else tuple(ordered)

    @contextmanager
    def _execute(self, sql: str, args: tuple[Any, ...]) -> Iterator[Any]:
        sql, params = self._prepare(sql, args)
        cursor = self.connection.cursor()
        try:
            cursor.execute(sql, params)
            yield cursor
        finally:
            cursor.close()

    def exec(self, sql: str, *args: Any) -> int:
        """Run a statement and return the number of affected rows."""
        with self._execute(sql, args) as cursor:
            return cursor.rowcount

    def query(self, sql: str, *args: Any) -> list[Any]:
        """Run a query and return all of its rows."""
        with self._execute(sql, args) as cursor:
            return list(cursor.fetchall())

    def query_row(self, sql: str, *args: Any) -> Any:
        """Run a query and return its first row; raise NoRowsError if there is none."""
        with self._execute(sql, args) as cursor:
            row = cursor.fetchone()
        if row is None:
            raise NoRowsError("no rows in result set")
        return row