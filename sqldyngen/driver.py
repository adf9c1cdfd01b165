"""Mapping of configured SQL packages to the driver the generated code targets."""

from __future__ import annotations

from enum import Enum

SQL_PACKAGE_PGX_V4 = "pgx/v4"
SQL_PACKAGE_PGX_V5 = "pgx/v5"
SQL_PACKAGE_STANDARD = "database/sql"


class SQLDriver(str, Enum):
    """Database driver identified by its import path."""

    LIB_PQ = "github.com/lib/pq"
    PGX_V4 = "github.com/jackc/pgx/v4"
    PGX_V5 = "github.com/jackc/pgx/v5"

    def is_pgx(self) -> bool:
        """Return True for either pgx driver version."""
        return self in (SQLDriver.PGX_V4, SQLDriver.PGX_V5)


def parse_driver(sql_package: str) -> SQLDriver:
    """Return the driver for a configured SQL package, defaulting to lib/pq."""
    if sql_package == SQL_PACKAGE_PGX_V4:
        return SQLDriver.PGX_V4
    if sql_package == SQL_PACKAGE_PGX_V5:
        return SQLDriver.PGX_V5
    return SQLDriver.LIB_PQ