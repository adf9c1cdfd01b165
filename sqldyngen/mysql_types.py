"""Mapping of MySQL column types to generated field types."""

from __future__ import annotations

import logging
from typing import Callable

from sqldyngen.catalog import Catalog, Column, data_type
from sqldyngen.naming import to_pascal_case

logger = logging.getLogger(__name__)

_TEXT_TYPES = {"varchar", "text", "char", "tinytext", "mediumtext", "longtext"}
_INT_TYPES = {"int", "integer", "mediumint"}
_BIGINT_TYPES = {"bigint", "bigint unsigned", "bigint signed"}
_BLOB_TYPES = {"blob", "binary", "varbinary", "tinyblob", "mediumblob", "longblob"}
_FLOAT_TYPES = {"double", "double precision", "real", "float"}
_DECIMAL_TYPES = {"decimal", "dec", "fixed"}
_TIME_TYPES = {"date", "timestamp", "datetime", "time"}
_BOOL_TYPES = {"boolean", "bool"}


def mysql_type(
    catalog: Catalog,
    column: Column,
    struct_name: Callable[[str], str] = to_pascal_case,
) -> str:
    """Return the field type for a MySQL column.

    ``struct_name`` turns an enum name into the generated type name.
    """
    column_type = data_type(column.type)
    not_null = column.not_null or column.is_array
    unsigned = column.unsigned

    if column_type in _TEXT_TYPES:
        return "string" if not_null else "sql.NullString"

    if column_type == "tinyint":
        if column.length == 1:
            return "bool" if not_null else "sql.NullBool"
        if not_null:
            return "uint8" if unsigned else "int8"
        # There is no nullable 8-bit type; the smallest one available is 16-bit.
        return "sql.NullInt16"

    if column_type == "year":
        return "int16" if not_null else "sql.NullInt16"

    if column_type == "smallint":
        if not_null:
            return "uint16" if unsigned else "int16"
        return "sql.NullInt16"

    if column_type in _INT_TYPES:
        if not_null:
            return "uint32" if unsigned else "int32"
        return "sql.NullInt32"

    if column_type in _BIGINT_TYPES:
        if not_null:
            return "uint64" if unsigned else "int64"
        return "sql.NullInt64"

    if column_type in _BLOB_TYPES:
        return "[]byte" if not_null else "sql.NullString"

    if column_type in _FLOAT_TYPES:
        return "float64" if not_null else "sql.NullFloat64"

    if column_type in _DECIMAL_TYPES:
        return "string" if not_null else "sql.NullString"

    if column_type == "enum":
        return "string"

    if column_type in _TIME_TYPES:
        return "time.Time" if not_null else "sql.NullTime"

    if column_type in _BOOL_TYPES:
        return "bool" if not_null else "sql.NullBool"

    if column_type == "json":
        return "json.RawMessage"

    if column_type == "any":
        return "interface{}"

    for schema in catalog.schemas:
        for enum in schema.enums:
            if enum.name != column_type:
                continue
            if schema.name == catalog.default_schema:
                name = struct_name(enum.name)
            else:
                name = struct_name(f"{schema.name}_{enum.name}")
            return name if not_null else "Null" + name

    logger.debug("Unknown MySQL type: %s", column_type)
    return "interface{}"