"""Schema catalog and query parameter descriptions used during generation."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Identifier:
    """A possibly schema-qualified name."""

    catalog: str = ""
    schema: str = ""
    name: str = ""


@dataclass
class Column:
    """A column of a table or of a query result or parameter."""

    name: str = ""
    original_name: str = ""
    type: Identifier = field(default_factory=Identifier)
    not_null: bool = False
    unsigned: bool = False
    is_array: bool = False
    array_dims: int = 0
    length: int = 0
    is_sqlc_slice: bool = False
    table: Identifier | None = None
    comment: str = ""


@dataclass
class Parameter:
    """A numbered query parameter ($N) and the column it binds to."""

    number: int
    column: Column = field(default_factory=Column)


@dataclass
class CatalogEnum:
    """An enum type declared in a schema."""

    name: str
    vals: list[str] = field(default_factory=list)
    comment: str = ""


@dataclass
class Schema:
    """A named schema and the enums it declares."""

    name: str
    enums: list[CatalogEnum] = field(default_factory=list)


@dataclass
class Catalog:
    """All schemas known to the generator."""

    default_schema: str = ""
    schemas: list[Schema] = field(default_factory=list)


def data_type(identifier: Identifier) -> str:
    """Return the type name, qualified with its schema when one is set."""
    if identifier.schema:
        return f"{identifier.schema}.{identifier.name}"
    return identifier.name