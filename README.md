# sqldyngen

Tools for SQL queries whose lines are switched on and off at run time by
`-- :if` annotations. The package also has the naming and type-mapping helpers
that a code generator needs. It ships typed query classes for a small example
schema with users and products, and for optional row locking.

## Installation

```
pip install sqldyngen
```

To run the test suite:

```
pip install "sqldyngen[test]"
pytest
```

## Annotating queries

Queries are written with named annotations. The rules are:

- A line that ends in `-- :if @name` is kept only when that parameter is active.
  `$name` may be used in place of `@name`.
- A line that holds nothing but `-- :if @name` applies to the line after it.
- When one annotation lists several names, all of them must be active.
- A line that opens a parenthesised block passes its condition on to every line
  up to the closing parenthesis.

```sql
SELECT id, name FROM users
WHERE name = $1
  AND email = $2 -- :if @email
ORDER BY
  created_at DESC, -- :if @order_created_at_desc
  id ASC
```

`sqldyngen.annotations.parse_dyn_filter(sql, params)` rewrites the names into
positional `-- :if $N` markers. `params` is a list of
`sqldyngen.catalog.Parameter` objects. Names that are not SQL parameters, such
as ordering flags, become `FlagParam` entries and take positions after the real
parameters.

The result is a `DynFilterInfo` with these fields:

- `annotated_sql`
- `conditional_param_numbers`
- `flag_params`
- `ordered_arg_names`

When the query has no annotations, the function returns `None`. An annotation
that names an unknown parameter raises `ValueError`.

## Building the final SQL

```python
from sqldyngen.dynsql import compile_dyn_sql, dynamic_sql

query = compile_dyn_sql(
    "SELECT * FROM t\nWHERE a = $1\n  AND b = $2 -- :if $2\n  AND c = $3"
)
sql, args = query.build(["a", None, "c"])
# sql  == "SELECT * FROM t\nWHERE a = $1\n  AND c = $2"
# args == ["a", "c"]
```

An argument is inactive when it is `None` or `False`. Any other value is active.

After filtering, the remaining placeholders are renumbered one after another. A
parameter used more than once keeps a single number, and its argument is passed
only once. A trailing comma on the last line is removed. So is a `WHERE`,
`ORDER BY`, `GROUP BY` or `HAVING` keyword that is left with nothing after it.

For a one-off call, `dynamic_sql(query, args)` compiles and builds in a single
step.

## Running queries

`sqldyngen.dbtx.DBTX` wraps a DB-API 2 connection and runs queries written with
`$N` placeholders. It has three methods:

- `exec` returns the affected row count.
- `query` returns all rows.
- `query_row` returns the first row, and raises `NoRowsError` when there is none.

The `placeholder` argument controls how `$N` is rewritten:

- `None` leaves the query unchanged.
- A format containing `{n}`, such as `"?{n}"`, renumbers each placeholder in place.
- Any other string, such as `"?"` or `"%s"`, replaces every placeholder and
  reorders the arguments to match.

```python
import sqlite3
from sqldyngen.dbtx import DBTX
from sqldyngen.users_queries import UsersQueries, GetUserParams

db = DBTX(sqlite3.connect("app.db"), placeholder="?{n}")
user = UsersQueries().get_user(db, GetUserParams(id=1))  # None if absent
```

Three query classes accept any object with `exec`, `query` and `query_row`:

- `UsersQueries` in `sqldyngen.users_queries` creates, gets, lists, updates and
  deletes users.
- `ProductQueries` in `sqldyngen.product_queries` creates, gets, lists and
  deletes products, and reads and updates prices and stock.
- `LockQueries` in `sqldyngen.lock_queries` fetches a user and adds
  `FOR UPDATE` when `lock` is set.

Rows come back as `User` and `Product` from `sqldyngen.models`. That module
also defines `Order`. Each method runs inside `sqldyngen.tracing.start_tracing`,
which prints `Tracing ended. Duration: N seconds` when the call finishes.

## Naming and type helpers

`sqldyngen.naming` converts between case styles with these functions:

- `to_snake_case`
- `to_camel_case`
- `to_pascal_case`
- `to_json_camel_case`
- `set_case_style`
- `set_json_case_style`
- `json_tag_name`

The `set_*` functions raise `ValueError` for an unknown style. The module also
builds enum identifiers with `enum_replace` and `enum_value_name`, and renders
struct tags with `tags_to_string`.

Other helpers:

- `sqldyngen.mysql_types.mysql_type(catalog, column)` maps a MySQL column to
  the name of its Go field type, and looks up enums declared in the catalog.
- `sqldyngen.driver.parse_driver` maps a configured SQL package name to a
  `SQLDriver`.

## What the package does not do

- It does not read schemas or query files, and it does not write generated
  source files. It provides the building blocks only.
- It has no command-line tool.
- It has no query classes for the orders table, and none for multi-filter user
  searches. `Order` exists only as a row type.