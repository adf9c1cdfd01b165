import pytest

from sqldyngen.dynsql import (
    arg_active,
    compile_dyn_sql,
    dynamic_sql,
    extract_cond_idxs,
    finalize_query,
    split_placeholders,
)


def test_remaps_placeholders():
    query = "SELECT * FROM t\nWHERE a = $1\n  AND b = $2 -- :if $2"
    sql, args = dynamic_sql(query, ["hello", None])
    assert sql == "SELECT * FROM t\nWHERE a = $1"
    assert args == ["hello"]


def test_remaps_gaps():
    query = "SELECT * FROM t\nWHERE a = $1\n  AND b = $2 -- :if $2\n  AND c = $3"
    sql, args = dynamic_sql(query, ["a", None, "c"])
    assert sql == "SELECT * FROM t\nWHERE a = $1\n  AND c = $2"
    assert args == ["a", "c"]


def test_all_conditions_active():
    query = "SELECT * FROM t\nWHERE a = $1\n  AND b = $2 -- :if $2"
    sql, args = dynamic_sql(query, ["hello", "active"])
    assert sql == "SELECT * FROM t\nWHERE a = $1\n  AND b = $2"
    assert args == ["hello", "active"]


def test_no_annotations():
    query = "SELECT * FROM t WHERE a = $1 AND b = $2"
    sql, args = dynamic_sql(query, ["x", "y"])
    assert sql == query
    assert args == ["x", "y"]


ORDER_BY_QUERY = (
    "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC, -- :if $2\n"
    "  name ASC, -- :if $3\n  created_at DESC"
)


@pytest.mark.parametrize(
    "flags, expected",
    [
        ((False, False), "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  created_at DESC"),
        ((True, False), "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC,\n  created_at DESC"),
        (
            (True, True),
            "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC,\n  name ASC,\n  created_at DESC",
        ),
    ],
)
def test_order_by_flags(flags, expected):
    sql, args = dynamic_sql(ORDER_BY_QUERY, ["x", *flags])
    assert sql == expected
    assert args == ["x"]


TWO_ORDER_QUERY = "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC, -- :if $2\n  id DESC -- :if $3"


def test_order_by_removed_when_empty():
    sql, args = dynamic_sql(TWO_ORDER_QUERY, ["x", False, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1"
    assert len(args) == 1


def test_order_by_kept_when_has_content():
    sql, _ = dynamic_sql(TWO_ORDER_QUERY, ["x", False, True])
    assert sql == "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id DESC"


def test_order_by_kept_when_has_content_first_item():
    sql, _ = dynamic_sql(TWO_ORDER_QUERY, ["x", True, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC"


ONLY_CONDITIONAL_QUERY = (
    "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC, -- :if $2\n"
    "  name DESC, -- :if $3\n  created_at DESC -- :if $4"
)


def test_order_by_omit_all_lines():
    sql, args = dynamic_sql(ONLY_CONDITIONAL_QUERY, ["x", False, False, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1"
    assert len(args) == 1


def test_order_by_contains_second_line():
    sql, args = dynamic_sql(ONLY_CONDITIONAL_QUERY, ["x", False, True, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  name DESC"
    assert len(args) == 1


def test_order_by_remove_all_lines_simple():
    query = "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC -- :if $2\n  id DESC -- :if $3"
    sql, args = dynamic_sql(query, ["x", False, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1"
    assert len(args) == 1


STATIC_LINE_QUERY = (
    "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC, -- :if $2\n"
    "  name DESC, -- :if $3\n  created_at DESC"
)


def test_order_by_block_exist_with_static_line():
    sql, args = dynamic_sql(STATIC_LINE_QUERY, ["x", False, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  created_at DESC"
    assert len(args) == 1


def test_order_by_block_exist_first_conditional_and_static():
    sql, args = dynamic_sql(STATIC_LINE_QUERY, ["x", True, False])
    assert sql == "SELECT * FROM t\nWHERE a = $1\nORDER BY\n  id ASC,\n  created_at DESC"
    assert len(args) == 1


EXISTS_QUERY = (
    "SELECT * FROM t\nWHERE a = $1\n  AND EXISTS ( -- :if $2\n    SELECT 1 -- :if $2\n"
    "    FROM other -- :if $2\n    WHERE id = $2 -- :if $2\n  ) -- :if $2"
)


def test_exists_operator_inactive():
    sql, args = dynamic_sql(EXISTS_QUERY, ["x", None])
    assert sql == "SELECT * FROM t\nWHERE a = $1"
    assert len(args) == 1


def test_exists_operator_active():
    sql, args = dynamic_sql(EXISTS_QUERY, ["x", 100])
    assert sql == (
        "SELECT * FROM t\nWHERE a = $1\n  AND EXISTS (\n    SELECT 1\n"
        "    FROM other\n    WHERE id = $2\n  )"
    )
    assert args == ["x", 100]


def test_dollar_without_digit():
    query = "SELECT * FROM t WHERE a = $1 AND b::text = $$hello$$"
    sql, args = dynamic_sql(query, ["x"])
    assert sql == query
    assert len(args) == 1


def test_orphaned_where():
    query = "SELECT * FROM t\nWHERE\n  a = $1 -- :if $1\n  AND b = $2 -- :if $2"
    sql, args = dynamic_sql(query, [None, None])
    assert sql == "SELECT * FROM t"
    assert args == []


def test_cascading_where_and_order_by():
    query = "SELECT * FROM t\nWHERE\n  a = $1 -- :if $1\nORDER BY\n  id ASC -- :if $2"
    sql, args = dynamic_sql(query, [None, False])
    assert sql == "SELECT * FROM t"
    assert args == []


def test_orphaned_group_by():
    sql, args = dynamic_sql("SELECT * FROM t\nGROUP BY\n  a -- :if $1", [False])
    assert sql == "SELECT * FROM t"
    assert args == []


def test_orphaned_having():
    query = "SELECT * FROM t\nGROUP BY a\nHAVING\n  count(*) > $1 -- :if $1"
    sql, args = dynamic_sql(query, [None])
    assert sql == "SELECT * FROM t\nGROUP BY a"
    assert args == []


STANDALONE_QUERY = "SELECT * FROM t\nWHERE a = $1\n-- :if $2\n  AND b = $2"


def test_standalone_marker_inactive():
    sql, args = dynamic_sql(STANDALONE_QUERY, ["x", None])
    assert sql == "SELECT * FROM t\nWHERE a = $1"
    assert args == ["x"]


def test_standalone_marker_active():
    sql, args = dynamic_sql(STANDALONE_QUERY, ["x", "v"])
    assert sql == "SELECT * FROM t\nWHERE a = $1\n  AND b = $2"
    assert args == ["x", "v"]


def test_shared_placeholder_is_reused():
    query = "SELECT 1\nWHERE 1 = 1\n  AND name = $1 -- :if $1\n  AND email = $1 -- :if $1"
    sql, args = dynamic_sql(query, ["alice"])
    assert sql == "SELECT 1\nWHERE 1 = 1\n  AND name = $1\n  AND email = $1"
    assert args == ["alice"]


def test_multi_condition_line_needs_all_active():
    query = "SELECT 1\nWHERE a = $1\n  AND (b = $2 OR c = $3) -- :if $2 -- :if $3"
    only_one, _ = dynamic_sql(query, ["a", "b", None])
    both, args = dynamic_sql(query, ["a", "b", "c"])
    assert only_one == "SELECT 1\nWHERE a = $1"
    assert both == "SELECT 1\nWHERE a = $1\n  AND (b = $2 OR c = $3)"
    assert args == ["a", "b", "c"]


def test_trailing_newline_is_dropped():
    sql, args = dynamic_sql("SELECT 1\nWHERE a = $1\n", ["x"])
    assert sql == "SELECT 1\nWHERE a = $1"
    assert args == ["x"]


def test_compiled_query_is_reusable():
    compiled = compile_dyn_sql(STANDALONE_QUERY)
    first = compiled.build(["x", None])
    second = compiled.build(["x", "v"])
    third = compiled.build(["x", None])
    assert first == third
    assert second == ("SELECT * FROM t\nWHERE a = $1\n  AND b = $2", ["x", "v"])


def test_missing_condition_arg_is_inactive():
    sql, args = dynamic_sql("SELECT 1\nWHERE a = $1\n  AND b = $2 -- :if $2", ["x"])
    assert sql == "SELECT 1\nWHERE a = $1"
    assert args == ["x"]


def test_extract_cond_idxs():
    assert extract_cond_idxs("  a = $1 -- :if $2 -- :if $13") == ([1, 12], "  a = $1")
    assert extract_cond_idxs("a = $1") == ([], "a = $1")
    assert extract_cond_idxs("a -- :if $0") == ([], "a")


def test_split_placeholders():
    assert split_placeholders("a = $1 AND b = $12") == (["a = ", " AND b = ", ""], [1, 12])
    assert split_placeholders("$$x$") == (["$$x$"], [])
    assert split_placeholders("$$1") == (["$", ""], [1])


def test_finalize_query():
    assert finalize_query("x\nWHERE a,\n") == "x\nWHERE a\n"
    assert finalize_query("x\n  order by \n") == "x"
    assert finalize_query("   \n") == "   \n"
    assert finalize_query("SELECT 1") == "SELECT 1"


@pytest.mark.parametrize(
    "value, expected",
    [(None, False), (False, False), (True, True), (0, True), ("", True), ([], True)],
)
def test_arg_active(value, expected):
    assert arg_active(value) is expected