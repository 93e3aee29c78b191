"""Test the grouped LIKE search clause."""

import sqlglot
from sqlglot import exp, select

from queryable.sql.search import apply_search, filter_columns, search_condition

COLUMNS = ["posts.title", "users.name"]


def test_filter_columns_without_filter():
    assert filter_columns(COLUMNS, None) == COLUMNS
    assert filter_columns(COLUMNS, []) == COLUMNS


def test_filter_columns_keeps_configuration_order():
    assert filter_columns(COLUMNS, ["users.name", "posts.title"]) == COLUMNS
    assert filter_columns(COLUMNS, ["posts.title"]) == ["posts.title"]


def test_filter_columns_ignores_unconfigured_fields():
    assert filter_columns(COLUMNS, ["posts.body", "users.name"]) == ["users.name"]
    assert filter_columns(COLUMNS, ["posts.body"]) == []


def test_search_over_all_columns():
    query = select("posts.*").from_("posts")

    result = apply_search(query, COLUMNS, "test")

    assert result is query
    assert query.sql() == (
        "SELECT posts.* FROM posts WHERE (posts.title LIKE '%test%' OR users.name LIKE '%test%')"
    )


def test_search_with_field_filter():
    query = select("posts.*").from_("posts")

    apply_search(query, COLUMNS, "test", ["posts.title"])

    assert query.sql() == "SELECT posts.* FROM posts WHERE (posts.title LIKE '%test%')"


def test_search_is_anded_with_existing_conditions():
    """Existing OR conditions keep their grouping."""
    query = sqlglot.parse_one("SELECT * FROM posts WHERE posts.published = TRUE OR posts.pinned = TRUE")

    apply_search(query, COLUMNS, "test")

    where = query.args["where"].this
    assert isinstance(where, exp.And)
    assert where.left.sql() == "(posts.published = TRUE OR posts.pinned = TRUE)"
    assert where.right.sql() == "(posts.title LIKE '%test%' OR users.name LIKE '%test%')"


def test_empty_effective_columns_is_a_no_op():
    query = sqlglot.parse_one("SELECT * FROM posts WHERE posts.published = TRUE")
    before = query.sql()

    apply_search(query, COLUMNS, "test", ["posts.body"])

    assert query.sql() == before


def test_no_columns_configured_is_a_no_op():
    query = select("*").from_("posts")

    apply_search(query, [], "test")

    assert query.args.get("where") is None


def test_term_is_a_string_literal():
    """Quotes in the term can't break out of the literal."""
    condition = search_condition(["posts.title"], "it's'; DROP TABLE posts; --")

    like = condition.find(exp.Like)
    assert isinstance(like.expression, exp.Literal)
    assert like.expression.is_string
    assert like.expression.this == "%it's'; DROP TABLE posts; --%"
    assert "'%it''s''; DROP TABLE posts; --%'" in condition.sql()


def test_like_wildcards_in_term_pass_through():
    condition = search_condition(["posts.title"], "50%_off")
    assert condition.sql() == "(posts.title LIKE '%50%_off%')"


def test_unsafe_column_names_are_quoted():
    condition = search_condition(["posts.title; DROP TABLE posts"], "x")
    assert condition.sql() == "(posts.\"title; DROP TABLE posts\" LIKE '%x%')"


def test_search_condition_without_columns():
    assert search_condition([], "test") is None
