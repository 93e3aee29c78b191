"""Test join planning and deduplication."""

import sqlglot
from sqlglot import exp, select

from queryable.sql.joins import JoinOperation, apply_joins, existing_join_tables, plan_joins

JOINS = {
    "users": ("posts.user_id", "users.id"),
    "countries": ("users.country_id", "countries.id"),
}


def test_plan_all_joins_in_declared_order():
    planned = plan_joins(set(), JOINS)

    assert planned == [
        JoinOperation("users", "posts.user_id", "users.id"),
        JoinOperation("countries", "users.country_id", "countries.id"),
    ]


def test_plan_skips_existing_tables():
    assert plan_joins({"users"}, JOINS) == [JoinOperation("countries", "users.country_id", "countries.id")]
    assert plan_joins({"users", "countries"}, JOINS) == []


def test_plan_with_no_joins():
    assert plan_joins({"users"}, {}) == []


def test_existing_join_tables_reads_query():
    query = sqlglot.parse_one(
        "SELECT * FROM posts JOIN users ON posts.user_id = users.id "
        "LEFT JOIN geo.countries AS c ON users.country_id = c.id "
        "JOIN (SELECT * FROM tags) AS t ON t.post_id = posts.id"
    )

    assert existing_join_tables(query) == {"users", "geo.countries"}


def test_existing_join_tables_empty():
    assert existing_join_tables(select("*").from_("posts")) == set()


def test_apply_joins_adds_inner_joins():
    query = select("posts.*").from_("posts")

    result = apply_joins(query, JOINS)

    assert result is query
    assert query.sql() == (
        "SELECT posts.* FROM posts "
        "INNER JOIN users ON posts.user_id = users.id "
        "INNER JOIN countries ON users.country_id = countries.id"
    )


def test_apply_joins_twice_adds_no_duplicates():
    query = select("posts.*").from_("posts")

    apply_joins(query, JOINS)
    apply_joins(query, JOINS)

    tables = [join.this.name for join in query.args["joins"]]
    assert tables == ["users", "countries"]


def test_apply_joins_respects_joins_already_on_query():
    """A join added by the caller (of any kind) isn't added again."""
    query = sqlglot.parse_one("SELECT posts.* FROM posts LEFT JOIN users ON posts.user_id = users.id")

    apply_joins(query, JOINS)

    joins = query.args["joins"]
    assert [join.this.name for join in joins] == ["users", "countries"]
    assert joins[0].side == "LEFT"
    assert joins[1].kind == "INNER"


def test_join_operation_predicate():
    on = JoinOperation("users", "posts.user_id", "users.id").on()

    assert isinstance(on, exp.EQ)
    assert on.sql() == "posts.user_id = users.id"
