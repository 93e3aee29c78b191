from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

import duckdb


def _normalize(value: Any) -> Any:
    """Best-effort conversion of DuckDB result values into Python primitives."""

    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, memoryview):
        return value.tobytes()
    return value


def _column_names(result: Any) -> list[str]:
    if hasattr(result, "columns"):
        columns = getattr(result, "columns")
        if isinstance(columns, Sequence):
            return list(columns)
    if hasattr(result, "description") and result.description:
        return [col[0] for col in result.description]
    raise AttributeError("Result object does not expose column metadata")


def fetch_rows(result: Any) -> list[tuple[Any, ...]]:
    """Return query results as Python tuples with normalized values."""

    rows = result.fetchall()
    return [tuple(_normalize(value) for value in row) for row in rows]


def fetch_dicts(result: Any) -> list[dict[str, Any]]:
    """Return query results as dictionaries keyed by column name."""

    columns = _column_names(result)
    return [dict(zip(columns, row)) for row in fetch_rows(result)]


def create_blog_database(path: str = ":memory:") -> duckdb.DuckDBPyConnection:
    """Posts, users and countries with a few rows each."""

    conn = duckdb.connect(path)
    conn.execute("CREATE TABLE countries (id INTEGER, name VARCHAR)")
    conn.execute("CREATE TABLE users (id INTEGER, country_id INTEGER, name VARCHAR)")
    conn.execute("CREATE TABLE posts (id INTEGER, user_id INTEGER, title VARCHAR, published BOOLEAN)")

    conn.execute("INSERT INTO countries VALUES (1, 'Belgium'), (2, 'Netherlands'), (3, 'Austria')")
    conn.execute("INSERT INTO users VALUES (10, 2, 'Anna'), (11, 1, 'Bram'), (12, 3, 'Test Pilot')")
    conn.execute(
        """
        INSERT INTO posts VALUES
            (100, 10, 'Hello world', true),
            (101, 11, 'A test post', true),
            (102, 12, 'Flying lessons', false),
            (103, 10, 'Testing in production', false)
        """
    )
    return conn
