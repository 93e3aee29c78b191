"""Planning and applying the joins a search or order needs."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from sqlglot import exp

from queryable.sql.columns import column_ref, table_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JoinOperation:
    """An INNER JOIN still to be added to a query."""

    table: str
    local_column: str
    foreign_column: str

    def on(self) -> exp.Expression:
        """Join predicate: local_column = foreign_column."""
        return column_ref(self.local_column).eq(column_ref(self.foreign_column))


def existing_join_tables(query: exp.Select) -> set[str]:
    """Tables already joined on the query.

    Read from the query itself on every call. Joins to subqueries or other
    non-table sources are not included.
    """
    tables = set()
    for join in query.args.get("joins") or []:
        if isinstance(join.this, exp.Table):
            tables.add(table_name(join.this))
    return tables


def plan_joins(existing: Iterable[str], joins: Mapping[str, tuple[str, str]]) -> list[JoinOperation]:
    """Compute the joins still needed, in declaration order.

    Args:
        existing: Table names already joined on the query
        joins: Table -> (local column, foreign column), in application order

    Returns:
        Join operations for every table not in ``existing``
    """
    seen = set(existing)
    planned = []

    for table, (local_column, foreign_column) in joins.items():
        if table in seen:
            logger.debug("Skipping join to %s: already joined", table)
            continue
        seen.add(table)
        planned.append(JoinOperation(table, local_column, foreign_column))

    return planned


def apply_joins(query: exp.Select, joins: Mapping[str, tuple[str, str]]) -> exp.Select:
    """Add the configured joins the query doesn't have yet.

    The query is modified in place and returned. Calling this again with the
    same joins adds nothing.
    """
    for operation in plan_joins(existing_join_tables(query), joins):
        query.join(
            exp.to_table(operation.table),
            on=operation.on(),
            join_type="inner",
            copy=False,
        )
    return query
