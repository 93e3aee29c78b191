"""Relation-aware ORDER BY.

sqlglot keeps null placement on each ``exp.Ordered`` node, so an order term is
bound to the dialect it was built for. Render the query with that same dialect;
rendering with another one can add a NULLS FIRST/LAST clause.
"""

import logging

from sqlglot import exp
from sqlglot.dialects.dialect import Dialect, DialectType

from queryable.core.graph import EntityGraph
from queryable.core.model import Model
from queryable.core.resolver import resolve_column
from queryable.sql.columns import column_ref

logger = logging.getLogger(__name__)


def order_term(column: str, direction: str = "asc", dialect: DialectType = None) -> exp.Ordered:
    """ORDER BY term for a resolved column.

    "desc" in any case sorts descending; every other direction sorts ascending.
    Null placement follows the dialect's default so no NULLS FIRST/LAST is
    rendered when the term is generated for ``dialect``.
    """
    normalized = direction.strip().lower()
    desc = normalized == "desc"
    if not desc and normalized != "asc":
        logger.debug("Unrecognised sort direction %r, sorting %s ascending", direction, column)

    null_ordering = Dialect.get_or_raise(dialect).NULL_ORDERING
    nulls_first = null_ordering != "nulls_are_last" and (
        (not desc and null_ordering == "nulls_are_small") or (desc and null_ordering != "nulls_are_small")
    )

    return exp.Ordered(this=column_ref(column), desc=desc, nulls_first=nulls_first)


def apply_order_by(
    query: exp.Select,
    graph: EntityGraph,
    model: Model,
    key: str,
    direction: str = "asc",
    *,
    dialect: DialectType,
) -> exp.Select:
    """Order the query by a column path resolved against ``model``.

    Args:
        query: Query to modify in place
        graph: Graph holding the related models
        model: Model the key is resolved from
        key: Dotted column path (e.g., "author.country.name")
        direction: Sort direction
        dialect: Dialect the query will be generated with (None for sqlglot's default)

    Returns:
        The same query
    """
    column = resolve_column(graph, model, key)
    return query.order_by(order_term(column, direction, dialect), copy=False)
