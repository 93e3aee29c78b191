"""Multi-column LIKE search clause."""

import logging
from collections.abc import Sequence

from sqlglot import exp

from queryable.sql.columns import column_ref

logger = logging.getLogger(__name__)


def filter_columns(columns: Sequence[str], field_filter: Sequence[str] | None = None) -> list[str]:
    """Restrict searchable columns to the requested fields.

    Args:
        columns: Configured searchable columns
        field_filter: Requested subset; None or empty means all columns

    Returns:
        Columns present in the filter, in configuration order
    """
    if not field_filter:
        return list(columns)

    requested = set(field_filter)
    return [column for column in columns if column in requested]


def search_condition(columns: Sequence[str], term: str) -> exp.Expression | None:
    """Build ``(c1 LIKE '%term%' OR c2 LIKE '%term%' ...)``.

    The term is rendered as a string literal with quotes escaped. LIKE
    wildcards (% and _) inside the term are passed through as wildcards.

    Returns:
        The parenthesized condition, or None when there are no columns
    """
    if not columns:
        return None

    pattern = exp.Literal.string(f"%{term}%")
    return exp.paren(exp.or_(*(column_ref(column).like(pattern.copy()) for column in columns)), copy=False)


def apply_search(
    query: exp.Select,
    columns: Sequence[str],
    term: str,
    field_filter: Sequence[str] | None = None,
) -> exp.Select:
    """Add a grouped search condition to the query.

    The group is ANDed with the existing WHERE clause, leaving those conditions
    as they were. When the field filter leaves no columns the query is returned
    untouched rather than gaining an empty group.

    Args:
        query: Query to modify in place
        columns: Configured searchable columns
        term: Search text
        field_filter: Optional subset of ``columns`` to search

    Returns:
        The same query
    """
    effective = filter_columns(columns, field_filter)
    condition = search_condition(effective, term)

    if condition is None:
        logger.debug("No searchable columns left after filtering by %s, skipping search", field_filter)
        return query

    return query.where(condition, copy=False)
