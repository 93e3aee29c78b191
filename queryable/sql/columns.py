"""Conversion of configured column and table names into sqlglot nodes."""

from sqlglot import exp


def column_ref(path: str) -> exp.Expression:
    """Build a column reference from a dotted path.

    "title" -> title, "posts.title" -> posts.title, up to
    catalog.db.table.column. Longer paths become a chain of dotted identifiers.

    Each part becomes an identifier; names that aren't plain identifiers are
    quoted by sqlglot, so caller-supplied paths never render as raw SQL.
    """
    parts = path.split(".")
    if len(parts) <= 4:
        return exp.column(*reversed(parts))
    return exp.Dot.build([exp.to_identifier(part) for part in parts])


def table_name(table: exp.Table) -> str:
    """Dotted name of a table node without its alias (e.g., "public.users")."""
    return ".".join(part.name for part in table.parts)
