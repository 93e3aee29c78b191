"""Resolution of dotted relationship paths to table-qualified columns."""

import logging

from queryable.core.graph import EntityGraph
from queryable.core.model import Model

logger = logging.getLogger(__name__)


class ColumnResolver:
    """Resolves dotted paths like ``author.country.name`` against a model.

    Each leading segment is looked up as a relationship on the current model and
    replaced by the related model's table, so ``author.country.name`` on posts
    becomes ``countries.name`` when ``author`` points at users and users'
    ``country`` points at countries. Paths that don't start with a known
    relationship are returned unchanged and treated as literal columns.
    """

    def __init__(self, graph: EntityGraph):
        self.graph = graph

    def resolve(self, model: Model, path: str) -> str:
        """Resolve a column path.

        Args:
            model: Model the path starts from
            path: Dot-separated path (e.g., "author.name", "posts.title", "title")

        Returns:
            Fully-qualified column (e.g., "users.name"), or the path unchanged
            when it has no dot or its first segment is not a relationship
        """
        relation, _, rest = path.partition(".")

        # A bare column belongs to the caller's configuration
        if not rest:
            return path

        related = self.graph.get_related_model(model, relation)
        if related is None:
            logger.debug("%r is not a relationship of %s, using %r as a column", relation, model.name, path)
            return path

        if "." not in rest:
            return f"{related.table}.{rest}"

        # rest is strictly shorter than path, so cycles in the graph still terminate
        return self.resolve(related, rest)


def resolve_column(graph: EntityGraph, model: Model, path: str) -> str:
    """Resolve a dotted path against a model. See ColumnResolver.resolve."""
    return ColumnResolver(graph).resolve(model, path)
