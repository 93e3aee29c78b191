"""Query augmentation from HTTP-style search and order parameters."""

import logging

import sqlglot
from sqlglot import exp, select
from sqlglot.dialects.dialect import DialectType

from queryable.core.graph import EntityGraph
from queryable.core.model import Model
from queryable.core.queryable import QueryableConfig
from queryable.params import OrderRequest, ParameterSource, ParamNames, SearchRequest, extract_order, extract_search
from queryable.sql.joins import apply_joins
from queryable.sql.order import apply_order_by
from queryable.sql.search import apply_search

logger = logging.getLogger(__name__)


def http_query(
    query: exp.Select,
    model: Model,
    graph: EntityGraph,
    search: SearchRequest | None = None,
    order: OrderRequest | None = None,
    config: QueryableConfig | None = None,
    *,
    dialect: DialectType,
) -> exp.Select:
    """Apply a search and/or an order to a query.

    Joins from the queryable config are added before each step, skipping any
    table the query already joins. With neither a search nor an order the query
    is returned as it came in.

    ``dialect`` must be the one the query is later generated with: the order
    term carries that dialect's null placement.

    Args:
        query: Query to modify in place
        model: Model the query selects from
        graph: Graph used to resolve relationship paths
        search: Search request, if any
        order: Order request, if any
        config: Queryable config (defaults to the model's)
        dialect: Dialect the query will be generated with (None for sqlglot's default)

    Returns:
        The same query
    """
    if config is None:
        config = model.queryable

    if search is not None:
        apply_joins(query, config.joins)
        apply_search(query, config.columns, search.term, search.field_filter)

    if order is not None:
        apply_joins(query, config.joins)
        apply_order_by(query, graph, model, order.key, order.direction, dialect=dialect)

    return query


def select_from(model: Model, dialect: DialectType = None) -> exp.Select:
    """Base query selecting every column of the model's table."""
    table = exp.to_table(model.table, dialect=dialect)
    return select(exp.Column(this=exp.Star(), table=exp.to_identifier(table.name))).from_(table)


class QueryAugmentor:
    """Applies request-driven search and ordering to queries over a graph.

    Example:
        >>> augmentor = QueryAugmentor(graph, dialect="postgres")
        >>> augmentor.compile("posts", {"search": "test", "order_by": "author.name"})
    """

    def __init__(self, graph: EntityGraph, dialect: DialectType = None, params: ParamNames | None = None):
        self.graph = graph
        self.dialect = dialect
        self.params = params or ParamNames()

    def _model(self, model: Model | str) -> Model:
        return self.graph.get_model(model) if isinstance(model, str) else model

    def _query(self, query: exp.Select | str | None, model: Model) -> exp.Select:
        if query is None:
            return select_from(model, dialect=self.dialect)
        if isinstance(query, str):
            return sqlglot.parse_one(query, into=exp.Select, dialect=self.dialect)
        return query

    def augment(
        self,
        query: exp.Select | str | None,
        model: Model | str,
        search: SearchRequest | None = None,
        order: OrderRequest | None = None,
        config: QueryableConfig | None = None,
    ) -> exp.Select:
        """Apply a search and/or order.

        Args:
            query: Query to modify; SQL text is parsed and None selects from the model's table
            model: Model (or model name) the query selects from
            search: Search request, if any
            order: Order request, if any
            config: Queryable config (defaults to the model's)

        Returns:
            The augmented query (the same object when a Select was passed)
        """
        model = self._model(model)
        query = self._query(query, model)
        return http_query(query, model, self.graph, search=search, order=order, config=config, dialect=self.dialect)

    def augment_from_params(
        self,
        query: exp.Select | str | None,
        model: Model | str,
        params: ParameterSource | None,
        config: QueryableConfig | None = None,
    ) -> exp.Select:
        """Apply whatever search and order the request parameters ask for.

        Missing parameters (or no parameter source at all) leave the query as it is.
        """
        model = self._model(model)
        query = self._query(query, model)

        if params is None:
            return query

        search = extract_search(params, self.params)
        order = extract_order(params, self.params)
        logger.debug("Augmenting %s query with search=%s order=%s", model.name, search, order)

        return http_query(query, model, self.graph, search=search, order=order, config=config, dialect=self.dialect)

    def compile(
        self,
        model: Model | str,
        params: ParameterSource | None = None,
        query: exp.Select | str | None = None,
        pretty: bool = False,
    ) -> str:
        """Augment a query from request parameters and return the SQL."""
        augmented = self.augment_from_params(query, model, params)
        return augmented.sql(dialect=self.dialect, pretty=pretty)
