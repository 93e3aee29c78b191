"""queryable: request-driven search and relation-aware ordering for sqlglot queries."""

__version__ = "0.1.0"

from queryable.core.graph import EntityGraph
from queryable.core.model import Model
from queryable.core.queryable import QueryableConfig
from queryable.core.relationship import Relationship
from queryable.core.resolver import ColumnResolver, resolve_column
from queryable.http_query import QueryAugmentor, http_query, select_from
from queryable.loaders import load_models
from queryable.params import OrderRequest, ParamNames, SearchRequest, extract_order, extract_search

__all__ = [
    "ColumnResolver",
    "EntityGraph",
    "Model",
    "OrderRequest",
    "ParamNames",
    "QueryAugmentor",
    "QueryableConfig",
    "Relationship",
    "SearchRequest",
    "extract_order",
    "extract_search",
    "http_query",
    "load_models",
    "resolve_column",
    "select_from",
]
