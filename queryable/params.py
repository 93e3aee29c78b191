"""Extraction of search and order requests from request parameters."""

from typing import Any, Protocol

from pydantic import BaseModel, Field


class ParameterSource(Protocol):
    """Anything request parameters can be read from (a dict, a query-string mapping)."""

    def get(self, name: str, default: Any = None) -> Any: ...


class ParamNames(BaseModel):
    """Names of the request parameters that drive search and ordering."""

    search: str = Field(default="search", description="Parameter holding the search text")
    search_fields: list[str] = Field(
        default_factory=lambda: ["searchFields", "search_fields"],
        description="Parameters holding the comma-separated fields to search (first present wins)",
    )
    order_by: str = Field(default="order_by", description="Parameter holding the dotted order key")
    sort_by: str = Field(default="sort_by", description="Parameter holding the sort direction")
    default_direction: str = Field(default="asc", description="Direction used when sort_by is absent")


class SearchRequest(BaseModel):
    """Search text and the optional fields to restrict it to."""

    term: str
    field_filter: list[str] | None = None


class OrderRequest(BaseModel):
    """Dotted order key and sort direction."""

    key: str
    direction: str = "asc"


def split_fields(value: str | list[str] | None) -> list[str] | None:
    """Split a comma-separated field list ("posts.title,users.name").

    Blank items are dropped. Lists (repeated query parameters) are split item by
    item.
    """
    if value is None:
        return None

    items = value if isinstance(value, list) else [value]
    return [field.strip() for item in items for field in str(item).split(",") if field.strip()]


def extract_search(params: ParameterSource, names: ParamNames | None = None) -> SearchRequest | None:
    """Read the search request, or None when no search parameter is present."""
    names = names or ParamNames()

    term = params.get(names.search)
    if term is None:
        return None

    field_filter = None
    for name in names.search_fields:
        value = params.get(name)
        if value is not None:
            field_filter = split_fields(value)
            break

    return SearchRequest(term=str(term), field_filter=field_filter)


def extract_order(params: ParameterSource, names: ParamNames | None = None) -> OrderRequest | None:
    """Read the order request, or None when no order parameter is present."""
    names = names or ParamNames()

    key = params.get(names.order_by)
    if key is None:
        return None

    direction = params.get(names.sort_by)
    if direction is None or not str(direction).strip():
        direction = names.default_direction

    return OrderRequest(key=str(key), direction=str(direction))
