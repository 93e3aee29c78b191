"""Static search/order configuration attached to a model."""

from pydantic import BaseModel, ConfigDict, Field


class QueryableConfig(BaseModel):
    """Columns a model can be searched on and the joins those columns need.

    Example:
        QueryableConfig(
            columns=["posts.title", "users.name"],
            joins={"users": ("posts.user_id", "users.id")},
        )

    Joins are applied in insertion order. The config is frozen once built.
    """

    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...] = Field(default=(), description="Fully-qualified searchable columns, in order")
    joins: dict[str, tuple[str, str]] = Field(
        default_factory=dict, description="Table -> (local column, foreign column) join predicates, in order"
    )

    @property
    def is_empty(self) -> bool:
        return not self.columns and not self.joins
