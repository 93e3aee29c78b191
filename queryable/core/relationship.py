"""Relationship definitions for queryable models."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Relationship(BaseModel):
    """Represents a named relationship from one model to another.

    The relationship name is the accessor used in dotted paths
    (``author.country.name``); ``model`` names the related model in the graph.

    Relationship types:
    - many_to_one: This model has a foreign key to another (belongs to)
    - one_to_one: This model is referenced by another with unique constraint (has one)
    - one_to_many: This model is referenced by another (has many)
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Relationship accessor name used in dotted paths")
    model: str | None = Field(default=None, description="Name of the related model (defaults to name)")
    type: Literal["many_to_one", "one_to_one", "one_to_many"] = Field(
        default="many_to_one", description="Type of relationship"
    )
    foreign_key: str | None = Field(default=None, description="Foreign key column (informational)")
    primary_key: str | None = Field(default=None, description="Primary key column in related model (informational)")

    @property
    def target(self) -> str:
        """Name of the related model."""
        return self.model or self.name
