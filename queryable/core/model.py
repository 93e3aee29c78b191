"""Model definitions."""

from pydantic import BaseModel, Field

from queryable.core.queryable import QueryableConfig
from queryable.core.relationship import Relationship


class Model(BaseModel):
    """Model (entity) definition.

    A model maps to a physical table and declares the relationships dotted
    paths may traverse. Auto-registers with the current entity graph context if
    available.
    """

    name: str = Field(..., description="Unique model name")
    table: str = Field(..., description="Physical table name (schema.table)")
    description: str | None = Field(None, description="Human-readable description")
    primary_key: str = Field(default="id", description="Primary key column (informational)")

    relationships: list[Relationship] = Field(
        default_factory=list,
        description="Relationships to other models"
    )
    queryable: QueryableConfig = Field(
        default_factory=QueryableConfig,
        description="Searchable columns and the joins they require"
    )

    def __init__(self, **data):
        super().__init__(**data)

        # Auto-register with current graph if in context
        from .registry import auto_register_model
        auto_register_model(self)

    def get_relationship(self, name: str) -> Relationship | None:
        """Get relationship by accessor name."""
        for relationship in self.relationships:
            if relationship.name == name:
                return relationship
        return None
