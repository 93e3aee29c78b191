"""Validation and error handling for model definitions."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from queryable.core.graph import EntityGraph
    from queryable.core.model import Model


class ValidationError(Exception):
    """Raised when queryable definitions are invalid."""

    pass


class ModelValidationError(ValidationError):
    """Raised when a model definition is invalid."""

    pass


class ConfigError(ValidationError):
    """Raised when a config or model file can't be read."""

    pass


def validate_model(model: "Model", graph: "EntityGraph") -> list[str]:
    """Check a model's relationships and queryable config against a graph.

    Augmentation never requires this: unknown relationships fall back to
    literal columns at query time. It exists to catch typos in definitions.

    Args:
        model: Model to validate
        graph: Graph the model's relationships should resolve in

    Returns:
        List of validation errors (empty if valid)
    """
    errors = []

    for relationship in model.relationships:
        if relationship.target not in graph.models:
            errors.append(
                f"Model '{model.name}': relationship '{relationship.name}' points to unknown model "
                f"'{relationship.target}'"
            )

    # Searchable columns must come from the model's table or a configured join
    available = {model.table, model.table.split(".")[-1], *model.queryable.joins}
    for column in model.queryable.columns:
        table = column.rpartition(".")[0]
        if table and table not in available:
            errors.append(
                f"Model '{model.name}': searchable column '{column}' uses table '{table}' "
                f"which is neither the model's table nor joined"
            )

    for table, (local_column, foreign_column) in model.queryable.joins.items():
        if not local_column or not foreign_column:
            errors.append(f"Model '{model.name}': join to '{table}' needs both a local and a foreign column")

    return errors


def validate_graph(graph: "EntityGraph") -> list[str]:
    """Validate every model in a graph."""
    errors = []
    for model in graph.models.values():
        errors.extend(validate_model(model, graph))
    return errors
