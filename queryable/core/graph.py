"""Entity graph for managing models and their relationships."""

from queryable.core.model import Model


class EntityGraph:
    """Graph of registered models, keyed by model name.

    Relationships are edges by name: a relationship's target is looked up in the
    graph when a dotted path is walked, so models can be registered in any order.

    Used as a context manager, models created inside the block register
    themselves:

        with EntityGraph() as graph:
            Model(name="users", table="users")
    """

    def __init__(self, models: list[Model] | None = None):
        self.models: dict[str, Model] = {}
        for model in models or []:
            self.add_model(model)

    def __enter__(self) -> "EntityGraph":
        from .registry import set_current_graph

        set_current_graph(self)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        from .registry import set_current_graph

        set_current_graph(None)

    def __contains__(self, name: str) -> bool:
        return name in self.models

    def add_model(self, model: Model) -> None:
        """Add a model to the graph.

        Args:
            model: Model to add

        Raises:
            ValueError: If a model with the same name is already registered
        """
        if model.name in self.models:
            raise ValueError(f"Model {model.name} already exists")

        self.models[model.name] = model

    def get_model(self, name: str) -> Model:
        """Get model by name.

        Args:
            name: Model name

        Returns:
            Model instance

        Raises:
            KeyError: If model not found
        """
        if name not in self.models:
            raise KeyError(f"Model {name} not found")
        return self.models[name]

    def get_related_model(self, model: Model, relation: str) -> Model | None:
        """Get the model a named relationship points to.

        Args:
            model: Model declaring the relationship
            relation: Relationship accessor name

        Returns:
            The related model, or None when the relationship is not declared or
            its target is not registered
        """
        relationship = model.get_relationship(relation)
        if relationship is None:
            return None
        return self.models.get(relationship.target)

    def list_models(self) -> list[str]:
        """List all model names."""
        return list(self.models.keys())
