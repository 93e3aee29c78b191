"""Context registry for auto-registration of models."""

from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .graph import EntityGraph

# Context-local current graph
_current_graph: ContextVar["EntityGraph | None"] = ContextVar("current_graph", default=None)


def get_current_graph() -> "EntityGraph | None":
    """Get the current entity graph from context."""
    return _current_graph.get()


def set_current_graph(graph: "EntityGraph | None"):
    """Set the current entity graph context."""
    _current_graph.set(graph)


def auto_register_model(model):
    """Auto-register model with current graph if available."""
    graph = get_current_graph()
    if graph is not None:
        # An explicit add_model() after construction must not register twice
        if model.name not in graph.models:
            graph.add_model(model)
