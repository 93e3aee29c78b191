"""Loading model definitions from YAML files."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from queryable.core.graph import EntityGraph
from queryable.core.model import Model
from queryable.validation import ConfigError, ModelValidationError

logger = logging.getLogger(__name__)

MODEL_SUFFIXES = {".yml", ".yaml"}


def substitute_env_vars(content: str) -> str:
    """Substitute environment variables in YAML content.

    Supports:
    - ${ENV_VAR} - replaced with environment variable value
    - ${ENV_VAR:-default} - replaced with value or default if not set
    - $ENV_VAR - simple form without braces

    Unset variables without a default are left as written.

    Examples:
        >>> os.environ['APP_SCHEMA'] = 'blog'
        >>> substitute_env_vars('table: ${APP_SCHEMA}.posts')
        'table: blog.posts'
        >>> substitute_env_vars('table: ${MISSING:-public}.posts')
        'table: public.posts'
    """

    def replace_var(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.environ.get(var_name, default)
        value = os.environ.get(var_expr)
        if value is None:
            return match.group(0)
        return value

    content = re.sub(r"\$\{([^}]+)\}", replace_var, content)

    def replace_simple_var(match):
        value = os.environ.get(match.group(1))
        if value is None:
            return match.group(0)
        return value

    return re.sub(r"\$([A-Z_][A-Z0-9_]*)", replace_simple_var, content)


def parse_model(model_def: dict) -> Model:
    """Build a model from its YAML definition.

    Raises:
        ModelValidationError: If the definition is invalid
    """
    try:
        return Model(**model_def)
    except PydanticValidationError as e:
        name = model_def.get("name", "<unnamed>") if isinstance(model_def, dict) else "<invalid>"
        raise ModelValidationError(f"Model '{name}' is invalid:\n{e}") from e


def parse_models_file(path: str | Path) -> list[Model]:
    """Parse every model in a YAML file.

    Example file:
    ```yaml
    models:
      - name: posts
        table: posts
        relationships:
          - name: author
            model: users
        queryable:
          columns: [posts.title, users.name]
          joins:
            users: [posts.user_id, users.id]
    ```

    Raises:
        ConfigError: If the file doesn't exist or isn't valid YAML
        ModelValidationError: If a model definition is invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Model file not found: {path}")

    try:
        data = yaml.safe_load(substitute_env_vars(path.read_text()))
    except yaml.YAMLError as e:
        raise ConfigError(f"Could not parse {path}: {e}") from e

    if not data:
        return []
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping with a 'models' key")

    return [parse_model(model_def) for model_def in data.get("models") or []]


def load_models(path: str | Path, graph: EntityGraph | None = None) -> EntityGraph:
    """Load models from a YAML file or a directory of YAML files.

    In a directory, files without a top-level ``models:`` key are ignored and
    files that fail to parse are skipped with a warning.

    Args:
        path: Model file or directory
        graph: Graph to add models to (a new one by default)

    Returns:
        Graph containing the loaded models

    Raises:
        ConfigError: If the path doesn't exist
    """
    path = Path(path)
    graph = graph if graph is not None else EntityGraph()

    if not path.exists():
        raise ConfigError(f"Path {path} does not exist")

    if path.is_file():
        _add_models(graph, parse_models_file(path))
        return graph

    for file_path in sorted(path.rglob("*")):
        if not file_path.is_file() or file_path.suffix.lower() not in MODEL_SUFFIXES:
            continue
        if "models:" not in file_path.read_text():
            continue

        try:
            models = parse_models_file(file_path)
        except (ConfigError, ModelValidationError) as e:
            logger.warning("Could not parse %s: %s", file_path, e)
            continue

        _add_models(graph, models)

    return graph


def _add_models(graph: EntityGraph, models: list[Model]) -> None:
    # Models auto-registered by a surrounding `with graph:` are already present
    for model in models:
        if graph.models.get(model.name) is not model:
            graph.add_model(model)
