"""Configuration file format for queryable."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from queryable.params import ParamNames
from queryable.validation import ConfigError

CONFIG_FILENAMES = ["queryable.yaml", "queryable.yml", "queryable.json"]


class DuckDBConnection(BaseModel):
    """DuckDB connection configuration."""

    type: Literal["duckdb"] = "duckdb"
    path: str = Field(..., description="Path to DuckDB database file or :memory:")


class QueryableSettings(BaseModel):
    """queryable configuration file format.

    Can be saved as queryable.yaml or queryable.json.

    Example YAML:
        models_path: ./models
        dialect: postgres
        params:
          search: q
          search_fields: [fields]
          order_by: sort
          sort_by: dir
        connection:
          type: duckdb
          path: data/blog.db
    """

    models_path: str = Field(default=".", description="Model file or directory of model files (defaults to current dir)")
    dialect: str | None = Field(default=None, description="SQL dialect for generated queries")
    params: ParamNames = Field(default_factory=ParamNames, description="Request parameter names")
    connection: DuckDBConnection | None = Field(default=None, description="Database connection configuration")

    def resolve_paths(self, base_dir: Path | None = None) -> "QueryableSettings":
        """Resolve relative paths to absolute paths.

        Args:
            base_dir: Base directory for resolving relative paths (defaults to cwd)

        Returns:
            New settings with resolved paths
        """
        base = base_dir or Path.cwd()

        models_path = Path(self.models_path)
        if not models_path.is_absolute():
            models_path = (base / models_path).resolve()

        connection = self.connection
        if connection and connection.path != ":memory:":
            db_path = Path(connection.path)
            if not db_path.is_absolute():
                db_path = (base / db_path).resolve()
            connection = DuckDBConnection(path=str(db_path))

        return self.model_copy(update={"models_path": str(models_path), "connection": connection})


def load_config(config_path: Path) -> QueryableSettings:
    """Load configuration from YAML or JSON file.

    Args:
        config_path: Path to config file (queryable.yaml or queryable.json)

    Returns:
        Loaded and validated configuration

    Raises:
        ConfigError: If the file doesn't exist or its format is unsupported
    """
    import json

    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    suffix = config_path.suffix.lower()

    if suffix in {".yaml", ".yml"}:
        import yaml

        with open(config_path) as f:
            data = yaml.safe_load(f)
    elif suffix == ".json":
        with open(config_path) as f:
            data = json.load(f)
    else:
        raise ConfigError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    settings = QueryableSettings(**(data or {}))

    # Relative paths are relative to the config file
    return settings.resolve_paths(config_path.parent)


def find_config(start_dir: Path | None = None) -> Path | None:
    """Find config file by searching up the directory tree.

    Args:
        start_dir: Directory to start searching from (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for name in CONFIG_FILENAMES:
            config_path = current / name
            if config_path.exists():
                return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None
