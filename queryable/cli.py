"""CLI for compiling and running request-augmented queries."""

import logging
from pathlib import Path

import typer

from queryable import __version__
from queryable.config import QueryableSettings, find_config, load_config
from queryable.core.graph import EntityGraph
from queryable.http_query import QueryAugmentor
from queryable.loaders import load_models
from queryable.params import OrderRequest, SearchRequest, split_fields
from queryable.validation import validate_graph


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"queryable {__version__}")
        raise typer.Exit()


app = typer.Typer(
    help="queryable: search and relation-aware ordering for SQL queries",
    no_args_is_help=True,
)

# Global state for config (set in callback, used in commands)
_loaded_config: QueryableSettings | None = None


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True, help="Show version"
    ),
    config: Path = typer.Option(None, "--config", "-c", help="Path to config file (queryable.yaml)"),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug output to stderr"),
):
    """queryable CLI.

    A config file (queryable.yaml or queryable.json) sets default values.
    CLI arguments override config file values.
    """
    global _loaded_config

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    config_path = config or find_config()

    if config_path:
        try:
            _loaded_config = load_config(config_path)
            typer.echo(f"Loaded config from: {config_path}", err=True)
        except Exception as e:
            typer.echo(f"Warning: Failed to load config: {e}", err=True)
            _loaded_config = None
    else:
        _loaded_config = None


def _models_path(models: Path | None) -> Path:
    if models is not None:
        return models
    if _loaded_config:
        return Path(_loaded_config.models_path)
    return Path(".")


def _load_graph(models: Path | None) -> EntityGraph:
    path = _models_path(models)
    if not path.exists():
        typer.echo(f"Error: {path} does not exist", err=True)
        raise typer.Exit(1)

    try:
        graph = load_models(path)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if not graph.models:
        typer.echo("Error: No models found", err=True)
        raise typer.Exit(1)

    return graph


def _augment(
    model: str,
    models: Path | None,
    sql: str | None,
    search: str | None,
    search_fields: str | None,
    order_by: str | None,
    sort_by: str | None,
    dialect: str | None,
):
    graph = _load_graph(models)
    if model not in graph:
        typer.echo(f"Error: Model {model} not found. Available: {', '.join(graph.list_models())}", err=True)
        raise typer.Exit(1)

    dialect = dialect or (_loaded_config.dialect if _loaded_config else None)
    params = _loaded_config.params if _loaded_config else None
    augmentor = QueryAugmentor(graph, dialect=dialect, params=params)

    search_request = None
    if search is not None:
        search_request = SearchRequest(term=search, field_filter=split_fields(search_fields))

    order_request = None
    if order_by is not None:
        order_request = OrderRequest(key=order_by, direction=sort_by or augmentor.params.default_direction)

    try:
        query = augmentor.augment(sql, model, search=search_request, order=order_request)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    return augmentor, query


@app.command()
def compile(
    model: str = typer.Argument(..., help="Model the query selects from"),
    models: Path = typer.Option(None, "--models", "-m", help="Model file or directory (overrides config)"),
    sql: str = typer.Option(None, "--sql", help="Base query (defaults to selecting everything from the model's table)"),
    search: str = typer.Option(None, "--search", "-s", help="Search text"),
    search_fields: str = typer.Option(None, "--search-fields", help="Comma-separated columns to restrict the search to"),
    order_by: str = typer.Option(None, "--order-by", "-o", help="Dotted column path to order by (e.g., author.name)"),
    sort_by: str = typer.Option(None, "--sort-by", help="Sort direction (asc or desc)"),
    dialect: str = typer.Option(None, "--dialect", "-d", help="SQL dialect (overrides config)"),
    pretty: bool = typer.Option(False, "--pretty", help="Pretty-print the SQL"),
):
    """
    Print the SQL for a model query with search and ordering applied.

    Examples:
      queryable compile posts --search test
      queryable compile posts --order-by author.country.name --sort-by desc
      queryable compile posts --sql "SELECT * FROM posts WHERE published" --search news
    """
    augmentor, query = _augment(model, models, sql, search, search_fields, order_by, sort_by, dialect)
    typer.echo(query.sql(dialect=augmentor.dialect, pretty=pretty))


@app.command()
def run(
    model: str = typer.Argument(..., help="Model the query selects from"),
    models: Path = typer.Option(None, "--models", "-m", help="Model file or directory (overrides config)"),
    db: Path = typer.Option(None, "--db", help="Path to DuckDB database file (overrides config)"),
    sql: str = typer.Option(None, "--sql", help="Base query (defaults to selecting everything from the model's table)"),
    search: str = typer.Option(None, "--search", "-s", help="Search text"),
    search_fields: str = typer.Option(None, "--search-fields", help="Comma-separated columns to restrict the search to"),
    order_by: str = typer.Option(None, "--order-by", "-o", help="Dotted column path to order by (e.g., author.name)"),
    sort_by: str = typer.Option(None, "--sort-by", help="Sort direction (asc or desc)"),
    output: Path = typer.Option(None, "--output", help="Output file (default: stdout)"),
):
    """
    Run a model query with search and ordering applied and output results as CSV.

    Examples:
      queryable run posts --db blog.duckdb --search test
      queryable run posts --db blog.duckdb --order-by author.name --output posts.csv
    """
    import csv
    import sys

    import duckdb

    db_path = str(db) if db else None
    if db_path is None and _loaded_config and _loaded_config.connection:
        db_path = _loaded_config.connection.path
    if db_path is None:
        typer.echo("Error: --db is required when no connection is configured", err=True)
        raise typer.Exit(1)

    augmentor, query = _augment(model, models, sql, search, search_fields, order_by, sort_by, "duckdb")

    try:
        conn = duckdb.connect(db_path, read_only=db_path != ":memory:")
        try:
            result = conn.execute(query.sql(dialect="duckdb"))
            columns = [desc[0] for desc in result.description]
            rows = result.fetchall()
        finally:
            conn.close()
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if output:
        with open(output, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(columns)
            writer.writerows(rows)
        typer.echo(f"Results written to {output}", err=True)
    else:
        writer = csv.writer(sys.stdout)
        writer.writerow(columns)
        writer.writerows(rows)


@app.command()
def info(
    path: Path = typer.Argument(None, help="Model file or directory (defaults to config or current dir)"),
):
    """
    Show the models with their relationships and searchable columns.

    Examples:
      queryable info
      queryable info ./models
    """
    graph = _load_graph(path)

    for model_name, model in sorted(graph.models.items()):
        typer.echo(f"● {model_name}")
        typer.echo(f"  Table: {model.table}")
        if model.relationships:
            relationships = [f"{r.name} -> {r.target}" for r in model.relationships]
            typer.echo(f"  Relationships: {', '.join(relationships)}")
        if model.queryable.columns:
            typer.echo(f"  Searchable: {', '.join(model.queryable.columns)}")
        if model.queryable.joins:
            typer.echo(f"  Joins: {', '.join(model.queryable.joins)}")
        typer.echo()


@app.command()
def validate(
    path: Path = typer.Argument(None, help="Model file or directory (defaults to config or current dir)"),
):
    """
    Check that relationships point at known models and searchable columns are joined.

    Examples:
      queryable validate
      queryable validate ./models
    """
    graph = _load_graph(path)
    errors = validate_graph(graph)

    if errors:
        for error in errors:
            typer.echo(f"  - {error}", err=True)
        typer.echo(f"{len(errors)} error(s) found", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {len(graph.models)} model(s) valid")


if __name__ == "__main__":
    app()
