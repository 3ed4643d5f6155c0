"""Main CLI entry point for prisma-graph.

Validates, parses, inspects and re-emits Prisma schema files from the
command line.
"""

from pathlib import Path
from typing import Any
import json
import logging
import sys

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from prisma_graph import __version__
from prisma_graph.config.base import ProjectConfig
from prisma_graph.config.loader import ConfigLoader, DEFAULT_CONFIG_FILENAME, load_config
from prisma_graph.engine.validation_engine import ValidationEngine, ValidationResult
from prisma_graph.errors import GraphDocumentError, PrismaGraphError, SchemaFileError
from prisma_graph.graph.document import SchemaGraph
from prisma_graph.schemas.parser import load_schema_file

console = Console()


def _setup_logging(verbose: bool) -> None:
    """Route prisma_graph log records through rich."""
    logger = logging.getLogger("prisma_graph")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def _fail(ctx: click.Context, message: str) -> None:
    console.print(f"[red]Error: {escape(message)}[/red]")
    if ctx.obj.get("verbose", False):
        import traceback
        console.print(traceback.format_exc())
    sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="prisma-graph")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """prisma-graph - Turn Prisma schemas into model/relation graphs and back."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _setup_logging(verbose)


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.pass_context
def validate(ctx: click.Context, schema_file: str) -> None:
    """Run structural checks on a schema file.

    SCHEMA_FILE is the path to a .prisma or .txt file.
    """
    engine = ValidationEngine()

    try:
        content = load_schema_file(schema_file)
    except PrismaGraphError as e:
        _fail(ctx, str(e))
        return

    result = engine.validate_schema(content)
    _print_validation_result(schema_file, result)

    if not result.is_valid:
        sys.exit(1)

    graph = SchemaGraph.from_text(content)
    _print_validation_result("parse result", engine.validate_parsed(graph.parsed))


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output file (stdout if not specified)")
@click.option("--format", "-f", "output_format", type=click.Choice(["json", "yaml"]), default="json", help="Output format")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Project config YAML")
@click.option("--resolve-reverse-fields", is_flag=True, help="Look up back-reference fields on target models")
@click.option("--no-validate", is_flag=True, help="Skip structural validation")
@click.pass_context
def parse(
    ctx: click.Context,
    schema_file: str,
    output: str | None,
    output_format: str,
    config_path: str | None,
    resolve_reverse_fields: bool,
    no_validate: bool,
) -> None:
    """Parse a schema file into a diagram graph document.

    SCHEMA_FILE is the path to a .prisma or .txt file.
    """
    try:
        config = load_config(config_path)
        if resolve_reverse_fields:
            config.parser.resolve_reverse_fields = True

        content = load_schema_file(schema_file)

        if config.parser.validate_first and not no_validate:
            result = ValidationEngine().validate_schema(content)
            if not result.is_valid:
                for error in result.errors:
                    console.print(f"[red]{error}[/red]")
                sys.exit(1)

        graph = SchemaGraph.from_text(content, config)
        if not graph.models:
            console.print("[yellow]No models found in schema[/yellow]")

        rendered = _render_document(graph.to_document(), output_format)

        if output:
            _write_text(output, rendered, GraphDocumentError, "graph document")
            console.print(
                f"[green]Wrote {len(graph.models)} models, {len(graph.edges)} edges, "
                f"{len(graph.enums)} enums to {output}[/green]"
            )
        else:
            click.echo(rendered)

    except PrismaGraphError as e:
        _fail(ctx, str(e))


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Project config YAML")
@click.pass_context
def inspect(ctx: click.Context, schema_file: str, config_path: str | None) -> None:
    """Show the models, enums and relations of a schema file."""
    try:
        config = load_config(config_path)
        graph = SchemaGraph.from_text(load_schema_file(schema_file), config)
    except PrismaGraphError as e:
        _fail(ctx, str(e))
        return

    if not graph.models and not graph.enums:
        console.print("[yellow]No models found[/yellow]")
        return

    models_table = Table(title="Models")
    models_table.add_column("Name", style="cyan")
    models_table.add_column("Fields", justify="right")
    models_table.add_column("Relations")

    for model in graph.models:
        relations = [f"{f.name} -> {f.relation_to}" for f in model.get_relation_fields()]
        models_table.add_row(model.name, str(len(model.fields)), ", ".join(relations) or "-")

    console.print(models_table)

    if graph.enums:
        enums_table = Table(title="Enums")
        enums_table.add_column("Name", style="cyan")
        enums_table.add_column("Values")
        for enum in graph.enums:
            enums_table.add_row(enum.name, ", ".join(enum.values))
        console.print(enums_table)

    if graph.edges:
        edges_table = Table(title="Relations")
        edges_table.add_column("Source", style="cyan")
        edges_table.add_column("Target", style="cyan")
        edges_table.add_column("Type")
        edges_table.add_column("Fields")
        edges_table.add_column("References")
        for edge in graph.edges:
            edges_table.add_row(
                f"{edge.source}.{edge.source_field}",
                f"{edge.target}.{edge.target_field}" if edge.target_field else edge.target,
                edge.relation_type.value,
                ", ".join(edge.relation_details.fields) or "-",
                ", ".join(edge.relation_details.references) or "-",
            )
        console.print(edges_table)


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True))
@click.argument("query")
@click.pass_context
def search(ctx: click.Context, schema_file: str, query: str) -> None:
    """Find models whose name contains QUERY (case-insensitive)."""
    try:
        graph = SchemaGraph.from_text(load_schema_file(schema_file))
    except PrismaGraphError as e:
        _fail(ctx, str(e))
        return

    result = graph.search_models(query)
    if not result.matches:
        console.print(f"[yellow]No models match '{query}'[/yellow]")
        return

    for name in result.matches:
        console.print(f"  - [cyan]{name}[/cyan]")


@cli.command()
@click.argument("graph_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output schema file (stdout if not specified)")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Project config YAML")
@click.pass_context
def export(ctx: click.Context, graph_file: str, output: str | None, config_path: str | None) -> None:
    """Export a JSON/YAML graph document as Prisma schema text.

    GRAPH_FILE is a document produced by `prisma-graph parse`.
    """
    try:
        config = load_config(config_path)
        graph = SchemaGraph.from_file(graph_file, config.layout)
        text = graph.to_schema_text(config.emitter)
        _write_schema(text, output, f"Schema exported with {len(graph.models)} models and {len(graph.enums)} enums")
    except PrismaGraphError as e:
        _fail(ctx, str(e))


@cli.command(name="format")
@click.argument("schema_file", type=click.Path(exists=True))
@click.option("--output", "-o", type=click.Path(), help="Output schema file (stdout if not specified)")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Project config YAML")
@click.pass_context
def format_schema(ctx: click.Context, schema_file: str, output: str | None, config_path: str | None) -> None:
    """Re-emit a schema file in canonical form."""
    try:
        config = load_config(config_path)
        graph = SchemaGraph.from_text(load_schema_file(schema_file), config)
        _write_schema(graph.to_schema_text(config.emitter), output, f"Formatted {schema_file}")
    except PrismaGraphError as e:
        _fail(ctx, str(e))


@cli.command()
@click.option("--output", "-o", type=click.Path(), default=DEFAULT_CONFIG_FILENAME, help="Output file path")
@click.option("--name", "-n", default="prisma-graph", help="Project name")
@click.pass_context
def init_config(ctx: click.Context, output: str, name: str) -> None:
    """Initialize a new config file with default settings."""
    ConfigLoader().save_file(ProjectConfig(name=name), output)
    console.print(f"[green]Created config: {output}[/green]")


def _render_document(document: dict[str, Any], output_format: str) -> str:
    if output_format == "yaml":
        return yaml.dump(document, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return json.dumps(document, indent=2)


def _write_text(output: str, text: str, error: type[PrismaGraphError], what: str) -> None:
    try:
        Path(output).write_text(text, encoding="utf-8")
    except OSError as e:
        raise error(f"Failed to write {what} {output}: {e}") from e


def _write_schema(text: str, output: str | None, message: str) -> None:
    if output:
        _write_text(output, text, SchemaFileError, "schema file")
        console.print(Panel.fit(f"[green]{message}[/green]\n[cyan]Output:[/cyan] {output}", title="Done"))
    else:
        click.echo(text)


def _print_validation_result(name: str, result: ValidationResult) -> None:
    """Print validation results."""
    status = "[green]VALID[/green]" if result.is_valid else "[red]INVALID[/red]"
    console.print(f"\n{name}: {status}")

    for issue in result.issues:
        color = {
            "error": "red",
            "warning": "yellow",
            "info": "blue",
        }.get(issue.severity.value, "white")

        console.print(f"  [{color}]{issue.severity.value.upper()}[/{color}]: {escape(issue.message)}")
        if issue.path:
            console.print(f"    Path: {issue.path}")


if __name__ == "__main__":
    cli()
