"""CLI entry point for swagger-tree."""

from pathlib import Path

import click

from swagger_tree.collector.base import BaseDocument
from swagger_tree.collector.resolve import resolve_surface
from swagger_tree.collector.routes import collect_operations, read_metadata
from swagger_tree.config import SwaggerConfig, load_config, merge_base_document
from swagger_tree.errors import SwaggerTreeError
from swagger_tree.generator.compiler import compile_tree, write_document
from swagger_tree.generator.writer import SwaggerTreeWriter
from swagger_tree.log import configure_logging

DEFAULT_OUTPUT = Path("doc/swagger")


def _base_document(surface, config_path: Path | None, overrides: SwaggerConfig) -> BaseDocument:
    """Merge surface metadata, the config file and CLI overrides."""
    layers = [read_metadata(surface)]
    if config_path is not None:
        layers.append(load_config(config_path))
    layers.append(overrides)
    return merge_base_document(*layers)


@click.group(context_settings={"auto_envvar_prefix": "SWAGGER_TREE"})
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
def main(verbose: bool):
    """swagger-tree — generate Swagger 2.0 YAML trees from FastAPI routes."""
    configure_logging(verbose)


@main.command()
@click.argument("surface")
@click.option("-o", "--output", default=DEFAULT_OUTPUT, show_default=True, type=click.Path(file_okay=False, path_type=Path), help="Output root directory.")
@click.option("--config", "config_path", default=None, type=click.Path(exists=True, dir_okay=False, path_type=Path), help="YAML file with base document metadata.")
@click.option("--factory", is_flag=True, help="Treat SURFACE as a factory returning the app.")
@click.option("--clean", is_flag=True, help="Remove the output root before writing.")
@click.option("--host", default=None, help="API host, e.g. api.example.com:443.")
@click.option("--base-path", default=None, help="Base path stripped from every route.")
@click.option("--scheme", "schemes", multiple=True, help="Transfer scheme (repeatable).")
@click.option("--consumes", multiple=True, help="Consumed MIME type (repeatable).")
@click.option("--produces", multiple=True, help="Produced MIME type (repeatable).")
def generate(surface: str, output: Path, config_path: Path | None, factory: bool, clean: bool,
             host: str | None, base_path: str | None, schemes: tuple, consumes: tuple, produces: tuple):
    """Generate base_doc.yaml and paths/**/<method>.yaml for SURFACE (module:attr)."""
    overrides = SwaggerConfig(
        host=host,
        base_path=base_path,
        schemes=list(schemes) or None,
        consumes=list(consumes) or None,
        produces=list(produces) or None,
    )
    try:
        click.echo(f"Resolving {surface}...")
        api = resolve_surface(surface, factory=factory)
        base = _base_document(api, config_path, overrides)
        operations = collect_operations(api, base_path=base.base_path)
        click.echo(f"Found {len(operations)} operations.")

        written = SwaggerTreeWriter(output, clean=clean).write(base, operations)
    except SwaggerTreeError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Wrote {len(written)} files to {output}")


@main.command()
@click.argument("surface")
@click.option("--factory", is_flag=True, help="Treat SURFACE as a factory returning the app.")
@click.option("--base-path", default=None, help="Base path stripped from every route.")
def routes(surface: str, factory: bool, base_path: str | None):
    """List the operations collected from SURFACE, hidden ones included."""
    try:
        api = resolve_surface(surface, factory=factory)
        if base_path is None:
            base_path = merge_base_document(read_metadata(api)).base_path
        operations = collect_operations(api, base_path=base_path, include_hidden=True)
    except SwaggerTreeError as e:
        raise click.ClickException(str(e)) from e

    for op in operations:
        marker = " (hidden)" if op.hidden else ""
        click.echo(f"{op.method:<7} {op.path}  {op.operation_id}{marker}")


@main.command(name="compile")
@click.argument("root", default=DEFAULT_OUTPUT, type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("-o", "--output", required=True, type=click.Path(dir_okay=False, path_type=Path), help="Output file (.json or .yaml).")
def compile_(root: Path, output: Path):
    """Compile a generated tree at ROOT into a single Swagger document."""
    try:
        doc = compile_tree(root)
        write_document(doc, output)
    except SwaggerTreeError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Compiled {len(doc['paths'])} paths into {output}")
