"""Command-line interface for gql-crudgen."""

import logging
from pathlib import Path

import click
from graphql import print_schema

from .core.api import CLIENT_GENERATORS, generate_client, parse_internal_types
from .core.client_generator import RenderOptions
from .core.errors import ParseError
from .core.generators import SchemaGenerator
from .core.ir import DatabaseType


def read_datamodel(datamodel: str, verbose: bool) -> str:
    datamodel_path = Path(datamodel).resolve()
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        click.echo(f"Datamodel: {datamodel_path}", err=True)
    return datamodel_path.read_text()


def write_output(code: str, output: str | None) -> None:
    """Write generated code to a file, or to stdout without --output."""
    if output is None:
        click.echo(code, nl=False)
        return
    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(code)
    click.echo(f"Done! Wrote {len(code.splitlines())} lines to {output_path}", err=True)


datamodel_option = click.option(
    "--datamodel",
    "-d",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the datamodel SDL file.",
)
database_option = click.option(
    "--database",
    type=click.Choice([t.value for t in DatabaseType]),
    default=DatabaseType.relational.value,
    show_default=True,
    help="Database kind the datamodel targets.",
)
output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file (default: stdout).",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)


@click.group()
@click.version_option(package_name="gql-crudgen")
def main():
    """OpenCRUD schema generator for GraphQL datamodels.

    Generate a CRUD schema or typed client bindings from a datamodel.
    """
    pass


@main.command()
@datamodel_option
@database_option
@output_option
@verbose_option
def schema(datamodel: str, database: str, output: str | None, verbose: bool):
    """Generate the OpenCRUD schema SDL for a datamodel.

    Examples:

        gql-crudgen schema -d ./datamodel.graphql

        gql-crudgen schema -d ./datamodel.graphql --database document -o schema.graphql
    """
    model = read_datamodel(datamodel, verbose)

    try:
        types = parse_internal_types(model, DatabaseType(database))
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Types: {len(types)}", err=True)
        click.echo(f"  Enums: {len([t for t in types if t.is_enum])}", err=True)

    sdl = print_schema(SchemaGenerator().generate(types))
    write_output(sdl + "\n", output)


@main.command()
@datamodel_option
@database_option
@click.option(
    "--lang",
    "-l",
    type=click.Choice(sorted(CLIENT_GENERATORS)),
    default="typescript",
    show_default=True,
    help="Language of the generated bindings.",
)
@click.option(
    "--endpoint",
    help="Endpoint expression passed to the binding constructor.",
)
@click.option(
    "--secret",
    help="Secret expression passed to the binding constructor.",
)
@output_option
@verbose_option
def client(
    datamodel: str,
    database: str,
    lang: str,
    endpoint: str | None,
    secret: str | None,
    output: str | None,
    verbose: bool,
):
    """Generate typed client bindings for a datamodel.

    Examples:

        gql-crudgen client -d ./datamodel.graphql -o ./prisma.ts

        gql-crudgen client -d ./datamodel.graphql --lang flow --endpoint "'http://localhost:4466'"
    """
    model = read_datamodel(datamodel, verbose)
    options = RenderOptions(endpoint=endpoint, secret=secret)

    try:
        code = generate_client(model, DatabaseType(database), lang, options)
    except ParseError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Language: {lang}", err=True)
        click.echo(f"  Lines: {len(code.splitlines())}", err=True)

    write_output(code, output)


if __name__ == "__main__":
    main()
