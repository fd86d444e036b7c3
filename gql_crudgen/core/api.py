"""Entry points for turning a datamodel into a schema or client bindings."""

from graphql import GraphQLSchema, print_schema

from .client_generator import FlowGenerator, RenderOptions, TypescriptGenerator
from .generators import SchemaGenerator
from .ir import DatabaseType, IRType
from .parser import DatamodelParser


def parse_internal_types(model: str, database_type: DatabaseType) -> list[IRType]:
    """Compute the internal type representation for a datamodel.

    Args:
        model: The datamodel in SDL.
        database_type: The database the datamodel targets.

    Returns:
        All types of the datamodel, in declaration order.
    """
    return DatamodelParser.create(database_type).parse(model)


def generate_crud_schema(model: str, database_type: DatabaseType) -> GraphQLSchema:
    """Compute the OpenCRUD schema for a datamodel as a graphql-core schema."""
    types = parse_internal_types(model, database_type)
    return SchemaGenerator().generate(types)


def generate_crud_schema_string(
    model: str, database_type: DatabaseType = DatabaseType.relational
) -> str:
    """Compute the OpenCRUD schema for a datamodel as printed SDL."""
    return print_schema(generate_crud_schema(model, database_type))


CLIENT_GENERATORS = {
    "typescript": TypescriptGenerator,
    "flow": FlowGenerator,
}


def generate_client(
    model: str,
    database_type: DatabaseType = DatabaseType.relational,
    language: str = "typescript",
    options: RenderOptions | None = None,
) -> str:
    """Generate client binding source for a datamodel.

    Args:
        model: The datamodel in SDL.
        database_type: The database the datamodel targets.
        language: "typescript" or "flow".
        options: Endpoint and secret expressions for the binding constructor.
    """
    try:
        generator_class = CLIENT_GENERATORS[language]
    except KeyError:
        raise ValueError(f"Unknown client language: {language!r}") from None

    types = parse_internal_types(model, database_type)
    schema = SchemaGenerator().generate(types)
    return generator_class(schema, internal_types=types).render(options)
