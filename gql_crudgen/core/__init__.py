"""Core modules for OpenCRUD schema generation."""

from .api import (
    CLIENT_GENERATORS,
    generate_client,
    generate_crud_schema,
    generate_crud_schema_string,
    parse_internal_types,
)
from .client_generator import (
    ClientGenerator,
    FlowGenerator,
    RenderOptions,
    TypeCategory,
    TypescriptGenerator,
)
from .errors import InvariantViolation, ParseError, gql_assert
from .generators import Generators, SchemaGenerator
from .ir import DatabaseType, IRField, IRType, TypeGraph
from .parser import DatamodelParser, DocumentParser, RelationalParser
from .scalars import DEFAULT_SCALARS, ScalarRegistry, TypeIdentifiers

__all__ = [
    # API
    "CLIENT_GENERATORS",
    "generate_client",
    "generate_crud_schema",
    "generate_crud_schema_string",
    "parse_internal_types",
    # Errors
    "InvariantViolation",
    "ParseError",
    "gql_assert",
    # IR types
    "DatabaseType",
    "IRField",
    "IRType",
    "TypeGraph",
    # Parser
    "DatamodelParser",
    "DocumentParser",
    "RelationalParser",
    # Scalars
    "DEFAULT_SCALARS",
    "ScalarRegistry",
    "TypeIdentifiers",
    # Generators
    "Generators",
    "SchemaGenerator",
    # Client Generator
    "ClientGenerator",
    "FlowGenerator",
    "RenderOptions",
    "TypeCategory",
    "TypescriptGenerator",
]
