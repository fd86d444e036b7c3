"""OpenCRUD schema and client binding generator for GraphQL datamodels."""

from .core import (
    DatabaseType,
    RenderOptions,
    generate_client,
    generate_crud_schema,
    generate_crud_schema_string,
    parse_internal_types,
)

__all__ = [
    "DatabaseType",
    "RenderOptions",
    "generate_client",
    "generate_crud_schema",
    "generate_crud_schema_string",
    "parse_internal_types",
]
