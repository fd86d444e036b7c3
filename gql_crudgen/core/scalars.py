"""Scalar identifiers and their GraphQL output types.

The set of scalar identifiers a datamodel may use is closed. Each identifier
maps to one ``GraphQLScalarType`` instance; the custom ones (ID aside, every
scalar that is not built into GraphQL) are created once so that every
schema built from the same registry shares them.

Example usage:
    from gql_crudgen.core.scalars import DEFAULT_SCALARS, TypeIdentifiers

    DEFAULT_SCALARS.is_scalar("DateTime")           # True
    DEFAULT_SCALARS.to_output_scalar("DateTime")    # GraphQLScalarType('DateTime')
    DEFAULT_SCALARS.to_output_scalar("Decimal")     # raises InvariantViolation
"""

from types import MappingProxyType
from typing import Mapping

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLScalarType,
    GraphQLString,
)

from .errors import InvariantViolation


class TypeIdentifiers:
    """Names of the scalar identifiers a datamodel can use."""

    string = "String"
    integer = "Int"
    float = "Float"
    boolean = "Boolean"
    long = "Long"
    date_time = "DateTime"
    id = "ID"
    uuid = "UUID"
    json = "Json"


# Identifiers that are not native GraphQL scalars and get a custom type
CUSTOM_SCALARS = (
    TypeIdentifiers.long,
    TypeIdentifiers.date_time,
    TypeIdentifiers.uuid,
    TypeIdentifiers.json,
)


def create_scalar_type(name: str) -> GraphQLScalarType:
    """Create a custom scalar that passes values through untouched."""
    return GraphQLScalarType(name=name, serialize=lambda value: value)


class ScalarRegistry:
    """Immutable mapping from scalar identifiers to GraphQL scalar types.

    Build one per process (``DEFAULT_SCALARS``) and hand it to the parser and
    the generators. Two registries produce distinct custom scalar instances,
    so types from different registries must not be mixed in one schema.
    """

    def __init__(self):
        table = {
            TypeIdentifiers.string: GraphQLString,
            TypeIdentifiers.integer: GraphQLInt,
            TypeIdentifiers.float: GraphQLFloat,
            TypeIdentifiers.boolean: GraphQLBoolean,
            TypeIdentifiers.id: GraphQLID,
        }
        for name in CUSTOM_SCALARS:
            table[name] = create_scalar_type(name)
        self._table: Mapping[str, GraphQLScalarType] = MappingProxyType(table)

    @property
    def identifiers(self) -> tuple[str, ...]:
        return tuple(self._table)

    def is_scalar(self, identifier: str) -> bool:
        """Check if an identifier belongs to the closed scalar set."""
        return identifier in self._table

    def to_output_scalar(self, identifier: str) -> GraphQLScalarType:
        """Return the output scalar type for an identifier."""
        try:
            return self._table[identifier]
        except KeyError:
            raise InvariantViolation(
                f"Invalid scalar type given: {identifier}"
            ) from None


DEFAULT_SCALARS = ScalarRegistry()
