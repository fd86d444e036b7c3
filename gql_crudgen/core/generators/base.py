"""Memoizing generator framework.

Every concrete generator turns one input (an ``IRType``, a scalar identifier,
or nothing for the shared types) plus an ``args`` dict into a graphql-core
type. ``Generator.generate`` caches the result under

    (generator kind, output type name, serialized args)

in the cache of the ``Generators`` run that owns the generator. Named types
are created with field thunks, so a type is stored in the cache before any
of its fields, and therefore any related type, is generated. A cyclic
datamodel resolves to references to the cached instance instead of
recursing forever.
"""

import json
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLInputObjectType,
    GraphQLObjectType,
)

from ..ir import IRType

if TYPE_CHECKING:
    from .registry import Generators


class FieldConfigUtils:
    """Helpers for field config maps."""

    @staticmethod
    def merge(*maps: dict | None) -> dict:
        """Merge field maps left to right, skipping None."""
        result: dict = {}
        for field_map in maps:
            if field_map:
                result.update(field_map)
        return result


class Generator(ABC):
    """Base class for all generators."""

    kind: str = ""

    def __init__(self, generators: "Generators"):
        self.generators = generators

    @abstractmethod
    def get_type_name(self, input: Any, args: dict) -> str:
        """Name of the type generated for this input."""

    @abstractmethod
    def generate_internal(self, input: Any, args: dict) -> Any:
        """Build the type. Only called on a cache miss."""

    def cache_key(self, input: Any, args: dict) -> tuple[str, str, str]:
        return (
            self.kind,
            self.get_type_name(input, args),
            json.dumps(args, sort_keys=True, default=str),
        )

    def generate(self, input: Any, args: dict | None = None) -> Any:
        """Return the type for ``input``, building it at most once per run."""
        args = args or {}
        key = self.cache_key(input, args)
        cache = self.generators.cache
        if key in cache:
            return cache[key]
        result = self.generate_internal(input, args)
        cache[key] = result
        return result


class ModelObjectTypeGeneratorBase(Generator):
    """Generates a ``GraphQLObjectType`` for a model."""

    @abstractmethod
    def generate_fields(self, model: IRType, args: dict) -> dict:
        ...

    def generate_interfaces(self, model: IRType, args: dict) -> list:
        return []

    def generate_internal(self, model: IRType, args: dict) -> GraphQLObjectType:
        return GraphQLObjectType(
            name=self.get_type_name(model, args),
            fields=lambda: self.generate_fields(model, args),
            interfaces=lambda: self.generate_interfaces(model, args),
            description=self.get_description(model, args),
        )

    def get_description(self, model: IRType, args: dict) -> str | None:
        return None


class ModelInputObjectTypeGeneratorBase(Generator):
    """Generates a ``GraphQLInputObjectType`` for a model.

    Returns None instead of an input type that would have no fields.
    """

    @abstractmethod
    def generate_fields(self, model: IRType, args: dict) -> dict:
        ...

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return False

    def generate_internal(self, model: IRType, args: dict) -> GraphQLInputObjectType | None:
        if self.would_be_empty(model, args):
            return None
        return GraphQLInputObjectType(
            name=self.get_type_name(model, args),
            fields=lambda: self.generate_fields(model, args),
        )


class ModelEnumTypeGeneratorBase(Generator):
    """Generates a ``GraphQLEnumType`` from a list of value names."""

    @abstractmethod
    def generate_values(self, model: IRType, args: dict) -> list[str]:
        ...

    def generate_internal(self, model: IRType, args: dict) -> GraphQLEnumType | None:
        values = self.generate_values(model, args)
        if not values:
            return None
        return GraphQLEnumType(
            name=self.get_type_name(model, args),
            values={value: GraphQLEnumValue(value) for value in values},
        )


class StaticTypeGeneratorBase(Generator):
    """Generates a type that does not depend on any model (PageInfo, Node)."""

    type_name: str = ""

    def get_type_name(self, input: Any, args: dict) -> str:
        return self.type_name
