"""Generators that turn the datamodel IR into graphql-core types."""

from .base import (
    FieldConfigUtils,
    Generator,
    ModelEnumTypeGeneratorBase,
    ModelInputObjectTypeGeneratorBase,
    ModelObjectTypeGeneratorBase,
)
from .mutation import (
    ModelCreateInputGenerator,
    ModelCreateManyInputGenerator,
    ModelCreateOneInputGenerator,
    ModelUpdateInputGenerator,
    ModelUpdateManyInputGenerator,
    ModelUpdateManyMutationInputGenerator,
    ModelUpdateOneInputGenerator,
    ModelUpdateWithWhereUniqueNestedInputGenerator,
    ModelUpsertNestedInputGenerator,
)
from .output import (
    AggregateModelGenerator,
    BatchPayloadGenerator,
    ModelConnectionGenerator,
    ModelEdgeGenerator,
    ModelObjectTypeGenerator,
    NodeInterfaceGenerator,
    PageInfoGenerator,
)
from .query import (
    ModelOrderByInputGenerator,
    ModelWhereInputGenerator,
    ModelWhereUniqueInputGenerator,
)
from .registry import Generators
from .root import MutationTypeGenerator, QueryTypeGenerator
from .scalar import ModelEnumTypeGenerator, ScalarTypeGenerator
from .schema import SchemaGenerator

__all__ = [
    # Framework
    "FieldConfigUtils",
    "Generator",
    "Generators",
    "ModelEnumTypeGeneratorBase",
    "ModelInputObjectTypeGeneratorBase",
    "ModelObjectTypeGeneratorBase",
    # Scalars and enums
    "ModelEnumTypeGenerator",
    "ScalarTypeGenerator",
    # Output types
    "AggregateModelGenerator",
    "BatchPayloadGenerator",
    "ModelConnectionGenerator",
    "ModelEdgeGenerator",
    "ModelObjectTypeGenerator",
    "NodeInterfaceGenerator",
    "PageInfoGenerator",
    # Query arguments
    "ModelOrderByInputGenerator",
    "ModelWhereInputGenerator",
    "ModelWhereUniqueInputGenerator",
    # Mutation inputs
    "ModelCreateInputGenerator",
    "ModelCreateManyInputGenerator",
    "ModelCreateOneInputGenerator",
    "ModelUpdateInputGenerator",
    "ModelUpdateManyInputGenerator",
    "ModelUpdateManyMutationInputGenerator",
    "ModelUpdateOneInputGenerator",
    "ModelUpdateWithWhereUniqueNestedInputGenerator",
    "ModelUpsertNestedInputGenerator",
    # Root types
    "MutationTypeGenerator",
    "QueryTypeGenerator",
    # Assembler
    "SchemaGenerator",
]
