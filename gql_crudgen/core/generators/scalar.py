"""Scalar and enum type generators."""

from graphql import GraphQLList, GraphQLNonNull

from ..errors import gql_assert
from ..ir import IRField, IRType
from .base import Generator, ModelEnumTypeGeneratorBase


class ScalarTypeGenerator(Generator):
    """Maps scalar identifiers and enum types to GraphQL types.

    Also owns the modifier rules used by every other generator. For a field
    with ``is_list`` the element is always non-null; the list itself is
    non-null only when the field is required.
    """

    kind = "scalar"

    def get_type_name(self, input: str | IRType, args: dict) -> str:
        if isinstance(input, IRType):
            return input.name
        return input

    def is_scalar_field(self, field: IRField) -> bool:
        related = self.generators.types.get(field.type_name)
        if related is not None:
            return related.is_enum
        if self.generators.scalars.is_scalar(field.type_name):
            return True
        gql_assert.raise_(f"{field.type_name} is not a scalar type.")

    def map_to_scalar_field_type(self, field: IRField):
        """Output type of a scalar field."""
        maybe_list_type = self.map_to_scalar_field_type_force_optional(field)
        return self.required_if(field.is_required, maybe_list_type)

    def map_to_scalar_field_type_for_input(self, field: IRField):
        """Input type of a scalar field. A default value makes it optional."""
        maybe_list_type = self.map_to_scalar_field_type_force_optional(field)
        return self.required_if(
            field.is_required and field.default_value is None, maybe_list_type
        )

    def map_to_scalar_field_type_force_required(self, field: IRField):
        return GraphQLNonNull(self.map_to_scalar_field_type_force_optional(field))

    def map_to_scalar_field_type_force_optional(self, field: IRField):
        type_ = self.generate(field.type_name)
        if field.is_list:
            return self.wrap_list(type_)
        return type_

    def wrap_with_modifiers(self, field: IRField, type_):
        """Apply list/required modifiers; lists are never wrapped in non-null."""
        if field.is_list:
            return self.wrap_list(type_)
        return self.required_if(field.is_required, type_)

    @staticmethod
    def wrap_list(type_):
        return GraphQLList(GraphQLNonNull(type_))

    @staticmethod
    def required_if(required: bool, type_):
        if required:
            return GraphQLNonNull(type_)
        return type_

    def generate_internal(self, input: str | IRType, args: dict):
        if isinstance(input, str):
            enum_type = self.generators.types.get(input)
            if enum_type is None:
                return self.generators.scalars.to_output_scalar(input)
            input = enum_type

        if not input.is_enum:
            gql_assert.raise_(f"Not an enum: {input.name}")
        return self.generators.model_enum_type.generate(input)


class ModelEnumTypeGenerator(ModelEnumTypeGeneratorBase):
    """Generates the GraphQL enum for an enum declared in the datamodel."""

    kind = "enum"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return model.name

    def generate_values(self, model: IRType, args: dict) -> list[str]:
        return list(model.values)
