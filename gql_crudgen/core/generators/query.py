"""Query argument generators: filters, unique selectors and ordering."""

from graphql import GraphQLInputField

from ..errors import gql_assert
from ..ir import IRField, IRType
from ..scalars import TypeIdentifiers
from .base import (
    FieldConfigUtils,
    ModelEnumTypeGeneratorBase,
    ModelInputObjectTypeGeneratorBase,
)

BASE_SUFFIXES = ("", "_not")
INCLUSION_SUFFIXES = ("_in", "_not_in")
ALPHANUMERIC_SUFFIXES = ("_lt", "_lte", "_gt", "_gte")
STRING_SUFFIXES = (
    "_contains",
    "_not_contains",
    "_starts_with",
    "_not_starts_with",
    "_ends_with",
    "_not_ends_with",
)
MANY_RELATION_SUFFIXES = ("_every", "_some", "_none")
LOGICAL_OPERATORS = ("AND", "OR", "NOT")


class ModelWhereInputGenerator(ModelInputObjectTypeGeneratorBase):
    """Generates ``<Model>WhereInput``.

    Scalar fields get a set of filters depending on their type, relation
    fields filter by the related type's where input, and every where input
    gets ``AND``/``OR``/``NOT`` lists of itself for boolean composition.
    """

    kind = "where"

    @staticmethod
    def generate_filters_for_suffix(suffixes, field: IRField | None, type_) -> dict:
        prefix = field.name if field is not None else ""
        return {f"{prefix}{suffix}": GraphQLInputField(type_) for suffix in suffixes}

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}WhereInput"

    # -- scalar filters -------------------------------------------------------

    def generate_scalar_filter_fields(self, field: IRField) -> dict | None:
        gql_assert.is_scalar(field, self.generators.scalar_type)

        if field.is_list:
            return None

        related = self.generators.types.get(field.type_name)
        if related is not None:
            # is_scalar held, so this is an enum
            return FieldConfigUtils.merge(
                self.generate_base_filters(field),
                self.generate_inclusion_filters(field),
            )

        if field.type_name in (TypeIdentifiers.string, TypeIdentifiers.id, TypeIdentifiers.uuid):
            return FieldConfigUtils.merge(
                self.generate_base_filters(field),
                self.generate_inclusion_filters(field),
                self.generate_alphanumeric_filters(field),
                self.generate_string_filters(field),
            )
        if field.type_name in (
            TypeIdentifiers.integer,
            TypeIdentifiers.float,
            TypeIdentifiers.long,
            TypeIdentifiers.date_time,
        ):
            return FieldConfigUtils.merge(
                self.generate_base_filters(field),
                self.generate_inclusion_filters(field),
                self.generate_alphanumeric_filters(field),
            )
        if field.type_name == TypeIdentifiers.boolean:
            return self.generate_base_filters(field)
        if field.type_name == TypeIdentifiers.json:
            return FieldConfigUtils.merge()

        gql_assert.raise_(
            f"Type {field.type_name} is not implemented by "
            "ModelWhereInputGenerator.generate_scalar_filter_fields."
        )

    def generate_base_filters(self, field: IRField) -> dict:
        type_ = self.generators.scalar_type.generate(field.type_name)
        return self.generate_filters_for_suffix(BASE_SUFFIXES, field, type_)

    def generate_inclusion_filters(self, field: IRField) -> dict:
        scalar_type_generator = self.generators.scalar_type
        type_ = scalar_type_generator.wrap_list(scalar_type_generator.generate(field.type_name))
        return self.generate_filters_for_suffix(INCLUSION_SUFFIXES, field, type_)

    def generate_alphanumeric_filters(self, field: IRField) -> dict:
        type_ = self.generators.scalar_type.generate(field.type_name)
        return self.generate_filters_for_suffix(ALPHANUMERIC_SUFFIXES, field, type_)

    def generate_string_filters(self, field: IRField) -> dict:
        type_ = self.generators.scalar_type.generate(field.type_name)
        return self.generate_filters_for_suffix(STRING_SUFFIXES, field, type_)

    # -- relation filters -----------------------------------------------------

    def generate_relation_filter_fields(self, field: IRField) -> dict:
        gql_assert.is_relation(field, self.generators.scalar_type)
        if field.is_list:
            return self.generate_many_relation_filter_fields(field)
        return self.generate_one_relation_filter_fields(field)

    def generate_one_relation_filter_fields(self, field: IRField) -> dict:
        type_ = self.generate(self.generators.types[field.type_name])
        return self.generate_filters_for_suffix(("",), field, type_)

    def generate_many_relation_filter_fields(self, field: IRField) -> dict:
        type_ = self.generate(self.generators.types[field.type_name])
        return self.generate_filters_for_suffix(MANY_RELATION_SUFFIXES, field, type_)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        fields: dict = {}
        for field in model.fields:
            if self.generators.scalar_type.is_scalar_field(field):
                fields_to_add = self.generate_scalar_filter_fields(field)
            else:
                fields_to_add = self.generate_relation_filter_fields(field)
            fields = FieldConfigUtils.merge(fields, fields_to_add)

        recursive_filter = self.generate_filters_for_suffix(
            LOGICAL_OPERATORS,
            None,
            self.generators.scalar_type.wrap_list(self.generate(model)),
        )
        return FieldConfigUtils.merge(fields, recursive_filter)


class ModelWhereUniqueInputGenerator(ModelInputObjectTypeGeneratorBase):
    """Generates ``<Model>WhereUniqueInput`` from the unique scalar fields."""

    kind = "where_unique"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}WhereUniqueInput"

    def unique_fields(self, model: IRType) -> list[IRField]:
        return [
            f
            for f in model.fields
            if f.is_unique and self.generators.scalar_type.is_scalar_field(f)
        ]

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return not self.unique_fields(model)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        scalar_type_generator = self.generators.scalar_type
        return {
            f.name: GraphQLInputField(scalar_type_generator.map_to_scalar_field_type_force_optional(f))
            for f in self.unique_fields(model)
        }


class ModelOrderByInputGenerator(ModelEnumTypeGeneratorBase):
    """Generates the ``<Model>OrderByInput`` enum for non-list scalar fields."""

    kind = "order_by"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}OrderByInput"

    def generate_values(self, model: IRType, args: dict) -> list[str]:
        values = []
        for field in model.fields:
            if field.is_list or not self.generators.scalar_type.is_scalar_field(field):
                continue
            values.append(f"{field.name}_ASC")
            values.append(f"{field.name}_DESC")
        return values
