"""Mutation input generators.

Top-level inputs (``<Model>CreateInput``, ``<Model>UpdateInput``,
``<Model>UpdateManyMutationInput``) carry the writable fields of a model.
Relation fields point at nested inputs that let a mutation create, connect,
update or remove related nodes in the same request. Embedded types have no
identity of their own, so their nested inputs never offer ``connect`` or
``disconnect``.
"""

from graphql import GraphQLBoolean, GraphQLInputField, GraphQLNonNull

from ..ir import IRField, IRType
from .base import ModelInputObjectTypeGeneratorBase


class WritableFieldsMixin:
    """Field selection shared by the create and update inputs."""

    def writable_fields(self, model: IRType) -> list[IRField]:
        return [f for f in model.fields if not f.is_read_only]

    def writable_scalar_fields(self, model: IRType) -> list[IRField]:
        return [
            f
            for f in self.writable_fields(model)
            if self.generators.scalar_type.is_scalar_field(f)
        ]


# -- create ----------------------------------------------------------------


class ModelCreateInputGenerator(WritableFieldsMixin, ModelInputObjectTypeGeneratorBase):
    """``<Model>CreateInput``. Required fields without default stay required."""

    kind = "create"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}CreateInput"

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return not self.writable_fields(model)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        scalar_type_generator = self.generators.scalar_type
        fields = {}
        for field in self.writable_fields(model):
            if scalar_type_generator.is_scalar_field(field):
                fields[field.name] = GraphQLInputField(
                    scalar_type_generator.map_to_scalar_field_type_for_input(field)
                )
                continue

            related = self.generators.types[field.type_name]
            if field.is_list:
                type_ = self.generators.model_create_many_input.generate(related)
                required = False
            else:
                type_ = self.generators.model_create_one_input.generate(related)
                required = field.is_required
            if type_ is not None:
                fields[field.name] = GraphQLInputField(
                    scalar_type_generator.required_if(required, type_)
                )
        return fields


class ModelCreateOneInputGenerator(ModelInputObjectTypeGeneratorBase):
    """``<Model>CreateOneInput``: create a node or connect an existing one."""

    kind = "create_one"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}CreateOneInput"

    def _parts(self, model: IRType):
        create = self.generators.model_create_input.generate(model)
        connect = None
        if not model.is_embedded:
            connect = self.generators.model_where_unique_input.generate(model)
        return create, connect

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        create, connect = self._parts(model)
        return create is None and connect is None

    def generate_fields(self, model: IRType, args: dict) -> dict:
        create, connect = self._parts(model)
        fields = {}
        if create is not None:
            fields["create"] = GraphQLInputField(create)
        if connect is not None:
            fields["connect"] = GraphQLInputField(connect)
        return fields


class ModelCreateManyInputGenerator(ModelCreateOneInputGenerator):
    """``<Model>CreateManyInput``: lists of nodes to create or connect."""

    kind = "create_many"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}CreateManyInput"

    def generate_fields(self, model: IRType, args: dict) -> dict:
        wrap_list = self.generators.scalar_type.wrap_list
        return {
            name: GraphQLInputField(wrap_list(field.type))
            for name, field in super().generate_fields(model, args).items()
        }


# -- update ----------------------------------------------------------------


class ModelUpdateInputGenerator(WritableFieldsMixin, ModelInputObjectTypeGeneratorBase):
    """``<Model>UpdateInput``, or ``<Model>UpdateDataInput`` when nested.

    Every field is optional; only the given fields are changed.
    """

    kind = "update"

    def get_type_name(self, model: IRType, args: dict) -> str:
        if args.get("nested"):
            return f"{model.name}UpdateDataInput"
        return f"{model.name}UpdateInput"

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return not self.writable_fields(model)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        scalar_type_generator = self.generators.scalar_type
        fields = {}
        for field in self.writable_fields(model):
            if scalar_type_generator.is_scalar_field(field):
                fields[field.name] = GraphQLInputField(
                    scalar_type_generator.map_to_scalar_field_type_force_optional(field)
                )
                continue

            related = self.generators.types[field.type_name]
            if field.is_list:
                type_ = self.generators.model_update_many_input.generate(related)
            else:
                type_ = self.generators.model_update_one_input.generate(
                    related, {"required": field.is_required}
                )
            if type_ is not None:
                fields[field.name] = GraphQLInputField(type_)
        return fields


class ModelUpdateManyMutationInputGenerator(WritableFieldsMixin, ModelInputObjectTypeGeneratorBase):
    """``<Model>UpdateManyMutationInput``: scalar fields set on many nodes."""

    kind = "update_many_mutation"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}UpdateManyMutationInput"

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return not self.writable_scalar_fields(model)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        scalar_type_generator = self.generators.scalar_type
        return {
            f.name: GraphQLInputField(scalar_type_generator.map_to_scalar_field_type_force_optional(f))
            for f in self.writable_scalar_fields(model)
        }


class ModelUpdateOneInputGenerator(ModelInputObjectTypeGeneratorBase):
    """``<Model>UpdateOneInput`` / ``<Model>UpdateOneRequiredInput``.

    A required relation cannot be deleted or disconnected, so the required
    variant omits those two operations.
    """

    kind = "update_one"

    def get_type_name(self, model: IRType, args: dict) -> str:
        if args.get("required"):
            return f"{model.name}UpdateOneRequiredInput"
        return f"{model.name}UpdateOneInput"

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return not self._operations(model, args)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        return {
            name: GraphQLInputField(type_)
            for name, type_ in self._operations(model, args).items()
        }

    def _operations(self, model: IRType, args: dict) -> dict:
        generators = self.generators
        required = args.get("required", False)
        candidates = {
            "create": generators.model_create_input.generate(model),
            "update": generators.model_update_input.generate(model, {"nested": True}),
            "upsert": generators.model_upsert_nested_input.generate(model),
        }
        if not required:
            candidates["delete"] = GraphQLBoolean
            if not model.is_embedded:
                candidates["disconnect"] = GraphQLBoolean
        if not model.is_embedded:
            candidates["connect"] = generators.model_where_unique_input.generate(model)
        return {name: type_ for name, type_ in candidates.items() if type_ is not None}


class ModelUpdateManyInputGenerator(ModelInputObjectTypeGeneratorBase):
    """``<Model>UpdateManyInput``: nested changes to a list relation."""

    kind = "update_many"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}UpdateManyInput"

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return not self._operations(model)

    def generate_fields(self, model: IRType, args: dict) -> dict:
        wrap_list = self.generators.scalar_type.wrap_list
        return {
            name: GraphQLInputField(wrap_list(type_))
            for name, type_ in self._operations(model).items()
        }

    def _operations(self, model: IRType) -> dict:
        generators = self.generators
        where_unique = generators.model_where_unique_input.generate(model)
        candidates = {
            "create": generators.model_create_input.generate(model),
            "update": generators.model_update_with_where_unique_nested_input.generate(model),
            "delete": where_unique,
        }
        if not model.is_embedded:
            candidates["connect"] = where_unique
            candidates["disconnect"] = where_unique
        return {name: type_ for name, type_ in candidates.items() if type_ is not None}


class ModelUpdateWithWhereUniqueNestedInputGenerator(ModelInputObjectTypeGeneratorBase):
    """``<Model>UpdateWithWhereUniqueNestedInput``: select a node, then update it."""

    kind = "update_with_where_unique_nested"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}UpdateWithWhereUniqueNestedInput"

    def _parts(self, model: IRType):
        return (
            self.generators.model_where_unique_input.generate(model),
            self.generators.model_update_input.generate(model, {"nested": True}),
        )

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return any(part is None for part in self._parts(model))

    def generate_fields(self, model: IRType, args: dict) -> dict:
        where, data = self._parts(model)
        return {
            "where": GraphQLInputField(GraphQLNonNull(where)),
            "data": GraphQLInputField(GraphQLNonNull(data)),
        }


class ModelUpsertNestedInputGenerator(ModelInputObjectTypeGeneratorBase):
    """``<Model>UpsertNestedInput``: update the related node or create it."""

    kind = "upsert_nested"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}UpsertNestedInput"

    def _parts(self, model: IRType):
        return (
            self.generators.model_update_input.generate(model, {"nested": True}),
            self.generators.model_create_input.generate(model),
        )

    def would_be_empty(self, model: IRType, args: dict) -> bool:
        return any(part is None for part in self._parts(model))

    def generate_fields(self, model: IRType, args: dict) -> dict:
        update, create = self._parts(model)
        return {
            "update": GraphQLInputField(GraphQLNonNull(update)),
            "create": GraphQLInputField(GraphQLNonNull(create)),
        }
