"""Root type generators: the ``Query`` and ``Mutation`` types.

Both take the whole ``TypeGraph`` as input and add one block of root fields
per model, in datamodel order. A root field is left out when one of the
inputs it needs would be empty (e.g. no ``updateUser`` for a model without
unique fields).
"""

from graphql import GraphQLArgument, GraphQLField, GraphQLID, GraphQLList, GraphQLNonNull

from ..ir import IRType, TypeGraph
from ..naming import lower_first, plural_name, upper_first
from .base import ModelObjectTypeGeneratorBase
from .output import ModelObjectTypeGenerator, generate_many_query_args


class QueryTypeGenerator(ModelObjectTypeGeneratorBase):
    kind = "query"

    def get_type_name(self, types: TypeGraph, args: dict) -> str:
        return "Query"

    def generate_fields(self, types: TypeGraph, args: dict) -> dict:
        fields = {}
        for model in types.models:
            fields.update(self.generate_model_fields(model))

        if any(ModelObjectTypeGenerator.implements_node(m) for m in types.models):
            fields["node"] = GraphQLField(
                self.generators.node_interface.generate(None),
                args={"id": GraphQLArgument(GraphQLNonNull(GraphQLID), description="The ID of an object")},
                description="Fetches an object given its ID",
            )
        return fields

    def generate_model_fields(self, model: IRType) -> dict:
        generators = self.generators
        object_type = generators.model_object_type.generate(model)
        single_name = lower_first(model.name)
        many_name = lower_first(plural_name(model.name))

        fields = {
            many_name: GraphQLField(
                GraphQLNonNull(GraphQLList(object_type)),
                args=generate_many_query_args(generators, model),
            )
        }
        where_unique = generators.model_where_unique_input.generate(model)
        if where_unique is not None:
            fields[single_name] = GraphQLField(
                object_type,
                args={"where": GraphQLArgument(GraphQLNonNull(where_unique))},
            )
        fields[f"{many_name}Connection"] = GraphQLField(
            GraphQLNonNull(generators.model_connection.generate(model)),
            args=generate_many_query_args(generators, model),
        )
        return fields


class MutationTypeGenerator(ModelObjectTypeGeneratorBase):
    kind = "mutation"

    def get_type_name(self, types: TypeGraph, args: dict) -> str:
        return "Mutation"

    def generate_fields(self, types: TypeGraph, args: dict) -> dict:
        fields = {}
        for model in types.models:
            fields.update(self.generate_model_fields(model))
        return fields

    def generate_model_fields(self, model: IRType) -> dict:
        generators = self.generators
        object_type = generators.model_object_type.generate(model)
        batch_payload = GraphQLNonNull(generators.batch_payload.generate(None))
        name = model.name
        many_name = upper_first(plural_name(name))

        where = generators.model_where_input.generate(model)
        where_unique = generators.model_where_unique_input.generate(model)
        create_input = generators.model_create_input.generate(model)
        update_input = generators.model_update_input.generate(model)
        update_many_input = generators.model_update_many_mutation_input.generate(model)

        fields = {}
        create_args = {}
        if create_input is not None:
            create_args["data"] = GraphQLArgument(GraphQLNonNull(create_input))
        fields[f"create{name}"] = GraphQLField(GraphQLNonNull(object_type), args=create_args)

        if update_input is not None and where_unique is not None:
            fields[f"update{name}"] = GraphQLField(
                object_type,
                args={
                    "data": GraphQLArgument(GraphQLNonNull(update_input)),
                    "where": GraphQLArgument(GraphQLNonNull(where_unique)),
                },
            )

        if update_many_input is not None:
            fields[f"updateMany{many_name}"] = GraphQLField(
                batch_payload,
                args={
                    "data": GraphQLArgument(GraphQLNonNull(update_many_input)),
                    "where": GraphQLArgument(where),
                },
            )

        if where_unique is not None and create_input is not None and update_input is not None:
            fields[f"upsert{name}"] = GraphQLField(
                GraphQLNonNull(object_type),
                args={
                    "where": GraphQLArgument(GraphQLNonNull(where_unique)),
                    "create": GraphQLArgument(GraphQLNonNull(create_input)),
                    "update": GraphQLArgument(GraphQLNonNull(update_input)),
                },
            )

        if where_unique is not None:
            fields[f"delete{name}"] = GraphQLField(
                object_type,
                args={"where": GraphQLArgument(GraphQLNonNull(where_unique))},
            )

        fields[f"deleteMany{many_name}"] = GraphQLField(
            batch_payload,
            args={"where": GraphQLArgument(where)},
        )
        return fields
