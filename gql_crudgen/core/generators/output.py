"""Output type generators: model object types and pagination types."""

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLField,
    GraphQLID,
    GraphQLInt,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLString,
)

from ..ir import IRType
from ..scalars import TypeIdentifiers
from .base import ModelObjectTypeGeneratorBase, StaticTypeGeneratorBase


def generate_many_query_args(generators, model: IRType) -> dict[str, GraphQLArgument]:
    """Arguments of a list field over ``model``: filter, order and pagination."""
    args = {}
    where_input = generators.model_where_input.generate(model)
    if where_input is not None:
        args["where"] = GraphQLArgument(where_input)
    order_by_input = generators.model_order_by_input.generate(model)
    if order_by_input is not None:
        args["orderBy"] = GraphQLArgument(order_by_input)
    args["skip"] = GraphQLArgument(GraphQLInt)
    args["after"] = GraphQLArgument(GraphQLString)
    args["before"] = GraphQLArgument(GraphQLString)
    args["first"] = GraphQLArgument(GraphQLInt)
    args["last"] = GraphQLArgument(GraphQLInt)
    return args


class ModelObjectTypeGenerator(ModelObjectTypeGeneratorBase):
    """Generates the output object type of a model or embedded type."""

    kind = "object"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return model.name

    def get_description(self, model: IRType, args: dict) -> str | None:
        return model.description

    @staticmethod
    def implements_node(model: IRType) -> bool:
        id_field = model.id_field
        return (
            not model.is_embedded
            and id_field is not None
            and id_field.name == "id"
            and id_field.type_name == TypeIdentifiers.id
            and id_field.is_required
            and not id_field.is_list
        )

    def generate_interfaces(self, model: IRType, args: dict) -> list:
        if self.implements_node(model):
            return [self.generators.node_interface.generate(None)]
        return []

    def generate_fields(self, model: IRType, args: dict) -> dict:
        scalar_type_generator = self.generators.scalar_type
        fields = {}
        for field in model.fields:
            if scalar_type_generator.is_scalar_field(field):
                fields[field.name] = GraphQLField(
                    scalar_type_generator.map_to_scalar_field_type(field),
                    description=field.description,
                )
                continue

            related = self.generators.types[field.type_name]
            related_type = self.generate(related)
            field_args = None
            if field.is_list and not related.is_embedded:
                field_args = generate_many_query_args(self.generators, related)
            fields[field.name] = GraphQLField(
                scalar_type_generator.wrap_with_modifiers(field, related_type),
                args=field_args,
                description=field.description,
            )
        return fields


class NodeInterfaceGenerator(StaticTypeGeneratorBase):
    """The ``Node`` interface implemented by models with an ``ID`` id."""

    kind = "node"
    type_name = "Node"

    def generate_internal(self, input, args: dict) -> GraphQLInterfaceType:
        return GraphQLInterfaceType(
            name=self.type_name,
            fields=lambda: {
                "id": GraphQLField(
                    GraphQLNonNull(GraphQLID), description="The id of the object."
                )
            },
            description="An object with an ID",
        )


class PageInfoGenerator(StaticTypeGeneratorBase):
    kind = "page_info"
    type_name = "PageInfo"

    def generate_internal(self, input, args: dict) -> GraphQLObjectType:
        return GraphQLObjectType(
            name=self.type_name,
            fields=lambda: {
                "hasNextPage": GraphQLField(GraphQLNonNull(GraphQLBoolean)),
                "hasPreviousPage": GraphQLField(GraphQLNonNull(GraphQLBoolean)),
                "startCursor": GraphQLField(GraphQLString),
                "endCursor": GraphQLField(GraphQLString),
            },
            description="Information about pagination in a connection.",
        )


class BatchPayloadGenerator(StaticTypeGeneratorBase):
    kind = "batch_payload"
    type_name = "BatchPayload"

    def generate_internal(self, input, args: dict) -> GraphQLObjectType:
        long_type = self.generators.scalar_type.generate(TypeIdentifiers.long)
        return GraphQLObjectType(
            name=self.type_name,
            fields=lambda: {
                "count": GraphQLField(
                    GraphQLNonNull(long_type),
                    description="The number of nodes that have been affected by the Batch operation.",
                )
            },
        )


class ModelEdgeGenerator(ModelObjectTypeGeneratorBase):
    """``<Model>Edge``: a node plus its cursor."""

    kind = "edge"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}Edge"

    def get_description(self, model: IRType, args: dict) -> str | None:
        return "An edge in a connection."

    def generate_fields(self, model: IRType, args: dict) -> dict:
        return {
            "node": GraphQLField(
                GraphQLNonNull(self.generators.model_object_type.generate(model)),
                description="The item at the end of the edge.",
            ),
            "cursor": GraphQLField(
                GraphQLNonNull(GraphQLString),
                description="A cursor for use in pagination.",
            ),
        }


class AggregateModelGenerator(ModelObjectTypeGeneratorBase):
    kind = "aggregate"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"Aggregate{model.name}"

    def generate_fields(self, model: IRType, args: dict) -> dict:
        return {"count": GraphQLField(GraphQLNonNull(GraphQLInt))}


class ModelConnectionGenerator(ModelObjectTypeGeneratorBase):
    """``<Model>Connection``: page info, edges and aggregate."""

    kind = "connection"

    def get_type_name(self, model: IRType, args: dict) -> str:
        return f"{model.name}Connection"

    def get_description(self, model: IRType, args: dict) -> str | None:
        return "A connection to a list of items."

    def generate_fields(self, model: IRType, args: dict) -> dict:
        return {
            "pageInfo": GraphQLField(
                GraphQLNonNull(self.generators.page_info.generate(None)),
                description="Information to aid in pagination.",
            ),
            "edges": GraphQLField(
                GraphQLNonNull(GraphQLList(self.generators.model_edge.generate(model))),
                description="A list of edges.",
            ),
            "aggregate": GraphQLField(
                GraphQLNonNull(self.generators.aggregate.generate(model))
            ),
        }
