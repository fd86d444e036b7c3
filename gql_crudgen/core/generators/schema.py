"""Schema assembler.

Builds the complete OpenCRUD schema for a parsed datamodel:

    schema = SchemaGenerator().generate(types)
    print(print_schema(schema))
"""

import logging

from graphql import GraphQLSchema

from ..ir import IRType, TypeGraph
from ..scalars import DEFAULT_SCALARS, ScalarRegistry
from .registry import Generators

logger = logging.getLogger(__name__)


class SchemaGenerator:
    """Composes the per-model generators into one ``GraphQLSchema``."""

    def __init__(self, scalars: ScalarRegistry = DEFAULT_SCALARS):
        self.scalars = scalars

    def generate(self, types: TypeGraph | list[IRType]) -> GraphQLSchema:
        """Generate the schema. Each call uses a fresh generator cache."""
        generators = Generators(types, self.scalars)
        graph = generators.types

        query = mutation = None
        if graph.models:
            query = generators.query_type.generate(graph)
            mutation = generators.mutation_type.generate(graph)

        # Datamodel types go first so they lead the printed schema
        datamodel_types = [
            generators.scalar_type.generate(t) if t.is_enum else generators.model_object_type.generate(t)
            for t in graph
        ]
        schema = GraphQLSchema(query=query, mutation=mutation, types=datamodel_types)

        logger.debug(
            "Generated schema for %d models with %d named types (%d cached by generators)",
            len(graph.models),
            len(schema.type_map),
            len(generators.cache),
        )
        return schema
