"""Per-run generator context."""

from typing import Any

from ..ir import IRType, TypeGraph
from ..scalars import DEFAULT_SCALARS, ScalarRegistry
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
from .root import MutationTypeGenerator, QueryTypeGenerator
from .scalar import ModelEnumTypeGenerator, ScalarTypeGenerator


class Generators:
    """Owns one instance of every generator and the cache they share.

    Create a new ``Generators`` for every schema you build; types cached by
    one run are never visible to another.
    """

    def __init__(
        self,
        types: TypeGraph | list[IRType],
        scalars: ScalarRegistry = DEFAULT_SCALARS,
    ):
        if not isinstance(types, TypeGraph):
            types = TypeGraph(types)
        self.types = types
        self.scalars = scalars
        self.cache: dict[tuple[str, str, str], Any] = {}

        self.scalar_type = ScalarTypeGenerator(self)
        self.model_enum_type = ModelEnumTypeGenerator(self)

        self.model_object_type = ModelObjectTypeGenerator(self)
        self.node_interface = NodeInterfaceGenerator(self)
        self.page_info = PageInfoGenerator(self)
        self.batch_payload = BatchPayloadGenerator(self)
        self.model_edge = ModelEdgeGenerator(self)
        self.aggregate = AggregateModelGenerator(self)
        self.model_connection = ModelConnectionGenerator(self)

        self.model_where_input = ModelWhereInputGenerator(self)
        self.model_where_unique_input = ModelWhereUniqueInputGenerator(self)
        self.model_order_by_input = ModelOrderByInputGenerator(self)

        self.model_create_input = ModelCreateInputGenerator(self)
        self.model_create_one_input = ModelCreateOneInputGenerator(self)
        self.model_create_many_input = ModelCreateManyInputGenerator(self)
        self.model_update_input = ModelUpdateInputGenerator(self)
        self.model_update_one_input = ModelUpdateOneInputGenerator(self)
        self.model_update_many_input = ModelUpdateManyInputGenerator(self)
        self.model_update_with_where_unique_nested_input = (
            ModelUpdateWithWhereUniqueNestedInputGenerator(self)
        )
        self.model_upsert_nested_input = ModelUpsertNestedInputGenerator(self)
        self.model_update_many_mutation_input = ModelUpdateManyMutationInputGenerator(self)

        self.query_type = QueryTypeGenerator(self)
        self.mutation_type = MutationTypeGenerator(self)
