"""Datamodel parser using graphql-core.

Parses a datamodel SDL string and produces a list of ``IRType`` nodes in
declaration order. The database type selects how ids, read-only fields and
embedded types are recognized:

    types = DatamodelParser.create(DatabaseType.relational).parse(source)
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

from graphql import (
    DirectiveNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    GraphQLSyntaxError,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    TypeNode,
    parse as parse_sdl,
    value_from_ast_untyped,
)

from .errors import ParseError
from .ir import DatabaseType, IRField, IRType
from .naming import lower_first, plural_name, upper_first
from .scalars import DEFAULT_SCALARS, ScalarRegistry

logger = logging.getLogger(__name__)

# Names of types the schema generator emits on its own
RESERVED_TYPE_NAMES = ("Query", "Mutation", "Subscription", "Node", "PageInfo", "BatchPayload")

# Suffixes of the types generated for every model or embedded type
GENERATED_TYPE_SUFFIXES = (
    "WhereInput",
    "WhereUniqueInput",
    "OrderByInput",
    "CreateInput",
    "CreateOneInput",
    "CreateManyInput",
    "UpdateInput",
    "UpdateDataInput",
    "UpdateOneInput",
    "UpdateOneRequiredInput",
    "UpdateManyInput",
    "UpdateWithWhereUniqueNestedInput",
    "UpsertNestedInput",
    "UpdateManyMutationInput",
    "Edge",
    "Connection",
)
GENERATED_TYPE_PREFIXES = ("Aggregate",)


class DatamodelParser(ABC):
    """Parses datamodel SDL into IR.

    Subclasses decide which fields are ids or read-only and whether
    embedded types are allowed.
    """

    database_type: DatabaseType
    allows_embedded = False

    def __init__(self, scalars: ScalarRegistry = DEFAULT_SCALARS):
        self.scalars = scalars

    @staticmethod
    def create(
        database_type: DatabaseType, scalars: ScalarRegistry = DEFAULT_SCALARS
    ) -> "DatamodelParser":
        """Return the parser implementation for a database type."""
        if database_type == DatabaseType.relational:
            return RelationalParser(scalars)
        if database_type == DatabaseType.document:
            return DocumentParser(scalars)
        raise ValueError(f"Unknown database type: {database_type!r}")

    def parse(self, source: str) -> list[IRType]:
        """Parse a datamodel and return its types in declaration order."""
        try:
            document = parse_sdl(source, no_location=True)
        except GraphQLSyntaxError as e:
            raise ParseError(f"Invalid datamodel syntax: {e.message}") from e

        types: list[IRType] = []
        seen: set[str] = set()
        for definition in document.definitions:
            if isinstance(definition, EnumTypeDefinitionNode):
                ir_type = self._process_enum(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                ir_type = self._process_object_type(definition)
            else:
                raise ParseError(
                    f"Unsupported definition in datamodel: {definition.kind}"
                )

            if ir_type.name in seen:
                raise ParseError("Type is declared more than once.", ir_type.name)
            if self.scalars.is_scalar(ir_type.name):
                raise ParseError(
                    "Type name collides with a built-in scalar.", ir_type.name
                )
            if ir_type.name in RESERVED_TYPE_NAMES:
                raise ParseError("Type name is reserved.", ir_type.name)
            seen.add(ir_type.name)
            types.append(ir_type)

        self._check_generated_names(types)
        self._check_root_field_names(types)
        self._check_references(types)
        self._resolve_relations(types)
        logger.debug(
            "Parsed %d types (%s): %s",
            len(types),
            self.database_type.value,
            ", ".join(t.name for t in types),
        )
        return types

    # -- definitions --------------------------------------------------------

    def _process_enum(self, node: EnumTypeDefinitionNode) -> IRType:
        if not node.values:
            raise ParseError("Enums must declare at least one value.", node.name.value)
        return IRType(
            name=node.name.value,
            is_enum=True,
            values=[v.name.value for v in node.values or []],
            description=node.description.value if node.description else None,
        )

    def _process_object_type(self, node: ObjectTypeDefinitionNode) -> IRType:
        name = node.name.value
        is_embedded = self._has_directive(node.directives, "embedded")
        if is_embedded and not self.allows_embedded:
            raise ParseError(
                f"@embedded types are not supported for {self.database_type.value} databases.",
                name,
            )

        fields = []
        field_names: set[str] = set()
        for field_node in node.fields or []:
            ir_field = self._process_field(name, field_node)
            if ir_field.name in field_names:
                raise ParseError("Field is declared more than once.", name, ir_field.name)
            field_names.add(ir_field.name)
            fields.append(ir_field)

        if not fields:
            raise ParseError("Types must declare at least one field.", name)
        if sum(1 for f in fields if f.is_id) > 1:
            raise ParseError("Only one id field is allowed per type.", name)

        return IRType(
            name=name,
            fields=fields,
            is_embedded=is_embedded,
            description=node.description.value if node.description else None,
        )

    def _process_field(self, type_name: str, node: FieldDefinitionNode) -> IRField:
        name = node.name.value
        type_info = self._get_type_info(type_name, name, node.type)
        is_id = self.is_id_field(node)
        is_scalar = self.scalars.is_scalar(type_info["name"])

        if self._has_directive(node.directives, "unique") and type_info["is_list"]:
            raise ParseError("List fields cannot be @unique.", type_name, name)

        default_value = self._get_default_value(node)
        if default_value is not None and type_info["is_list"]:
            raise ParseError("List fields cannot have a default value.", type_name, name)

        relation = self._get_directive(node.directives, "relation")
        relation_name = None
        if relation is not None:
            if is_scalar:
                raise ParseError("@relation is only valid on relation fields.", type_name, name)
            relation_name = self._get_directive_argument(relation, "name")

        return IRField(
            name=name,
            type_name=type_info["name"],
            is_required=type_info["is_required"],
            is_list=type_info["is_list"],
            is_id=is_id,
            is_unique=is_id or self._has_directive(node.directives, "unique"),
            is_read_only=self.is_read_only_field(node),
            default_value=default_value,
            relation_name=relation_name,
            description=node.description.value if node.description else None,
        )

    @staticmethod
    def _get_type_info(type_name: str, field_name: str, type_node: TypeNode) -> dict[str, Any]:
        """Extract the type name, is_list and is_required from the type node."""
        is_required = False
        is_list = False

        if isinstance(type_node, NonNullTypeNode):
            is_required = True
            type_node = type_node.type

        if isinstance(type_node, ListTypeNode):
            is_list = True
            type_node = type_node.type
            # [Type!] and [Type] are treated alike
            if isinstance(type_node, NonNullTypeNode):
                type_node = type_node.type

        if not isinstance(type_node, NamedTypeNode):
            raise ParseError("Nested lists are not supported.", type_name, field_name)

        return {
            "name": type_node.name.value,
            "is_list": is_list,
            "is_required": is_required,
        }

    # -- directives ---------------------------------------------------------

    @staticmethod
    def _get_directive(directives, name: str) -> DirectiveNode | None:
        for directive in directives or []:
            if directive.name.value == name:
                return directive
        return None

    @classmethod
    def _has_directive(cls, directives, name: str) -> bool:
        return cls._get_directive(directives, name) is not None

    @staticmethod
    def _get_directive_argument(directive: DirectiveNode, name: str) -> Any:
        for argument in directive.arguments or []:
            if argument.name.value == name:
                return value_from_ast_untyped(argument.value)
        return None

    def _get_default_value(self, node: FieldDefinitionNode) -> Any:
        directive = self._get_directive(node.directives, "default")
        if directive is None:
            return None
        return self._get_directive_argument(directive, "value")

    @abstractmethod
    def is_id_field(self, node: FieldDefinitionNode) -> bool:
        ...

    @abstractmethod
    def is_read_only_field(self, node: FieldDefinitionNode) -> bool:
        ...

    # -- cross-type checks --------------------------------------------------

    @staticmethod
    def _check_generated_names(types: list[IRType]):
        """Reject type names that equal a type generated for another type."""
        generated: dict[str, str] = {}
        for ir_type in types:
            if ir_type.is_enum:
                continue
            for suffix in GENERATED_TYPE_SUFFIXES:
                generated[f"{ir_type.name}{suffix}"] = ir_type.name
            for prefix in GENERATED_TYPE_PREFIXES:
                generated[f"{prefix}{ir_type.name}"] = ir_type.name

        for ir_type in types:
            owner = generated.get(ir_type.name)
            if owner is not None:
                raise ParseError(
                    f"Type name collides with a type generated for {owner}.", ir_type.name
                )

    @staticmethod
    def _check_root_field_names(types: list[IRType]):
        """Reject models whose Query or Mutation fields would overwrite each other."""
        query_fields: dict[str, str] = {}
        mutation_fields: dict[str, str] = {}
        for ir_type in types:
            if ir_type.is_enum or ir_type.is_embedded:
                continue
            name = ir_type.name
            many_name = plural_name(name)
            candidates = [
                (query_fields, lower_first(name)),
                (query_fields, lower_first(many_name)),
                (query_fields, f"{lower_first(many_name)}Connection"),
                (mutation_fields, f"create{name}"),
                (mutation_fields, f"update{name}"),
                (mutation_fields, f"updateMany{upper_first(many_name)}"),
                (mutation_fields, f"upsert{name}"),
                (mutation_fields, f"delete{name}"),
                (mutation_fields, f"deleteMany{upper_first(many_name)}"),
            ]
            for fields, field_name in candidates:
                owner = fields.get(field_name)
                if owner is not None and owner != name:
                    raise ParseError(
                        f"Root field {field_name} would be generated for both {owner} and {name}.",
                        name,
                    )
                fields[field_name] = name

    def _check_references(self, types: list[IRType]):
        by_name = {t.name: t for t in types}
        for ir_type in types:
            for ir_field in ir_type.fields:
                if self.scalars.is_scalar(ir_field.type_name):
                    continue
                related = by_name.get(ir_field.type_name)
                if related is None:
                    raise ParseError(
                        f"Unknown type {ir_field.type_name}.", ir_type.name, ir_field.name
                    )
                if related.is_enum:
                    if ir_field.relation_name is not None:
                        raise ParseError(
                            "@relation is only valid on relation fields.",
                            ir_type.name,
                            ir_field.name,
                        )
                    if (
                        ir_field.default_value is not None
                        and ir_field.default_value not in related.values
                    ):
                        raise ParseError(
                            f"Default value {ir_field.default_value!r} is not a value of {related.name}.",
                            ir_type.name,
                            ir_field.name,
                        )
                    continue
                if ir_field.default_value is not None:
                    raise ParseError(
                        "Relation fields cannot have a default value.",
                        ir_type.name,
                        ir_field.name,
                    )
                if ir_field.is_unique:
                    raise ParseError(
                        "Relation fields cannot be unique.", ir_type.name, ir_field.name
                    )

    @staticmethod
    def _resolve_relations(types: list[IRType]):
        """Link every relation field to the field pointing back, if any."""
        by_name = {t.name: t for t in types}
        for ir_type in types:
            for ir_field in ir_type.fields:
                related = by_name.get(ir_field.type_name)
                if related is None or related.is_enum:
                    continue
                candidates = [
                    f
                    for f in related.fields
                    if f.type_name == ir_type.name
                    and f.relation_name == ir_field.relation_name
                    and f is not ir_field
                ]
                if len(candidates) == 1:
                    ir_field.related_field = candidates[0].name


class RelationalParser(DatamodelParser):
    """Parser for relational databases.

    A field called ``id`` is the id; ``id``, ``createdAt`` and ``updatedAt``
    are managed by the database and therefore read-only.
    """

    database_type = DatabaseType.relational
    reserved_fields = ("id", "createdAt", "updatedAt")

    def is_id_field(self, node: FieldDefinitionNode) -> bool:
        return node.name.value == "id" or self._has_directive(node.directives, "id")

    def is_read_only_field(self, node: FieldDefinitionNode) -> bool:
        return (
            self.is_id_field(node)
            or node.name.value in self.reserved_fields
            or self._has_directive(node.directives, "createdAt")
            or self._has_directive(node.directives, "updatedAt")
        )


class DocumentParser(DatamodelParser):
    """Parser for document databases. Ids are marked explicitly with @id."""

    database_type = DatabaseType.document
    allows_embedded = True

    def is_id_field(self, node: FieldDefinitionNode) -> bool:
        return self._has_directive(node.directives, "id")

    def is_read_only_field(self, node: FieldDefinitionNode) -> bool:
        return (
            self.is_id_field(node)
            or self._has_directive(node.directives, "createdAt")
            or self._has_directive(node.directives, "updatedAt")
        )


def parse(
    source: str,
    database_type: DatabaseType = DatabaseType.relational,
    scalars: ScalarRegistry = DEFAULT_SCALARS,
) -> list[IRType]:
    """Parse a datamodel with the parser for ``database_type``."""
    return DatamodelParser.create(database_type, scalars).parse(source)
