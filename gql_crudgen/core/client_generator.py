"""Client binding generator for OpenCRUD schemas.

Walks a finished ``GraphQLSchema`` and renders typed binding source for
TypeScript or Flow:

    code = TypescriptGenerator(schema).render(RenderOptions(endpoint="'http://localhost:4466'"))

Every named type gets a ``TypeCategory`` tag and is rendered by the renderer
registered for that tag. The file skeleton comes from a Jinja2 template;
templates in ``template_dir`` take precedence over the built-in ones:

    - typescript.ts.j2
    - flow.js.j2
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Callable

from graphql import (
    GraphQLArgument,
    GraphQLEnumType,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLUnionType,
    get_named_type,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_union_type,
    print_schema,
)
from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape
from pydantic import BaseModel, ConfigDict

from .errors import InvariantViolation
from .ir import IRType

logger = logging.getLogger(__name__)


class TypeCategory(Enum):
    """Kinds of named types, in the order they are rendered."""
    ENUM = "enum"
    INPUT_OBJECT = "input_object"
    INTERFACE = "interface"
    OBJECT = "object"
    SCALAR = "scalar"
    UNION = "union"


RENDER_ORDER = list(TypeCategory)


def categorize(named_type: GraphQLNamedType) -> TypeCategory:
    """Return the category tag of a named type."""
    if is_scalar_type(named_type):
        return TypeCategory.SCALAR
    if is_enum_type(named_type):
        return TypeCategory.ENUM
    if is_object_type(named_type):
        return TypeCategory.OBJECT
    if is_interface_type(named_type):
        return TypeCategory.INTERFACE
    if is_union_type(named_type):
        return TypeCategory.UNION
    if is_input_object_type(named_type):
        return TypeCategory.INPUT_OBJECT
    raise InvariantViolation(f"Unknown named type: {named_type!r}")


class RenderOptions(BaseModel):
    """Options passed to the generated binding constructor.

    Values are code expressions inserted as-is, e.g. ``"process.env.ENDPOINT"``
    or ``"'http://localhost:4466'"``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str | None = None
    secret: str | None = None


class ClientGenerator(ABC):
    """Base class for the binding generators.

    Subclasses set the template, the scalar mapping and the language
    specific pieces (imports, exists signatures, exports).
    """

    template_name = ""
    scalar_mapping: dict[str, str] = {}

    def __init__(
        self,
        schema: GraphQLSchema,
        internal_types: list[IRType] | None = None,
        template_dir: str | None = None,
    ):
        """Initialize the generator.

        Args:
            schema: The schema to render bindings for
            internal_types: Optional datamodel types; when given, a table of
                            models and their embedded flag is rendered too
            template_dir: Optional directory with custom Jinja2 templates
        """
        self.schema = schema
        self.internal_types = internal_types or []

        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_crudgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        self.renderers: dict[TypeCategory, Callable[[GraphQLNamedType], str]] = {
            TypeCategory.UNION: self.render_union,
            TypeCategory.OBJECT: self.render_object,
            TypeCategory.INTERFACE: self.render_interface,
            TypeCategory.INPUT_OBJECT: self.render_input_object,
            TypeCategory.SCALAR: self.render_scalar,
            TypeCategory.ENUM: self.render_enum,
        }

    def render(self, options: RenderOptions | None = None) -> str:
        """Render the complete binding source."""
        template = self.env.get_template(self.template_name)
        code = template.render(
            imports=self.render_imports(),
            exists=self.render_exists(),
            queries=self.render_queries(),
            mutations=self.render_mutations(),
            delegate_queries=self.render_delegate_queries(),
            delegate_mutations=self.render_delegate_mutations(),
            types=self.render_types(),
            typedefs=self.render_typedefs(),
            exports=self.render_exports(options),
            models=self.render_models(),
        )
        logger.debug("Rendered %s with %d lines", self.template_name, code.count("\n"))
        return code

    # -- language specific ---------------------------------------------------

    @abstractmethod
    def render_imports(self) -> str:
        ...

    @abstractmethod
    def render_exists_entry(self, type_name: str, where_type: str) -> str:
        ...

    @abstractmethod
    def render_exports(self, options: RenderOptions | None = None) -> str:
        ...

    # -- file sections -------------------------------------------------------

    def render_class_args(self, options: RenderOptions | None = None) -> str:
        endpoint_string = ""
        secret_string = ""
        if options:
            if options.endpoint:
                endpoint_string = f", endpoint: {options.endpoint}"
            if options.secret:
                secret_string = f", secret: {options.secret}"
        return f"{{typeDefs{endpoint_string}{secret_string}}}"

    def render_typedefs(self) -> str:
        return "const typeDefs = `" + print_schema(self.schema).replace("`", "\\`") + "`"

    def render_models(self) -> str:
        models = [
            f"  {{\n    name: '{t.name}',\n    embedded: {'true' if t.is_embedded else 'false'}\n  }}"
            for t in self.internal_types
            if not t.is_enum
        ]
        if not models:
            return ""
        return "export const models = [\n" + ",\n".join(models) + "\n]"

    def render_exists(self) -> str:
        query_type = self.schema.query_type
        if query_type is None:
            return ""
        return "\n".join(
            self.render_exists_entry(type_name, where_type)
            for type_name, where_type in self.get_types_and_where(query_type)
        )

    @staticmethod
    def get_types_and_where(query_type: GraphQLObjectType) -> list[tuple[str, str]]:
        """(model, where input) pairs for every list query with a where arg."""
        pairs = []
        for field in query_type.fields.values():
            type_ = field.type
            if is_non_null_type(type_):
                type_ = type_.of_type
            if not is_list_type(type_):
                continue
            where = field.args.get("where")
            if where is None:
                continue
            pairs.append((get_named_type(type_).name, get_named_type(where.type).name))
        return pairs

    def render_queries(self) -> str:
        query_type = self.schema.query_type
        if query_type is None:
            return ""
        return self.render_main_method_fields("query", query_type.fields)

    def render_mutations(self) -> str:
        mutation_type = self.schema.mutation_type
        if mutation_type is None:
            return ""
        return self.render_main_method_fields("mutation", mutation_type.fields, is_mutation=True)

    def render_delegate_queries(self) -> str:
        query_type = self.schema.query_type
        if query_type is None:
            return ""
        return self.render_main_method_fields("query", query_type.fields, delegate=True)

    def render_delegate_mutations(self) -> str:
        mutation_type = self.schema.mutation_type
        if mutation_type is None:
            return ""
        return self.render_main_method_fields("mutation", mutation_type.fields, delegate=True)

    # -- types ---------------------------------------------------------------

    def get_type_names(self) -> list[str]:
        """Names of the types to render, grouped by category."""
        schema = self.schema
        root_names = {
            t.name
            for t in (schema.query_type, schema.mutation_type, schema.subscription_type)
            if t is not None
        }
        names = [
            name
            for name in schema.type_map
            if not name.startswith("__") and name not in root_names
        ]
        return sorted(names, key=lambda n: RENDER_ORDER.index(categorize(schema.type_map[n])))

    def render_types(self) -> str:
        blocks = []
        for type_name in self.get_type_names():
            named_type = self.schema.type_map[type_name]
            renderer = self.renderers.get(categorize(named_type))
            if renderer is not None:
                blocks.append(renderer(named_type))
        return "\n\n".join(blocks)

    def render_union(self, type_: GraphQLUnionType) -> str:
        members = " | ".join(t.name for t in type_.types)
        return f"{self.render_description(type_.description)}export type {type_.name} = {members}"

    def render_object(self, type_: GraphQLObjectType) -> str:
        return (
            self.render_interface_or_object(type_, node=True)
            + "\n\n"
            + self.render_interface_or_object(type_, node=False)
        )

    def render_interface(self, type_: GraphQLInterfaceType) -> str:
        return self.render_interface_or_object(type_)

    def render_input_object(self, type_: GraphQLInputObjectType) -> str:
        lines = []
        for name, field in type_.fields.items():
            is_optional = not is_non_null_type(field.type)
            lines.append(
                f"  {name}{'?' if is_optional else ''}: {self.render_input_field_type(field.type)},"
            )
        return self.render_interface_wrapper(type_.name, type_.description, [], "\n".join(lines))

    def render_scalar(self, type_: GraphQLScalarType) -> str:
        if type_.name == "ID":
            return self.render_id_type(type_)
        mapped = self.scalar_mapping.get(type_.name, "string")
        return f"{self.render_comment(type_.description)}export type {type_.name} = {mapped}"

    def render_id_type(self, type_: GraphQLScalarType) -> str:
        """ID is accepted as string or number but always returned as string."""
        mapped = self.scalar_mapping.get(type_.name, "string")
        return (
            f"{self.render_comment(type_.description)}"
            f"export type {type_.name}_Input = {mapped}\n"
            f"export type {type_.name}_Output = string"
        )

    def render_enum(self, type_: GraphQLEnumType) -> str:
        values = " |\n".join(f"  '{name}'" for name in type_.values)
        return f"{self.render_description(type_.description)}export type {type_.name} =\n{values}"

    def render_interface_or_object(
        self,
        type_: GraphQLObjectType | GraphQLInterfaceType,
        node: bool = True,
    ) -> str:
        """Render the node shape (scalars only) or the promise shape of a type."""
        lines = []
        for name, field in type_.fields.items():
            if node and is_object_type(get_named_type(field.type)):
                continue
            field_type = self.render_field_type(
                name, field, node=node, input=False, partial=False, render_function=True
            )
            lines.append(f"  {self.render_field_name(name, field, node)}: {field_type},")

        interfaces = type_.interfaces if is_object_type(type_) else []
        return self.render_interface_wrapper(
            f"{type_.name}{'Node' if node else ''}",
            type_.description,
            interfaces,
            "\n".join(lines),
            promise=not node,
        )

    # -- fields and arguments ------------------------------------------------

    def render_main_method_fields(
        self,
        operation: str,
        fields: dict[str, GraphQLField],
        delegate: bool = False,
        is_mutation: bool = False,
    ) -> str:
        lines = []
        for name, field in fields.items():
            generic = "<T>" if delegate else ""
            if operation == "subscription":
                return_type = "Promise<AsyncIterator<T>>"
            elif delegate:
                return_type = "T"
            else:
                return_type = self.render_field_type(
                    name,
                    field,
                    node=False,
                    input=False,
                    partial=False,
                    render_function=False,
                    is_mutation=is_mutation,
                )
            args = self.render_args(
                name, field, render_info=delegate, is_mutation=is_mutation, is_top_level=True
            )
            lines.append(f"    {name}: {generic}({args}) => {return_type}")
        return ";\n".join(lines)

    def render_args(
        self,
        name: str,
        field: GraphQLField,
        render_info: bool = False,
        is_mutation: bool = False,
        is_top_level: bool = False,
    ) -> str:
        """Render the parameter list of an operation.

        ``create*`` mutations take their first argument as ``data``;
        ``delete*`` mutations and single-argument top-level object queries
        take it as ``where``. Everything else gets an ``args`` record.
        """
        args = field.args
        all_optional = all(not is_non_null_type(arg.type) for arg in args.values())
        optional_mark = "?" if all_optional else ""
        info_string = ", info?: GraphQLResolveInfo, options?: Options" if render_info else ""
        first_arg = next(iter(args.values()), None)

        if first_arg is not None and is_mutation and name.startswith("create"):
            return f"data{optional_mark}: {self.render_input_field_type_helper(first_arg, is_mutation)}{info_string}"

        field_type = field.type
        returns_object = is_object_type(field_type) or is_object_type(getattr(field_type, "of_type", None))
        if first_arg is not None and (
            (is_mutation and name.startswith("delete"))
            or (not is_mutation and is_top_level and len(args) == 1 and returns_object)
        ):
            return f"where{optional_mark}: {self.render_input_field_type_helper(first_arg, is_mutation)}{info_string}"

        rendered = ", ".join(
            f"{arg_name}{'' if is_non_null_type(arg.type) else '?'}: "
            f"{self.render_input_field_type_helper(arg, is_mutation)}"
            for arg_name, arg in args.items()
        )
        padding = " " if args else ""
        return f"args{optional_mark}: {{{padding}{rendered}{padding}}}{info_string}"

    def render_input_field_type_helper(self, arg: GraphQLArgument, is_mutation: bool) -> str:
        return self.render_field_type(
            "",
            arg,
            node=False,
            input=True,
            partial=False,
            render_function=False,
            is_mutation=is_mutation,
        )

    def render_field_type(
        self,
        name: str,
        field: GraphQLField | GraphQLArgument | GraphQLInputField,
        node: bool,
        input: bool,
        partial: bool,
        render_function: bool,
        is_mutation: bool = False,
    ) -> str:
        """Render the TypeScript/Flow type of an output field or argument.

        Scalars on output fields become functions returning a promise unless
        a node shape is rendered. Object types are referenced by their node
        shape inside lists and node shapes, and by their promise shape
        otherwise.
        """
        type_ = field.type
        of_type = getattr(type_, "of_type", None)
        deep_type = get_named_type(type_)
        is_list = is_list_type(type_) or is_list_type(of_type)
        is_optional = not (is_non_null_type(type_) or is_non_null_type(of_type))
        is_scalar = is_scalar_type(deep_type) or is_enum_type(deep_type)
        is_input = isinstance(field, (GraphQLArgument, GraphQLInputField))
        field_args = getattr(field, "args", None) or {}

        type_string = self.get_internal_type_name(type_)

        if (node or is_list) and not is_scalar:
            type_string += "Node"

        if is_scalar and not is_input:
            if is_list:
                type_string += "[]"
            if node:
                return type_string
            args = self.render_args(name, field, is_mutation=is_mutation) if field_args else ""
            return f"({args}) => Promise<{type_string}>"

        if (is_list or node) and is_optional:
            type_string += " | null"

        if is_list:
            if is_scalar:
                return f"Array<{type_string}>"
            if render_function:
                args = self.render_args(name, field, is_mutation=is_mutation) if field_args else ""
                return f"({args}) => Promise<Array<{type_string}>>"
            return f"Promise<Array<{type_string}>>"

        if partial:
            type_string = f"Partial<{type_string}>"

        if node and (not is_input or is_scalar):
            return f"Promise<{type_string}>"

        if is_input or not render_function:
            return type_string

        args = self.render_args(name, field, is_mutation=is_mutation) if field_args else ""
        return f"({args}) => {type_string}"

    def render_input_field_type(self, type_) -> str:
        if is_non_null_type(type_):
            return self.render_input_field_type(type_.of_type)
        if is_list_type(type_):
            input_type = self.render_input_field_type(type_.of_type)
            return f"{input_type}[] | {input_type}"
        return f"{type_.name}{'_Input' if type_.name == 'ID' else ''}"

    @staticmethod
    def render_field_name(name: str, field, node: bool) -> str:
        if not node:
            return name
        return f"{name}{'' if is_non_null_type(field.type) else '?'}"

    @staticmethod
    def get_internal_type_name(type_) -> str:
        name = get_named_type(type_).name
        return "ID_Output" if name == "ID" else name

    # -- wrappers ------------------------------------------------------------

    def render_interface_wrapper(
        self,
        type_name: str,
        type_description: str | None,
        interfaces: list[GraphQLInterfaceType],
        field_definition: str,
        promise: bool = False,
    ) -> str:
        parents = [i.name for i in interfaces]
        if promise:
            parents = [f"Promise<{type_name}Node>"] + parents
        extends = f" extends {', '.join(parents)}" if parents else ""
        return (
            f"{self.render_description(type_description)}"
            f"export interface {type_name}{extends} {{\n{field_definition}\n}}"
        )

    @staticmethod
    def render_description(description: str | None) -> str:
        if not description:
            return ""
        lines = "".join(f" * {line}\n" for line in description.split("\n"))
        return f"/*\n{lines} */\n"

    @staticmethod
    def render_comment(description: str | None) -> str:
        if not description:
            return ""
        return f"/*\n{description}\n*/\n"


class TypescriptGenerator(ClientGenerator):
    """Renders a TypeScript binding (``.ts``)."""

    template_name = "typescript.ts.j2"
    scalar_mapping = {
        "Int": "number",
        "String": "string",
        "ID": "string | number",
        "Float": "number",
        "Boolean": "boolean",
        "DateTime": "Date | string",
        "Json": "any",
        "Long": "string",
        "UUID": "string",
    }

    def render_imports(self) -> str:
        return (
            "import { GraphQLResolveInfo, GraphQLSchema } from 'graphql'\n"
            "import { IResolvers } from 'graphql-tools/dist/Interfaces'\n"
            "import { BasePrismaOptions as BPOType, Options } from 'prisma-binding'\n"
            "import { makePrismaBindingClass } from 'prisma-binding'"
        )

    def render_exists_entry(self, type_name: str, where_type: str) -> str:
        return f"  {type_name}: (where?: {where_type}) => Promise<boolean>"

    def render_exports(self, options: RenderOptions | None = None) -> str:
        args = self.render_class_args(options)
        return f"export const Prisma = makePrismaBindingClass<BindingConstructor<Prisma>>({args})"


class FlowGenerator(ClientGenerator):
    """Renders a Flow binding (``.js`` with ``@flow``)."""

    template_name = "flow.js.j2"
    scalar_mapping = {
        "Int": "number",
        "String": "string",
        "ID": "string | number",
        "Float": "number",
        "Boolean": "boolean",
        "DateTime": "string",
        "Json": "any",
        "Long": "string",
        "UUID": "string",
    }

    def render_imports(self) -> str:
        return (
            "import type { GraphQLResolveInfo, GraphQLSchema } from 'graphql'\n"
            "import type { IResolvers } from 'graphql-tools'\n"
            "import type { BasePrismaOptions as BPOType, Options } from 'prisma-lib'\n"
            "import { makePrismaBindingClass } from 'prisma-lib'"
        )

    def render_exists_entry(self, type_name: str, where_type: str) -> str:
        return f"  {type_name}(where?: {where_type}): Promise<boolean>;"

    def render_exports(self, options: RenderOptions | None = None) -> str:
        args = self.render_class_args(options)
        return (
            f"const prisma: BindingConstructor<Prisma> = makePrismaBindingClass({args})\n"
            "export { prisma as Prisma }"
        )
