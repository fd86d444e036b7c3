"""Unit tests for the client binding generator."""

import pytest
from graphql import (
    GraphQLField,
    GraphQLInputObjectType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLString,
    GraphQLUnionType,
)
from pydantic import ValidationError

from gql_crudgen.core.api import generate_client, generate_crud_schema, parse_internal_types
from gql_crudgen.core.client_generator import (
    ClientGenerator,
    FlowGenerator,
    RenderOptions,
    TypeCategory,
    TypescriptGenerator,
    categorize,
)
from gql_crudgen.core.ir import DatabaseType


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def post_datamodel():
    """One required String, one optional Int and a required String with default."""
    return """
    type Post {
      id: ID! @unique
      title: String!
      views: Int
      status: String! @default(value: "DRAFT")
    }
    """


@pytest.fixture
def post_schema(post_datamodel):
    return generate_crud_schema(post_datamodel, DatabaseType.relational)


@pytest.fixture
def ts_generator(post_schema):
    return TypescriptGenerator(post_schema)


@pytest.fixture
def flow_generator(post_schema):
    return FlowGenerator(post_schema)


# =============================================================================
# Tests: Categories
# =============================================================================


class TestCategorize:
    """Tests for the type category tags."""

    def test_categories(self, post_schema):
        type_map = post_schema.type_map
        assert categorize(type_map["Post"]) is TypeCategory.OBJECT
        assert categorize(type_map["Node"]) is TypeCategory.INTERFACE
        assert categorize(type_map["PostWhereInput"]) is TypeCategory.INPUT_OBJECT
        assert categorize(type_map["PostOrderByInput"]) is TypeCategory.ENUM
        assert categorize(type_map["String"]) is TypeCategory.SCALAR

    def test_union(self):
        a = GraphQLObjectType("A", {"x": GraphQLField(GraphQLString)})
        assert categorize(GraphQLUnionType("AOrNothing", [a])) is TypeCategory.UNION

    def test_type_names_are_grouped_by_category(self, ts_generator, post_schema):
        names = ts_generator.get_type_names()
        categories = [categorize(post_schema.type_map[n]) for n in names]
        order = list(TypeCategory)
        assert categories == sorted(categories, key=order.index)
        assert "Query" not in names
        assert "Mutation" not in names
        assert not any(n.startswith("__") for n in names)


# =============================================================================
# Tests: Type rendering
# =============================================================================


class TestTypeRendering:
    """Tests for the per-category renderers."""

    def test_node_shape_optionality(self, ts_generator, post_schema):
        rendered = ts_generator.render_interface_or_object(post_schema.type_map["Post"], node=True)
        assert rendered.startswith("export interface PostNode extends Node {")
        assert "  id: ID_Output," in rendered
        assert "  title: String," in rendered
        assert "  views?: Int," in rendered
        assert "  status: String," in rendered

    def test_promise_shape(self, ts_generator, post_schema):
        rendered = ts_generator.render_interface_or_object(post_schema.type_map["Post"], node=False)
        assert rendered.startswith("export interface Post extends Promise<PostNode>, Node {")
        assert "  title: () => Promise<String>," in rendered

    def test_create_input_optionality(self, ts_generator, post_schema):
        rendered = ts_generator.render_input_object(post_schema.type_map["PostCreateInput"])
        assert rendered == (
            "export interface PostCreateInput {\n"
            "  title: String,\n"
            "  views?: Int,\n"
            "  status?: String,\n"
            "}"
        )

    def test_list_input_fields_accept_single_values(self, ts_generator, post_schema):
        rendered = ts_generator.render_input_object(post_schema.type_map["PostWhereInput"])
        assert "  id_in?: ID_Input[] | ID_Input," in rendered
        assert "  AND?: PostWhereInput[] | PostWhereInput," in rendered

    def test_id_scalar_has_two_sides(self, ts_generator, post_schema):
        rendered = ts_generator.render_scalar(post_schema.type_map["ID"])
        assert "export type ID_Input = string | number" in rendered
        assert "export type ID_Output = string" in rendered

    def test_scalar_alias(self, ts_generator, post_schema):
        assert ts_generator.render_scalar(post_schema.type_map["Int"]).endswith(
            "export type Int = number"
        )

    def test_enum(self, ts_generator, post_schema):
        rendered = ts_generator.render_enum(post_schema.type_map["PostOrderByInput"])
        assert rendered.startswith("export type PostOrderByInput =\n  'id_ASC' |\n  'id_DESC' |")

    def test_union(self, ts_generator):
        a = GraphQLObjectType("A", {"x": GraphQLField(GraphQLString)})
        b = GraphQLObjectType("B", {"x": GraphQLField(GraphQLString)})
        assert ts_generator.render_union(GraphQLUnionType("AOrB", [a, b])) == "export type AOrB = A | B"

    def test_description_comment(self, ts_generator):
        type_ = GraphQLInputObjectType(
            "Filter", {}, description="Narrows results"
        )
        assert ts_generator.render_input_object(type_).startswith("/*\n * Narrows results\n */\n")

    def test_date_time_mapping(self):
        schema = generate_crud_schema("type Event { at: DateTime! }", DatabaseType.relational)
        assert "export type DateTime = Date | string" in TypescriptGenerator(schema).render_types()
        assert "export type DateTime = string" in FlowGenerator(schema).render_types()


# =============================================================================
# Tests: Root operations
# =============================================================================


class TestRootRendering:
    """Tests for query, mutation and exists rendering."""

    def test_list_query(self, ts_generator):
        queries = ts_generator.render_queries()
        assert (
            "    posts: (args?: { where?: PostWhereInput, orderBy?: PostOrderByInput, "
            "skip?: Int, after?: String, before?: String, first?: Int, last?: Int }) "
            "=> Promise<Array<PostNode>>"
        ) in queries

    def test_single_query_takes_where(self, ts_generator):
        assert "    post: (where: PostWhereUniqueInput) => Post" in ts_generator.render_queries()

    def test_create_takes_data(self, ts_generator):
        assert "    createPost: (data: PostCreateInput) => Post" in ts_generator.render_mutations()

    def test_delete_takes_where(self, ts_generator):
        mutations = ts_generator.render_mutations()
        assert "    deletePost: (where: PostWhereUniqueInput) => Post" in mutations
        assert "    deleteManyPosts: (where?: PostWhereInput) => BatchPayload" in mutations

    def test_other_mutations_take_args(self, ts_generator):
        assert (
            "    updatePost: (args: { data: PostUpdateInput, where: PostWhereUniqueInput }) => Post"
            in ts_generator.render_mutations()
        )

    def test_delegate_methods(self, ts_generator):
        delegate = ts_generator.render_delegate_queries()
        assert (
            "    post: <T>(where: PostWhereUniqueInput, info?: GraphQLResolveInfo, options?: Options) => T"
            in delegate
        )

    def test_exists(self, ts_generator, flow_generator):
        assert ts_generator.render_exists() == "  Post: (where?: PostWhereInput) => Promise<boolean>"
        assert flow_generator.render_exists() == "  Post(where?: PostWhereInput): Promise<boolean>;"


# =============================================================================
# Tests: Full output
# =============================================================================


class TestRender:
    """Tests for complete binding files."""

    def test_typescript(self, ts_generator):
        code = ts_generator.render()
        assert code.startswith("import { GraphQLResolveInfo, GraphQLSchema } from 'graphql'")
        assert "export interface Exists {" in code
        assert "const typeDefs = `" in code
        assert "export const Prisma = makePrismaBindingClass<BindingConstructor<Prisma>>({typeDefs})" in code

    def test_flow(self, flow_generator):
        code = flow_generator.render()
        assert code.startswith("/**\n * @flow\n */\nimport type {")
        assert "export { prisma as Prisma }" in code

    def test_options(self, ts_generator):
        code = ts_generator.render(
            RenderOptions(endpoint="'http://localhost:4466'", secret="process.env.SECRET")
        )
        assert (
            "({typeDefs, endpoint: 'http://localhost:4466', secret: process.env.SECRET})" in code
        )

    def test_options_are_immutable(self):
        options = RenderOptions(endpoint="x")
        with pytest.raises(ValidationError):
            options.endpoint = "y"

    def test_typedefs_escape_backticks(self):
        schema = GraphQLSchema(
            query=GraphQLObjectType(
                "Query", {"x": GraphQLField(GraphQLString, description="Use `x`")}
            )
        )
        assert "\\`x\\`" in TypescriptGenerator(schema).render_typedefs()

    def test_determinism(self, post_datamodel):
        assert generate_client(post_datamodel) == generate_client(post_datamodel)

    def test_models_table(self, post_datamodel):
        code = generate_client(post_datamodel, language="flow")
        assert "export const models = [\n  {\n    name: 'Post',\n    embedded: false\n  }\n]" in code

    def test_models_table_needs_internal_types(self, ts_generator):
        assert ts_generator.render_models() == ""
        assert "export const models" not in ts_generator.render()

    def test_models_table_lists_embedded_types(self):
        datamodel = "type User { id: ID! @id, home: Address } type Address @embedded { street: String }"
        types = parse_internal_types(datamodel, DatabaseType.document)
        schema = generate_crud_schema(datamodel, DatabaseType.document)
        rendered = FlowGenerator(schema, internal_types=types).render_models()
        assert "name: 'Address',\n    embedded: true" in rendered

    def test_unknown_language(self, post_datamodel):
        with pytest.raises(ValueError, match="Unknown client language"):
            generate_client(post_datamodel, language="kotlin")

    def test_custom_template_dir(self, tmp_path, post_schema):
        (tmp_path / "typescript.ts.j2").write_text("// custom\n{{ exports }}\n")
        code = TypescriptGenerator(post_schema, template_dir=str(tmp_path)).render()
        assert code.startswith("// custom\nexport const Prisma")

    def test_schema_without_roots(self):
        schema = generate_crud_schema("enum Status { DRAFT }", DatabaseType.relational)
        code = TypescriptGenerator(schema).render()
        assert "export type Status =\n  'DRAFT'" in code
        assert "Queries" not in code
        assert "DelegateQuery" not in code


class TestBaseClass:
    """Tests for the abstract base."""

    def test_language_hooks_are_abstract(self, post_schema):
        with pytest.raises(TypeError):
            ClientGenerator(post_schema)
