"""Tests for the datamodel parser."""

import pytest

from gql_crudgen.core.errors import ParseError
from gql_crudgen.core.ir import DatabaseType, TypeGraph
from gql_crudgen.core.parser import DatamodelParser, DocumentParser, RelationalParser, parse


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def blog_datamodel():
    return """
    enum Status {
      DRAFT
      PUBLISHED
    }

    "A person writing posts"
    type User {
      id: ID! @unique
      email: String! @unique
      name: String
      posts: [Post!]! @relation(name: "UserPosts")
      createdAt: DateTime!
    }

    type Post {
      id: ID! @unique
      title: String!
      tags: [String!]!
      status: Status! @default(value: DRAFT)
      views: Int @default(value: 0)
      author: User! @relation(name: "UserPosts")
    }
    """


@pytest.fixture
def blog_types(blog_datamodel):
    return TypeGraph(parse(blog_datamodel))


# =============================================================================
# Tests: Structure
# =============================================================================


class TestParseStructure:
    """Tests for types and fields produced from valid datamodels."""

    def test_declaration_order(self, blog_datamodel):
        types = parse(blog_datamodel)
        assert [t.name for t in types] == ["Status", "User", "Post"]
        assert [f.name for f in types[2].fields] == [
            "id",
            "title",
            "tags",
            "status",
            "views",
            "author",
        ]

    def test_enum(self, blog_types):
        status = blog_types["Status"]
        assert status.is_enum
        assert status.values == ["DRAFT", "PUBLISHED"]
        assert status.fields == []

    def test_description(self, blog_types):
        assert blog_types["User"].description == "A person writing posts"

    def test_field_modifiers(self, blog_types):
        post = blog_types["Post"]
        tags = post.get_field("tags")
        assert tags.type_name == "String"
        assert tags.is_list
        assert tags.is_required

        title = post.get_field("title")
        assert title.is_required
        assert not title.is_list
        assert not title.is_unique

    def test_unique_and_id(self, blog_types):
        user = blog_types["User"]
        assert user.id_field is user.get_field("id")
        assert user.get_field("id").is_unique
        assert user.get_field("email").is_unique
        assert not user.get_field("email").is_id

    def test_default_values(self, blog_types):
        post = blog_types["Post"]
        assert post.get_field("status").default_value == "DRAFT"
        assert post.get_field("views").default_value == 0
        assert post.get_field("title").default_value is None

    def test_relations_are_linked_by_name(self, blog_types):
        posts = blog_types["User"].get_field("posts")
        author = blog_types["Post"].get_field("author")
        assert posts.relation_name == "UserPosts"
        assert posts.related_field == "author"
        assert author.related_field == "posts"
        assert blog_types.related_type(author) is blog_types["User"]

    def test_self_relation_is_plain_data(self):
        types = parse("type User { id: ID! @unique, name: String!, friend: User }")
        friend = types[0].get_field("friend")
        assert friend.type_name == "User"
        assert friend.related_field is None

    def test_models_exclude_enums(self, blog_types):
        assert [t.name for t in blog_types.models] == ["User", "Post"]


class TestRelationalParser:
    """Tests for relational id and read-only rules."""

    def test_reserved_fields_are_read_only(self, blog_types):
        user = blog_types["User"]
        assert user.get_field("id").is_read_only
        assert user.get_field("createdAt").is_read_only
        assert not user.get_field("email").is_read_only

    def test_id_directive(self):
        types = parse("type Account { key: ID! @id, name: String }")
        key = types[0].get_field("key")
        assert key.is_id
        assert key.is_read_only
        assert key.is_unique

    def test_embedded_rejected(self):
        with pytest.raises(ParseError, match="@embedded"):
            parse("type Address @embedded { street: String }")

    def test_create_returns_relational(self):
        assert isinstance(DatamodelParser.create(DatabaseType.relational), RelationalParser)


class TestDocumentParser:
    """Tests for document database rules."""

    def test_embedded_allowed(self):
        types = parse(
            """
            type User { id: ID! @id, address: Address }
            type Address @embedded { street: String! }
            """,
            DatabaseType.document,
        )
        assert types[1].is_embedded
        assert [t.name for t in TypeGraph(types).models] == ["User"]

    def test_only_id_directive_marks_id(self):
        types = parse("type User { id: ID!, name: String }", DatabaseType.document)
        assert types[0].id_field is None
        assert not types[0].get_field("id").is_read_only

    def test_create_returns_document(self):
        assert isinstance(DatamodelParser.create(DatabaseType.document), DocumentParser)


# =============================================================================
# Tests: Errors
# =============================================================================


class TestParseErrors:
    """Tests for datamodels that must be rejected."""

    def test_syntax_error(self):
        with pytest.raises(ParseError, match="Invalid datamodel syntax"):
            parse("type User { id: ID! ")

    def test_unknown_type(self):
        with pytest.raises(ParseError) as exc_info:
            parse("type User { id: ID! @unique, pet: Pet }")
        assert exc_info.value.type_name == "User"
        assert exc_info.value.field_name == "pet"
        assert str(exc_info.value) == "User.pet: Unknown type Pet."

    def test_unsupported_definition(self):
        with pytest.raises(ParseError, match="Unsupported definition"):
            parse("input UserInput { name: String }")

    def test_duplicate_type(self):
        with pytest.raises(ParseError, match="more than once"):
            parse("type User { name: String } type User { email: String }")

    def test_duplicate_field(self):
        with pytest.raises(ParseError, match="Field is declared more than once"):
            parse("type User { name: String, name: String }")

    def test_scalar_name_collision(self):
        with pytest.raises(ParseError, match="built-in scalar"):
            parse("type DateTime { value: String }")

    def test_reserved_name(self):
        with pytest.raises(ParseError, match="reserved"):
            parse("type Node { id: ID! }")

    def test_empty_type(self):
        with pytest.raises(ParseError, match="at least one field"):
            parse("type User")

    def test_two_ids(self):
        with pytest.raises(ParseError, match="one id field"):
            parse("type User { id: ID!, key: ID! @id }")

    def test_nested_list(self):
        with pytest.raises(ParseError, match="Nested lists"):
            parse("type Grid { cells: [[Int]] }")

    def test_unique_list(self):
        with pytest.raises(ParseError, match="cannot be @unique"):
            parse("type User { tags: [String!]! @unique }")

    def test_list_default(self):
        with pytest.raises(ParseError, match="default value"):
            parse('type User { tags: [String!] @default(value: "a") }')

    def test_relation_default(self):
        with pytest.raises(ParseError, match="Relation fields cannot have a default value"):
            parse('type User { id: ID!, best: User @default(value: "x") }')

    def test_unknown_enum_default(self):
        with pytest.raises(ParseError, match="not a value of Role"):
            parse("enum Role { ADMIN } type User { role: Role @default(value: GUEST) }")

    def test_relation_directive_on_scalar(self):
        with pytest.raises(ParseError, match="only valid on relation fields"):
            parse('type User { name: String @relation(name: "X") }')

    def test_name_of_generated_input(self):
        with pytest.raises(ParseError) as exc_info:
            parse("type User { id: ID! @unique }\ntype UserWhereInput { a: String }")
        assert exc_info.value.type_name == "UserWhereInput"
        assert "generated for User" in str(exc_info.value)

    @pytest.mark.parametrize(
        "name",
        ["UserCreateInput", "UserOrderByInput", "UserConnection", "UserEdge", "AggregateUser"],
    )
    def test_names_of_generated_types(self, name):
        with pytest.raises(ParseError, match="generated for User"):
            parse(f"type User {{ id: ID! @unique }}\ntype {name} {{ a: String }}")

    def test_name_of_generated_enum_input(self):
        with pytest.raises(ParseError, match="generated for User"):
            parse("type User { id: ID! @unique }\nenum UserOrderByInput { A }")

    def test_names_of_embedded_inputs(self):
        with pytest.raises(ParseError, match="generated for Address"):
            parse(
                """
                type Address @embedded { street: String }
                type AddressCreateInput { a: String }
                """,
                DatabaseType.document,
            )

    def test_root_field_clash(self):
        with pytest.raises(ParseError, match="Root field people"):
            parse(
                """
                type Person { id: ID! @unique, name: String }
                type People { id: ID! @unique, size: Int }
                """
            )


class TestAbstractParser:
    """Tests for the parser base class."""

    def test_base_class_is_abstract(self):
        with pytest.raises(TypeError):
            DatamodelParser()
