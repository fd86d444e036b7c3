"""Tests for scalar type mapping and the generator cache."""

import pytest
from graphql import GraphQLEnumType, GraphQLList, GraphQLNonNull, GraphQLString

from gql_crudgen.core.errors import InvariantViolation
from gql_crudgen.core.generators import Generators
from gql_crudgen.core.ir import IRField, IRType
from gql_crudgen.core.scalars import DEFAULT_SCALARS


@pytest.fixture
def generators():
    return Generators(
        [
            IRType(name="Role", is_enum=True, values=["ADMIN", "USER"]),
            IRType(
                name="User",
                fields=[
                    IRField(name="id", type_name="ID", is_required=True, is_id=True, is_unique=True),
                    IRField(name="role", type_name="Role"),
                ],
            ),
        ]
    )


class TestScalarWrapping:
    """Tests for required/list modifiers on output types."""

    def test_required(self, generators):
        field = IRField(name="name", type_name="String", is_required=True)
        type_ = generators.scalar_type.map_to_scalar_field_type(field)
        assert isinstance(type_, GraphQLNonNull)
        assert type_.of_type is GraphQLString

    def test_optional(self, generators):
        field = IRField(name="name", type_name="String")
        assert generators.scalar_type.map_to_scalar_field_type(field) is GraphQLString

    def test_optional_list(self, generators):
        field = IRField(name="tags", type_name="String", is_list=True)
        type_ = generators.scalar_type.map_to_scalar_field_type(field)
        assert isinstance(type_, GraphQLList)
        assert isinstance(type_.of_type, GraphQLNonNull)
        assert type_.of_type.of_type is GraphQLString

    def test_required_list(self, generators):
        field = IRField(name="tags", type_name="String", is_list=True, is_required=True)
        type_ = generators.scalar_type.map_to_scalar_field_type(field)
        assert isinstance(type_, GraphQLNonNull)
        assert isinstance(type_.of_type, GraphQLList)
        assert isinstance(type_.of_type.of_type, GraphQLNonNull)
        assert type_.of_type.of_type.of_type is GraphQLString

    def test_default_relaxes_input_requirement(self, generators):
        field = IRField(name="name", type_name="String", is_required=True, default_value="x")
        scalar_type = generators.scalar_type
        assert scalar_type.map_to_scalar_field_type_for_input(field) is GraphQLString
        assert isinstance(scalar_type.map_to_scalar_field_type(field), GraphQLNonNull)

    def test_required_without_default_stays_required_for_input(self, generators):
        field = IRField(name="name", type_name="String", is_required=True)
        type_ = generators.scalar_type.map_to_scalar_field_type_for_input(field)
        assert isinstance(type_, GraphQLNonNull)

    def test_force_required(self, generators):
        field = IRField(name="name", type_name="String")
        type_ = generators.scalar_type.map_to_scalar_field_type_force_required(field)
        assert isinstance(type_, GraphQLNonNull)


class TestScalarTypeGenerator:
    """Tests for resolving identifiers and enums."""

    def test_enum_field(self, generators):
        role = generators.types["User"].get_field("role")
        assert generators.scalar_type.is_scalar_field(role)
        type_ = generators.scalar_type.map_to_scalar_field_type(role)
        assert isinstance(type_, GraphQLEnumType)
        assert list(type_.values) == ["ADMIN", "USER"]

    def test_relation_field_is_not_scalar(self):
        generators = Generators(
            [IRType(name="User", fields=[IRField(name="friend", type_name="User")])]
        )
        friend = generators.types["User"].get_field("friend")
        assert not generators.scalar_type.is_scalar_field(friend)

    def test_unknown_identifier_raises(self, generators):
        field = IRField(name="price", type_name="Decimal", is_required=True)
        with pytest.raises(InvariantViolation, match="Invalid scalar type given: Decimal"):
            generators.scalar_type.map_to_scalar_field_type(field)

    def test_unknown_identifier_is_not_a_scalar_field(self, generators):
        field = IRField(name="price", type_name="Decimal")
        with pytest.raises(InvariantViolation, match="Decimal is not a scalar type"):
            generators.scalar_type.is_scalar_field(field)

    def test_model_is_not_an_enum(self, generators):
        with pytest.raises(InvariantViolation, match="Not an enum"):
            generators.scalar_type.generate(generators.types["User"])

    def test_custom_scalars_come_from_registry(self, generators):
        assert generators.scalar_type.generate("Json") is DEFAULT_SCALARS.to_output_scalar("Json")


class TestGeneratorCache:
    """Tests for memoization within one run."""

    def test_same_input_returns_same_instance(self, generators):
        user = generators.types["User"]
        first = generators.model_where_input.generate(user)
        second = generators.model_where_input.generate(user)
        assert first is second

    def test_args_are_part_of_the_key(self, generators):
        user = generators.types["User"]
        optional = generators.model_update_one_input.generate(user, {"required": False})
        required = generators.model_update_one_input.generate(user, {"required": True})
        assert optional.name == "UserUpdateOneInput"
        assert required.name == "UserUpdateOneRequiredInput"
        assert optional is not required

    def test_runs_do_not_share_cache(self, generators):
        other = Generators(list(generators.types))
        user = generators.types["User"]
        assert other.model_where_input.generate(user) is not generators.model_where_input.generate(user)

    def test_empty_input_is_cached_as_none(self):
        generators = Generators(
            [IRType(name="Log", fields=[IRField(name="message", type_name="String")])]
        )
        log = generators.types["Log"]
        assert generators.model_where_unique_input.generate(log) is None
        assert ("where_unique", "LogWhereUniqueInput", "{}") in generators.cache
