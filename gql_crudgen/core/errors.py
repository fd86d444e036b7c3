"""Error types raised by the datamodel parser and the schema generators.

Two kinds exist:

* ``ParseError`` - the datamodel given by the user is not acceptable.
  Callers are expected to catch and report it.
* ``InvariantViolation`` - a generator was handed something its contract
  rules out. This is a bug in the pipeline, not bad input, and is never
  caught inside the package.
"""


class ParseError(Exception):
    """Raised when a datamodel cannot be turned into a type graph."""

    def __init__(
        self,
        message: str,
        type_name: str | None = None,
        field_name: str | None = None,
    ):
        self.message = message
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(self._format())

    def _format(self) -> str:
        if self.type_name and self.field_name:
            return f"{self.type_name}.{self.field_name}: {self.message}"
        if self.type_name:
            return f"{self.type_name}: {self.message}"
        return self.message


class InvariantViolation(AssertionError):
    """Raised when a generator precondition does not hold."""


class gql_assert:
    """Assertion helpers shared by the generators."""

    @staticmethod
    def raise_(message: str):
        raise InvariantViolation(message)

    @staticmethod
    def is_scalar(field, scalar_type_generator):
        if not scalar_type_generator.is_scalar_field(field):
            raise InvariantViolation(
                f"Expected {field.name} to be a scalar or enum field, "
                f"got {field.type_name}."
            )

    @staticmethod
    def is_relation(field, scalar_type_generator):
        if scalar_type_generator.is_scalar_field(field):
            raise InvariantViolation(
                f"Expected {field.name} to be a relation field, "
                f"got scalar {field.type_name}."
            )
