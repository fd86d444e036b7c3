"""Intermediate Representation (IR) for datamodels.

The parser produces a flat list of ``IRType`` nodes. Relation fields hold the
*name* of the related type, never the type itself, so cyclic datamodels
(self relations, mutual relations) are plain data. ``TypeGraph`` is the arena
that resolves those names.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator


class DatabaseType(str, Enum):
    """Database flavour the datamodel targets."""
    relational = "relational"
    document = "document"


@dataclass
class IRField:
    """Represents a field of a model type."""
    name: str
    type_name: str
    is_required: bool = False
    is_list: bool = False
    is_id: bool = False
    is_unique: bool = False
    is_read_only: bool = False
    default_value: Any = None
    relation_name: str | None = None
    # Name of the field on the related type that points back, if any
    related_field: str | None = None
    description: str | None = None


@dataclass
class IRType:
    """Represents a model, an embedded type or an enum."""
    name: str
    fields: list[IRField] = field(default_factory=list)
    is_enum: bool = False
    is_embedded: bool = False
    values: list[str] = field(default_factory=list)
    description: str | None = None

    def get_field(self, name: str) -> IRField | None:
        for candidate in self.fields:
            if candidate.name == name:
                return candidate
        return None

    @property
    def id_field(self) -> IRField | None:
        for candidate in self.fields:
            if candidate.is_id:
                return candidate
        return None


class TypeGraph:
    """Arena of ``IRType`` nodes addressed by name.

    Iteration yields types in declaration order.
    """

    def __init__(self, types: list[IRType]):
        self._types: dict[str, IRType] = {}
        for ir_type in types:
            self._types[ir_type.name] = ir_type

    def __iter__(self) -> Iterator[IRType]:
        return iter(self._types.values())

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __getitem__(self, name: str) -> IRType:
        return self._types[name]

    def get(self, name: str) -> IRType | None:
        return self._types.get(name)

    def related_type(self, ir_field: IRField) -> IRType | None:
        """Return the type a field points at, or None for scalar fields."""
        return self._types.get(ir_field.type_name)

    @property
    def models(self) -> list[IRType]:
        """Non-enum, non-embedded types, i.e. the ones with root fields."""
        return [t for t in self if not t.is_enum and not t.is_embedded]
