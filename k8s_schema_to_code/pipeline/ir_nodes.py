"""
IR (Intermediate Representation) node definitions.

These nodes describe the declarations of one output unit after every
reference has been resolved. Backends render them to source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TypeKind(Enum):
    """Kind of type in the IR."""

    STRING = "string"
    NUMBER = "number"  # integer and number collapse here
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"  # string with format date-time
    ARRAY = "array"  # homogeneous sequence of item
    MAP = "map"  # string keys, item values
    REFERENCE = "reference"  # a named type emitted in the same unit


@dataclass(frozen=True)
class TypeRef:
    """A resolved type expression."""

    kind: TypeKind = TypeKind.STRING
    name: str = ""  # Named type (REFERENCE only)
    item: TypeRef | None = None  # Element type (ARRAY) or value type (MAP)


@dataclass
class Description:
    """Documentation attached to a declaration or a field."""

    text: str = ""
    default: str | None = None  # Captured from "Defaults to X"


@dataclass
class FieldDef:
    """A field of a struct."""

    name: str = ""
    type_ref: TypeRef | None = None
    is_required: bool = False
    description: Description | None = None


@dataclass
class StructDef:
    """A structural type with one field per schema property."""

    name: str = ""
    fields: list[FieldDef] = field(default_factory=list)
    description: Description | None = None


@dataclass
class AliasDef:
    """A named alias of a single type expression."""

    name: str = ""
    target: TypeRef | None = None
    description: Description | None = None


@dataclass
class UnionDef:
    """A wrapper type constructible only through one factory per variant kind."""

    name: str = ""
    variants: list[TypeKind] = field(default_factory=list)
    description: Description | None = None


@dataclass
class ConstructDef:
    """The API object construct of a resource."""

    name: str = ""  # The resource kind
    options_name: str = ""
    kind: str = ""
    api_version: str = ""
    description: Description | None = None


Declaration = StructDef | AliasDef | UnionDef
