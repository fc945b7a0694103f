"""
Maps schema nodes used as property types to IR type references.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from .errors import (
    UnexpectedInlineObjectError,
    UnsupportedAnyOfError,
    UnsupportedSchemaTypeError,
    UnsupportedTupleItemsError,
    UnsupportedUnionPropertyError,
)
from .ir_nodes import TypeKind, TypeRef
from .resolver import ReferenceResolver, type_name_for_ref
from .scheduler import EmissionScheduler

logger = logging.getLogger(__name__)

SCALAR_KINDS = {
    "string": TypeKind.STRING,
    "number": TypeKind.NUMBER,
    "integer": TypeKind.NUMBER,
    "boolean": TypeKind.BOOLEAN,
}


class PropertyTypeMapper:
    """Maps a schema node to a TypeRef.

    Mapping a $ref requests the emission of the referenced type from the
    scheduler; the emission itself is done later by ``emit_type``.
    """

    def __init__(
        self,
        resolver: ReferenceResolver,
        scheduler: EmissionScheduler,
        emit_type: Callable[[str, dict[str, Any]], None],
    ):
        """
        Initialize the mapper.

        Args:
            resolver: Resolves $ref strings
            scheduler: Scheduler of the output unit being generated
            emit_type: Emits a named type from its schema
        """
        self.resolver = resolver
        self.scheduler = scheduler
        self.emit_type = emit_type
        self._ref_for_name: dict[str, str] = {}

    def type_for_property(self, spec: dict[str, Any]) -> TypeRef:
        """Map a property schema to a type reference."""
        if not isinstance(spec, dict):
            raise UnsupportedSchemaTypeError(spec, "schema node is not an object")

        if spec.get("oneOf") is not None:
            raise UnsupportedUnionPropertyError("oneOf is only supported at the top level of a named type")

        if spec.get("anyOf") is not None:
            raise UnsupportedAnyOfError("anyOf is not supported")

        if spec.get("properties") is not None:
            raise UnexpectedInlineObjectError(f"unexpected inline object with properties {sorted(spec['properties'])}")

        if spec.get("$ref") is not None:
            return self.type_for_ref(spec["$ref"])

        schema_type = spec.get("type")

        if schema_type == "string" and spec.get("format") == "date-time":
            return TypeRef(TypeKind.TIMESTAMP)

        if schema_type is None:
            return TypeRef(TypeKind.STRING)

        if isinstance(schema_type, str) and schema_type in SCALAR_KINDS:
            return TypeRef(SCALAR_KINDS[schema_type])

        if schema_type == "array":
            return self.type_for_array(spec)

        if schema_type == "object":
            return self.type_for_object(spec)

        raise UnsupportedSchemaTypeError(schema_type)

    def type_for_ref(self, ref: str) -> TypeRef:
        """Resolve a $ref and queue the emission of its named type."""
        schema = self.resolver.resolve(ref)
        type_name = type_name_for_ref(ref)

        previous = self._ref_for_name.setdefault(type_name, ref)
        if previous != ref:
            logger.warning("%s and %s both map to type %s, keeping %s", previous, ref, type_name, previous)

        self.scheduler.request(type_name, lambda: self.emit_type(type_name, schema))
        return TypeRef(TypeKind.REFERENCE, name=type_name)

    def type_for_array(self, spec: dict[str, Any]) -> TypeRef:
        items = spec.get("items")
        if not isinstance(items, dict):
            raise UnsupportedTupleItemsError(items)
        return TypeRef(TypeKind.ARRAY, item=self.type_for_property(items))

    def type_for_object(self, spec: dict[str, Any]) -> TypeRef:
        additional = spec.get("additionalProperties")
        if isinstance(additional, dict):
            return TypeRef(TypeKind.MAP, item=self.type_for_property(additional))
        raise UnsupportedSchemaTypeError("object", "no properties and no schema for additionalProperties")
