"""
Emits named type declarations.

A named type becomes a union wrapper (oneOf), a struct (properties) or an
alias of the type its schema maps to. Referenced types are not emitted
inline; they are queued on the scheduler and emitted when it is drained.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .backends.base import CodeBackend
from .code_writer import CodeWriter
from .errors import UnsupportedSchemaTypeError
from .ir_nodes import AliasDef, Declaration, Description, FieldDef, StructDef
from .resolver import ReferenceResolver
from .scheduler import EmissionScheduler
from .type_mapper import PropertyTypeMapper
from .union_modeler import UnionModeler

logger = logging.getLogger(__name__)

_DEFAULT_PATTERN = re.compile(r"Defaults?\W+(to|is)\W+(.+)")

_DISCRIMINATORS = ("$ref", "oneOf", "properties")


def parse_description(text: str | None) -> Description | None:
    """Build the documentation of a schema node.

    "Defaults to X" and "Default is X" also capture X, verbatim, as the
    default value.
    """
    if not text or not isinstance(text, str):
        return None
    match = _DEFAULT_PATTERN.search(text)
    return Description(text=text, default=match.group(2) if match else None)


class TypeEmitter:
    """Emits one declaration per named type into the current output unit."""

    def __init__(
        self,
        resolver: ReferenceResolver,
        scheduler: EmissionScheduler,
        backend: CodeBackend,
        code: CodeWriter,
    ):
        self.scheduler = scheduler
        self.backend = backend
        self.code = code
        self.mapper = PropertyTypeMapper(resolver, scheduler, self.emit_type)
        self.union_modeler = UnionModeler()

    def emit_type(self, type_name: str, schema: dict[str, Any]) -> Declaration:
        """Emit the declaration of ``type_name`` and return its IR node."""
        declaration = self.build_declaration(type_name, schema)
        logger.debug("Emitting %s %s", type(declaration).__name__, type_name)
        self.code.line(self.backend.render_declaration(declaration))
        self.code.line()
        return declaration

    def build_declaration(self, type_name: str, schema: dict[str, Any]) -> Declaration:
        present = [key for key in _DISCRIMINATORS if schema.get(key) is not None]
        if len(present) > 1:
            raise UnsupportedSchemaTypeError(schema.get("type"), f"{type_name} mixes {' and '.join(present)}")

        description = parse_description(schema.get("description"))

        if schema.get("oneOf") is not None:
            return self.union_modeler.model(type_name, schema, description)

        if schema.get("properties") is not None:
            return self._build_struct(type_name, schema, description)

        return AliasDef(name=type_name, target=self.mapper.type_for_property(schema), description=description)

    def _build_struct(self, type_name: str, schema: dict[str, Any], description: Description | None) -> StructDef:
        required = schema.get("required")
        required = {name for name in required if isinstance(name, str)} if isinstance(required, list) else set()

        properties = schema["properties"]
        if not isinstance(properties, dict):
            raise UnsupportedSchemaTypeError(schema.get("type"), f"properties of {type_name} is not an object")

        fields = []
        for prop_name, prop_spec in properties.items():
            # Rejects non-object property schemas before their description is read
            type_ref = self.mapper.type_for_property(prop_spec)
            fields.append(
                FieldDef(
                    name=prop_name,
                    type_ref=type_ref,
                    is_required=prop_name in required,
                    description=parse_description(prop_spec.get("description")),
                )
            )
        return StructDef(name=type_name, fields=fields, description=description)
