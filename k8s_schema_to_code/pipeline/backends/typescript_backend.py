"""
TypeScript code generation backend.

Generates cdk8s-style interfaces, type aliases and constructs.
"""

from __future__ import annotations

import json
import re
from typing import Any

from ..ir_nodes import Description, FieldDef, TypeKind, TypeRef
from .base import CodeBackend

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def _escape_comment(text: str) -> str:
    return text.replace("*/", "*\\/")


class TypeScriptBackend(CodeBackend):
    """TypeScript code generation backend."""

    TEMPLATE_LANG = "typescript"
    FILE_EXTENSION = "ts"

    TYPE_MAP = {
        TypeKind.STRING: "string",
        TypeKind.NUMBER: "number",
        TypeKind.BOOLEAN: "boolean",
        TypeKind.TIMESTAMP: "Date",
    }

    def render_prefix(self, generation_comment: str) -> str:
        return self.prefix_template.render(generation_comment=generation_comment) + "\n\n"

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to TypeScript type string."""
        if type_ref.kind in self.TYPE_MAP:
            return self.TYPE_MAP[type_ref.kind]

        if type_ref.kind == TypeKind.REFERENCE:
            return type_ref.name

        if type_ref.kind == TypeKind.ARRAY:
            return f"{self.translate_type(type_ref.item)}[]"

        if type_ref.kind == TypeKind.MAP:
            return f"{{ [key: string]: {self.translate_type(type_ref.item)} }}"

        raise ValueError(f"Unsupported type kind: {type_ref.kind}")

    def format_doc(self, description: Description | None) -> str:
        if description is None:
            return ""
        lines = ["/**"]
        for text in _escape_comment(description.text).splitlines():
            lines.append(f" * {text}".rstrip())
        if description.default is not None:
            lines.append(f" * @default {_escape_comment(description.default)}")
        lines.append(" */")
        return "\n".join(lines)

    def factory_name(self, kind: TypeKind) -> str:
        return "from" + kind.value.capitalize()

    def _prepare_field_context(self, field: FieldDef) -> dict[str, Any]:
        result = super()._prepare_field_context(field)
        if not _IDENTIFIER.match(field.name):
            result["name"] = json.dumps(field.name)
        return result
