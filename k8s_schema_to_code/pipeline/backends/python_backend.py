"""
Python code generation backend.

Generates cdk8s-style Python dataclasses, type aliases and constructs.
"""

from __future__ import annotations

import collections
import keyword
import re
from typing import Any

from ..ir_nodes import AliasDef, ConstructDef, Declaration, Description, FieldDef, StructDef, TypeKind, TypeRef
from .base import CodeBackend

_NON_IDENTIFIER_CHARS = re.compile(r"[^0-9A-Za-z_]")

STDLIB_MODULES = {"dataclasses", "datetime"}

# Helpers called in generated class bodies, builtins named in their annotations
# and the methods dataclass_json adds. A field with one of these names shadows them.
RESERVED_FIELD_NAMES = {
    "field",
    "config",
    "str",
    "float",
    "bool",
    "list",
    "dict",
    "datetime",
    "to_dict",
    "to_json",
    "from_dict",
    "from_json",
    "schema",
    "dataclass_json_config",
}


def python_field_name(name: str) -> str:
    """Turn a JSON property name into a valid Python attribute name.

    Examples:
        "replicas" -> "replicas"
        "continue" -> "continue_"
        "x-kubernetes-embedded-resource" -> "x_kubernetes_embedded_resource"
        "$ref" -> "_ref"
        "field" -> "field_"
    """
    result = _NON_IDENTIFIER_CHARS.sub("_", name)
    if not result or result[0].isdigit():
        result = "_" + result
    if keyword.iskeyword(result) or result in RESERVED_FIELD_NAMES:
        result += "_"
    return result


def _escape_docstring(text: str) -> str:
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text = text[:-1] + '\\"'
    return text


class PythonBackend(CodeBackend):
    """Python code generation backend."""

    TEMPLATE_LANG = "python"
    FILE_EXTENSION = "py"

    TYPE_MAP = {
        TypeKind.STRING: "str",
        TypeKind.NUMBER: "float",
        TypeKind.BOOLEAN: "bool",
        TypeKind.TIMESTAMP: "datetime",
    }

    def __init__(self):
        super().__init__()
        self.python_imports: set[tuple[str, str]] = set()

    def begin_file(self) -> None:
        self.python_imports = {
            ("__future__", "annotations"),
            ("cdk8s", "ApiObject"),
            ("cdk8s", "ApiObjectMetadata"),
            ("cdk8s", "JsonPatch"),
            ("constructs", "Construct"),
        }

    def file_name(self, base_name: str) -> str:
        # Python modules cannot contain hyphens
        return f"{base_name.replace('-', '_')}.{self.FILE_EXTENSION}"

    def render_prefix(self, generation_comment: str) -> str:
        return self.prefix_template.render(
            generation_comment=generation_comment,
            imports=self._assemble_imports(),
        ) + "\n\n"

    def render_declaration(self, declaration: Declaration) -> str:
        # Two blank lines between top-level definitions
        return super().render_declaration(declaration) + "\n"

    def render_construct(self, construct: ConstructDef) -> str:
        return super().render_construct(construct) + "\n"

    def render_alias(self, alias: AliasDef) -> str:
        return self.alias_template.render(
            name=alias.name,
            doc=self.format_comment(alias.description),
            type=self.translate_type(alias.target),
        )

    def render_struct(self, struct: StructDef) -> str:
        self.python_imports.add(("dataclasses", "dataclass"))
        self.python_imports.add(("dataclasses_json", "dataclass_json"))
        return super().render_struct(struct)

    def translate_type(self, type_ref: TypeRef) -> str:
        """Translate IR type to Python type string."""
        if type_ref.kind == TypeKind.TIMESTAMP:
            self.python_imports.add(("datetime", "datetime"))

        if type_ref.kind in self.TYPE_MAP:
            return self.TYPE_MAP[type_ref.kind]

        if type_ref.kind == TypeKind.REFERENCE:
            return type_ref.name

        if type_ref.kind == TypeKind.ARRAY:
            return f"list[{self.translate_type(type_ref.item)}]"

        if type_ref.kind == TypeKind.MAP:
            return f"dict[str, {self.translate_type(type_ref.item)}]"

        raise ValueError(f"Unsupported type kind: {type_ref.kind}")

    def format_doc(self, description: Description | None) -> str:
        """Format documentation as a docstring."""
        if description is None:
            return ""
        text = _escape_docstring(description.text.strip())
        if description.default is not None:
            text += f"\n\nDefault: {_escape_docstring(description.default)}"
        if "\n" in text:
            return f'"""{text}\n"""'
        return f'"""{text}"""'

    def format_comment(self, description: Description | None) -> str:
        """Format documentation as comment lines (used for fields)."""
        if description is None:
            return ""
        lines = [f"# {line}".rstrip() for line in description.text.strip().splitlines()]
        if description.default is not None:
            lines.append(f"# Default: {description.default}")
        return "\n".join(lines)

    def factory_name(self, kind: TypeKind) -> str:
        return f"from_{kind.value}"

    def _order_fields(self, fields: list[FieldDef]) -> list[FieldDef]:
        """Required fields (without defaults) must come before optional fields."""
        required_fields = [f for f in fields if f.is_required]
        optional_fields = [f for f in fields if not f.is_required]
        return required_fields + optional_fields

    def _prepare_field_context(self, field: FieldDef) -> dict[str, Any]:
        result = super()._prepare_field_context(field)
        result["doc"] = self.format_comment(field.description)

        name = python_field_name(field.name)
        type_str = result["type"]
        init = None
        if name != field.name:
            self.python_imports.add(("dataclasses", "field"))
            self.python_imports.add(("dataclasses_json", "config"))
            default = "" if field.is_required else "default=None, "
            init = f'field({default}metadata=config(field_name="{field.name}"))'
        elif not field.is_required:
            init = "None"

        if not field.is_required:
            type_str = f"{type_str} | None"

        result["name"] = name
        result["line"] = f"{name}: {type_str}" + (f" = {init}" if init else "")
        return result

    def _assemble_imports(self) -> list[str]:
        """Assemble Python import statements."""
        # Group imports by module
        import_groups: dict[str, set[str]] = collections.defaultdict(set)
        for module, name in self.python_imports:
            import_groups[module].add(name)

        stdlib_groups = {m: import_groups[m] for m in import_groups if m in STDLIB_MODULES}
        third_party_groups = {m: import_groups[m] for m in import_groups if m not in STDLIB_MODULES and m != "__future__"}

        assembled = []

        # __future__ imports first
        if "__future__" in import_groups:
            names = sorted(import_groups["__future__"])
            assembled.append(f"from __future__ import {', '.join(names)}")
            if stdlib_groups or third_party_groups:
                assembled.append("")

        # Standard library
        for module in sorted(stdlib_groups.keys()):
            names = sorted(stdlib_groups[module])
            assembled.append(f"from {module} import {', '.join(names)}")

        if stdlib_groups and third_party_groups:
            assembled.append("")

        # Third party
        for module in sorted(third_party_groups.keys()):
            names = sorted(third_party_groups[module])
            assembled.append(f"from {module} import {', '.join(names)}")

        return assembled
