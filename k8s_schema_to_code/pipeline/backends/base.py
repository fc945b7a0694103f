"""
Base class for code generation backends.

Defines the interface that all language-specific backends must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import jinja2

from ..ir_nodes import (
    AliasDef,
    ConstructDef,
    Declaration,
    Description,
    FieldDef,
    StructDef,
    TypeKind,
    TypeRef,
    UnionDef,
)


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Type mapping from IR scalar kinds to language types
    TYPE_MAP: dict[TypeKind, str] = {}

    # Template directory name
    TEMPLATE_LANG: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    def __init__(self):
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=False,
        )
        ext = self.FILE_EXTENSION
        self.prefix_template = self.jinja_env.get_template(f"prefix.{ext}.jinja2")
        self.struct_template = self.jinja_env.get_template(f"struct.{ext}.jinja2")
        self.alias_template = self.jinja_env.get_template(f"alias.{ext}.jinja2")
        self.union_template = self.jinja_env.get_template(f"union.{ext}.jinja2")
        self.construct_template = self.jinja_env.get_template(f"construct.{ext}.jinja2")

    def file_name(self, base_name: str) -> str:
        return f"{base_name}.{self.FILE_EXTENSION}"

    def begin_file(self) -> None:
        """Reset per-file state before the first declaration of a unit."""

    @abstractmethod
    def render_prefix(self, generation_comment: str) -> str:
        """
        Render the file header (comment and imports).

        Called after every declaration of the unit has been rendered, so
        backends can import only what the unit uses.
        """

    @abstractmethod
    def translate_type(self, type_ref: TypeRef) -> str:
        """
        Translate an IR type to a language-specific type string.

        Args:
            type_ref: The type reference

        Returns:
            Language-specific type string
        """

    @abstractmethod
    def format_doc(self, description: Description | None) -> str:
        """
        Format documentation as comment lines, without indentation.

        Returns:
            The comment block, or an empty string when there is nothing to document
        """

    @abstractmethod
    def factory_name(self, kind: TypeKind) -> str:
        """Name of the union factory for a variant kind."""

    def render_declaration(self, declaration: Declaration) -> str:
        if isinstance(declaration, StructDef):
            return self.render_struct(declaration)
        if isinstance(declaration, UnionDef):
            return self.render_union(declaration)
        if isinstance(declaration, AliasDef):
            return self.render_alias(declaration)
        raise TypeError(f"Unknown declaration {declaration!r}")

    def render_struct(self, struct: StructDef) -> str:
        return self.struct_template.render(
            name=struct.name,
            doc=self.format_doc(struct.description),
            fields=[self._prepare_field_context(f) for f in self._order_fields(struct.fields)],
        )

    def render_alias(self, alias: AliasDef) -> str:
        return self.alias_template.render(
            name=alias.name,
            doc=self.format_doc(alias.description),
            type=self.translate_type(alias.target),
        )

    def render_union(self, union: UnionDef) -> str:
        variant_types = [self.translate_type(TypeRef(kind)) for kind in union.variants]
        return self.union_template.render(
            name=union.name,
            doc=self.format_doc(union.description),
            factories=[{"name": self.factory_name(kind), "type": t} for kind, t in zip(union.variants, variant_types)],
            value_type=" | ".join(variant_types),
        )

    def render_construct(self, construct: ConstructDef) -> str:
        return self.construct_template.render(
            name=construct.name,
            doc=self.format_doc(construct.description),
            options_name=construct.options_name,
            kind=construct.kind,
            api_version=construct.api_version,
        )

    def _order_fields(self, fields: list[FieldDef]) -> list[FieldDef]:
        """Order fields for the target language. Document order by default."""
        return list(fields)

    def _prepare_field_context(self, field: FieldDef) -> dict[str, Any]:
        """
        Prepare the template context for a field.

        Args:
            field: The field definition

        Returns:
            Dictionary of template variables
        """
        return {
            "name": field.name,
            "type": self.translate_type(field.type_ref),
            "required": field.is_required,
            "doc": self.format_doc(field.description),
        }
