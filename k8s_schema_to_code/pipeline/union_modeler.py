"""
Models a top-level oneOf as a wrapper type with one factory per variant kind.
"""

from __future__ import annotations

from typing import Any

from .errors import UnsupportedUnionVariantError
from .ir_nodes import Description, TypeKind, UnionDef
from .type_mapper import SCALAR_KINDS


class UnionModeler:
    """Builds UnionDef nodes from oneOf schemas.

    Only scalar variants are supported. ``integer`` and ``number`` share the
    numeric kind, so they produce a single factory.
    """

    def model(self, type_name: str, schema: dict[str, Any], description: Description | None = None) -> UnionDef:
        options = schema.get("oneOf") or []
        if not options:
            raise UnsupportedUnionVariantError(None)

        variants: list[TypeKind] = []
        for option in options:
            option_type = option.get("type") if isinstance(option, dict) else None
            if not isinstance(option_type, str) or option_type not in SCALAR_KINDS:
                raise UnsupportedUnionVariantError(option_type)
            kind = SCALAR_KINDS[option_type]
            if kind not in variants:
                variants.append(kind)

        return UnionDef(name=type_name, variants=variants, description=description)
