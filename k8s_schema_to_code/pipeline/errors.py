"""
Errors raised while importing Kubernetes API object schemas.

Every failure is fatal to the resource being emitted. The distinct
subclasses let a caller skip one resource and keep going with the others.
"""

from __future__ import annotations

from typing import Any


class SchemaImportError(Exception):
    """Base class for all schema import failures."""

    pass


class MissingResourceIdentityError(SchemaImportError):
    """The resource schema has no usable x-kubernetes-group-version-kind entry."""

    pass


class UnresolvedReferenceError(SchemaImportError):
    """A $ref could not be resolved against the document definitions."""

    def __init__(self, ref: Any, reason: str):
        self.ref = ref
        self.reason = reason
        super().__init__(f"cannot resolve reference {ref!r}: {reason}")


class UnsupportedUnionPropertyError(SchemaImportError):
    """A oneOf appeared inline in a property instead of at the top of a named type."""

    pass


class UnsupportedAnyOfError(SchemaImportError):
    """anyOf has no representation in the generated code."""

    pass


class UnexpectedInlineObjectError(SchemaImportError):
    """A property declares an anonymous object with its own properties."""

    pass


class UnsupportedTupleItemsError(SchemaImportError):
    """An array whose items is missing or is not a single schema."""

    def __init__(self, items: Any):
        self.items = items
        super().__init__(f"unsupported array items {items!r}")


class UnsupportedSchemaTypeError(SchemaImportError):
    """A schema type (or object shape) without a target representation."""

    def __init__(self, schema_type: Any, detail: str = ""):
        self.schema_type = schema_type
        message = f"unsupported type {schema_type!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnsupportedUnionVariantError(SchemaImportError):
    """A oneOf variant that is not a scalar kind."""

    def __init__(self, variant_type: Any):
        self.variant_type = variant_type
        super().__init__(f"unexpected union variant type {variant_type!r}")
