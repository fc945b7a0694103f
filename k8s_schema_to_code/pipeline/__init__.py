"""
Pipeline - Kubernetes schema to typed object model generator.

1. Discovery: find the definitions annotated with x-kubernetes-group-version-kind
2. Resource emission: options struct and construct of each API object
3. Type emission: every referenced type, deferred and emitted exactly once
4. Backend: render the IR declarations to TypeScript or Python
5. Writer: commit each output unit and write it to disk
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .code_writer import CodeWriter
from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .errors import (
    MissingResourceIdentityError,
    SchemaImportError,
    UnexpectedInlineObjectError,
    UnresolvedReferenceError,
    UnsupportedAnyOfError,
    UnsupportedSchemaTypeError,
    UnsupportedTupleItemsError,
    UnsupportedUnionPropertyError,
    UnsupportedUnionVariantError,
)
from .generator import ImportGenerator
from .resource_emitter import GroupVersionKind, ResourceEmitter, find_api_object_definitions

__all__ = [
    "ImportGenerator",
    "ResourceEmitter",
    "GroupVersionKind",
    "find_api_object_definitions",
    "CodeWriter",
    "AtomicWriter",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "SchemaImportError",
    "MissingResourceIdentityError",
    "UnresolvedReferenceError",
    "UnsupportedUnionPropertyError",
    "UnsupportedAnyOfError",
    "UnexpectedInlineObjectError",
    "UnsupportedTupleItemsError",
    "UnsupportedSchemaTypeError",
    "UnsupportedUnionVariantError",
]
