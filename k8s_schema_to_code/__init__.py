"""Kubernetes Schema to Code Generator

Generates typed API object constructs (TypeScript or Python) from the
definitions of a Kubernetes JSON schema document.
"""

__version__ = "0.1.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    ImportGenerator,
    OutputConfig,
    OutputMode,
    SchemaImportError,
)

__all__ = [
    "ImportGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "SchemaImportError",
    "AtomicWriter",
]
