"""
Reference resolver for $ref resolution.

Resolves local $ref paths to their definitions in the schema document.
"""

from __future__ import annotations

from typing import Any

from .errors import UnresolvedReferenceError

LOCAL_PREFIX = "#/definitions/"


class ReferenceResolver:
    """Resolves local $ref strings to schema definitions."""

    def __init__(self, document: dict[str, Any]):
        """
        Initialize the resolver.

        Args:
            document: The full schema document
        """
        self.document = document

    def resolve(self, ref: str) -> dict[str, Any]:
        """
        Resolve a $ref of the form "#/definitions/<name>".

        Args:
            ref: The reference string

        Returns:
            The referenced definition

        Raises:
            UnresolvedReferenceError: If the reference is not local or the
                definition cannot be found
        """
        if not isinstance(ref, str) or not ref.startswith(LOCAL_PREFIX):
            raise UnresolvedReferenceError(ref, "expecting a local reference")

        definitions = self.document.get("definitions")
        if not definitions or not isinstance(definitions, dict):
            raise UnresolvedReferenceError(ref, 'schema does not have "definitions"')

        found = definitions.get(ref[len(LOCAL_PREFIX) :])
        if not found:
            raise UnresolvedReferenceError(ref, "no such definition")
        if not isinstance(found, dict):
            raise UnresolvedReferenceError(ref, "definition is not a schema object")

        return found


def type_name_for_ref(ref: str) -> str:
    """Name of the type generated for a reference.

    Kubernetes definitions are keyed by dotted paths such as
    "io.k8s.api.core.v1.PodSpec"; the generated type keeps the last component.

    Examples:
        "#/definitions/io.k8s.api.core.v1.PodSpec" -> "PodSpec"
        "#/definitions/Widget" -> "Widget"
    """
    return ref.rsplit("/", 1)[-1].rsplit(".", 1)[-1]
