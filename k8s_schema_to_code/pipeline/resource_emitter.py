"""
Emission of one Kubernetes API object into its own output unit.

The unit holds the options struct, the construct and every type the two
reference, directly or transitively.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .backends.base import CodeBackend
from .code_writer import CodeWriter
from .errors import MissingResourceIdentityError, UnsupportedSchemaTypeError
from .ir_nodes import ConstructDef
from .resolver import ReferenceResolver
from .scheduler import EmissionScheduler
from .type_emitter import TypeEmitter, parse_description

logger = logging.getLogger(__name__)

X_GROUP_VERSION_KIND = "x-kubernetes-group-version-kind"

# Set by the construct itself, never by the caller
SERVER_MANAGED_PROPERTIES = ("apiVersion", "kind", "status")


@dataclass(frozen=True)
class GroupVersionKind:
    """Identity of an API object."""

    group: str
    kind: str
    version: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @property
    def base_name(self) -> str:
        """Output unit base name, e.g. "apps-deployment-v1" or "pod-v1"."""
        group_prefix = f"{self.group.lower().replace('.', '-')}-" if self.group else ""
        return f"{group_prefix}{self.kind.lower()}-{self.version.lower()}"

    @staticmethod
    def from_definition(definition: dict[str, Any]) -> GroupVersionKind:
        """Read the first x-kubernetes-group-version-kind entry of a definition."""
        entries = definition.get(X_GROUP_VERSION_KIND)
        if not entries or not isinstance(entries, list):
            raise MissingResourceIdentityError(f"object must include a {X_GROUP_VERSION_KIND} key")

        entry = entries[0]
        if not isinstance(entry, dict) or not all(isinstance(entry.get(key), str) and entry[key] for key in ("kind", "version")):
            raise MissingResourceIdentityError(f"invalid {X_GROUP_VERSION_KIND} entry {entry!r}")

        group = entry.get("group") or ""
        if not isinstance(group, str):
            raise MissingResourceIdentityError(f"invalid group {group!r} in {X_GROUP_VERSION_KIND}")

        return GroupVersionKind(group=group, kind=entry["kind"], version=entry["version"])


def find_api_object_definitions(document: dict[str, Any]) -> list[dict[str, Any]]:
    """Return all definitions annotated with x-kubernetes-group-version-kind, in document order."""
    definitions = document.get("definitions")
    if not isinstance(definitions, dict):
        return []
    return [d for d in definitions.values() if isinstance(d, dict) and d.get(X_GROUP_VERSION_KIND)]


class ResourceEmitter:
    """Emits one resource with a scheduler of its own."""

    def __init__(
        self,
        document: dict[str, Any],
        definition: dict[str, Any],
        backend: CodeBackend,
        code: CodeWriter,
        generation_comment: str = "",
    ):
        """
        Args:
            document: The full schema document, for $ref resolution
            definition: The resource definition
            backend: Language backend rendering the declarations
            code: Writer receiving the output unit
            generation_comment: Comment placed at the top of the unit
        """
        self.definition = definition
        self.backend = backend
        self.code = code
        self.generation_comment = generation_comment
        self.scheduler = EmissionScheduler()
        self.type_emitter = TypeEmitter(ReferenceResolver(document), self.scheduler, backend, code)

    @property
    def identity(self) -> GroupVersionKind:
        return GroupVersionKind.from_definition(self.definition)

    @property
    def options_name(self) -> str:
        return f"{self.identity.kind}Options"

    def emit(self) -> str | None:
        """
        Emit the resource.

        Returns:
            The name of the committed output unit, or None if the definition
            has no metadata and is therefore not a real API object
        """
        identity = self.identity
        base_name = identity.base_name

        if "metadata" not in (self.definition.get("properties") or {}):
            logger.warning('no "metadata", skipping %s', base_name)
            return None

        file_name = self.backend.file_name(base_name)
        self.backend.begin_file()
        self.code.open_file(file_name)
        try:
            self.emit_options_struct()
            self.emit_construct(identity)
            self.scheduler.drain()
        except Exception:
            self.code.discard_file()
            raise

        self.code.close_file(header=self.backend.render_prefix(self.generation_comment))
        logger.info("Emitted %s (%d auxiliary types)", file_name, len(self.scheduler.emitted))
        return file_name

    def options_schema(self) -> dict[str, Any]:
        """The resource schema minus the properties set by the construct."""
        options = dict(self.definition)
        properties = self.definition.get("properties") or {}
        if not isinstance(properties, dict):
            raise UnsupportedSchemaTypeError(self.definition.get("type"), "resource properties is not an object")
        options["properties"] = {name: spec for name, spec in properties.items() if name not in SERVER_MANAGED_PROPERTIES}
        if isinstance(options.get("required"), list):
            options["required"] = [name for name in options["required"] if name not in SERVER_MANAGED_PROPERTIES]
        return options

    def emit_options_struct(self) -> None:
        self.type_emitter.emit_type(self.options_name, self.options_schema())

    def emit_construct(self, identity: GroupVersionKind) -> None:
        construct = ConstructDef(
            name=identity.kind,
            options_name=self.options_name,
            kind=identity.kind,
            api_version=identity.api_version,
            description=parse_description(self.definition.get("description")),
        )
        self.code.line(self.backend.render_construct(construct))
        self.code.line()
