"""
Import generator: turns every API object of a schema document into one
output unit.
"""

from __future__ import annotations

import logging
from typing import Any

from .. import __version__
from .backends import get_backend
from .code_writer import CodeWriter
from .config import CodeGeneratorConfig
from .errors import SchemaImportError
from .resource_emitter import GroupVersionKind, ResourceEmitter, find_api_object_definitions

logger = logging.getLogger(__name__)


class ImportGenerator:
    """Generates code for all API objects of a Kubernetes schema document."""

    def __init__(self, schema: dict[str, Any], config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            schema: The JSON schema document (with "definitions")
            config: Code generation configuration
        """
        self.schema = schema
        self.config = config or CodeGeneratorConfig()
        self.backend = get_backend(self.config.language)
        self.skipped: list[str] = []
        self.failed: dict[str, SchemaImportError] = {}

    def generation_comment(self) -> str:
        if not self.config.add_generation_comment:
            return ""
        comment = f"generated by k8s_schema_to_code {__version__}"
        if self.config.command_line:
            comment += f": {self.config.command_line}"
        return comment

    def generate(self) -> dict[str, str]:
        """
        Generate one output unit per API object.

        Returns:
            Mapping from file name to generated source, in document order

        Raises:
            SchemaImportError: On the first malformed resource, unless
                skip_invalid_resources is set
        """
        code = CodeWriter()
        self.skipped = []
        self.failed = {}

        for definition in find_api_object_definitions(self.schema):
            try:
                if self._is_ignored(definition):
                    continue
                emitter = ResourceEmitter(self.schema, definition, self.backend, code, self.generation_comment())
                if emitter.emit() is None:
                    self.skipped.append(emitter.identity.base_name)
            except SchemaImportError as e:
                if not self.config.skip_invalid_resources:
                    raise
                name = self._describe(definition)
                logger.error("Skipping %s: %s", name, e)
                self.failed[name] = e

        return code.files

    def _is_ignored(self, definition: dict[str, Any]) -> bool:
        identity = GroupVersionKind.from_definition(definition)
        if identity.kind in self.config.ignore_kinds:
            logger.info("Ignoring %s", identity.base_name)
            self.skipped.append(identity.base_name)
            return True
        return False

    @staticmethod
    def _describe(definition: dict[str, Any]) -> str:
        try:
            return GroupVersionKind.from_definition(definition).base_name
        except SchemaImportError:
            return repr(definition.get("description", "<unnamed definition>"))[:60]
