"""
Configuration for the Kubernetes schema import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

LANGUAGES = ("typescript", "python")


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to write through a temporary file
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Target language ("typescript" or "python")
    language: str = "typescript"

    # Add generation comment at top of each file
    add_generation_comment: bool = True

    # Resource kinds to leave out of the import
    ignore_kinds: list[str] = field(default_factory=list)

    # Log and skip malformed resources instead of failing the whole import
    skip_invalid_resources: bool = False

    # Command line recorded in the generation comment
    command_line: str = ""

    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.language not in LANGUAGES:
            raise ValueError(f"Language not supported: {self.language}")

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        config.__post_init__()
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "language": self.language,
            "add_generation_comment": self.add_generation_comment,
            "ignore_kinds": self.ignore_kinds,
            "skip_invalid_resources": self.skip_invalid_resources,
            "command_line": self.command_line,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }
