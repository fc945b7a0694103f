"""
Code generation backends.

Contains language-specific code generators.
"""

from __future__ import annotations

from .base import CodeBackend
from .python_backend import PythonBackend
from .typescript_backend import TypeScriptBackend

BACKENDS: dict[str, type[CodeBackend]] = {
    "typescript": TypeScriptBackend,
    "python": PythonBackend,
}


def get_backend(language: str) -> CodeBackend:
    """Instantiate the backend for a language."""
    if language not in BACKENDS:
        raise ValueError(f"Language not supported: {language}")
    return BACKENDS[language]()


__all__ = [
    "CodeBackend",
    "PythonBackend",
    "TypeScriptBackend",
    "BACKENDS",
    "get_backend",
]
