"""
Collects generated text into named output units.
"""

from __future__ import annotations


class CodeWriter:
    """Accumulates lines for one open output unit at a time.

    A unit only becomes visible in ``files`` once it is closed, so a
    resource that fails half way through leaves nothing behind.
    """

    def __init__(self):
        self.files: dict[str, str] = {}
        self.current_file: str | None = None
        self._lines: list[str] = []

    def open_file(self, name: str) -> None:
        if self.current_file is not None:
            raise RuntimeError(f"Cannot open {name}: {self.current_file} is still open")
        self.current_file = name
        self._lines = []

    def line(self, text: str = "") -> None:
        if self.current_file is None:
            raise RuntimeError("No output file is open")
        self._lines.append(text)

    def close_file(self, header: str = "") -> str:
        """Commit the open unit, with ``header`` placed before its lines."""
        if self.current_file is None:
            raise RuntimeError("No output file is open")
        name = self.current_file
        body = "\n".join(self._lines).rstrip("\n") + "\n"
        self.files[name] = header + body
        self.current_file = None
        self._lines = []
        return name

    def discard_file(self) -> None:
        """Drop the open unit, if any, without committing it."""
        self.current_file = None
        self._lines = []
