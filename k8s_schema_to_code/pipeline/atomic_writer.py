"""
Atomic file writer for generated output units.

Ensures that file writes are atomic to prevent data corruption
from interrupted operations.
"""

from __future__ import annotations

import tempfile
from pathlib import Path


class AtomicWriter:
    """Handles atomic file writes.

    Writes to a temporary file in the target directory, then replaces the
    target, so an interrupted write never leaves a truncated file behind.
    """

    def __init__(self, atomic: bool = True):
        """Initialize the atomic writer.

        Args:
            atomic: Whether to go through a temporary file; plain writes otherwise
        """
        self.atomic = atomic

    def write(self, path: Path, content: str) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write

        Raises:
            OSError: If file operations fail
        """
        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)

        if not self.atomic:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )

        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            temp_path.replace(path)
        except Exception:
            # Clean up temp file on any error
            if temp_path.exists():
                temp_path.unlink()
            raise

    def write_if_not_exists(self, path: Path, content: str) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            FileExistsError: If the file already exists
        """
        if path.exists():
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")

        self.write(path, content)
