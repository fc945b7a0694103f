"""
Deferred emission of named types.

Each named type is emitted exactly once per output unit, no matter how many
times it is referenced, and reference cycles terminate because a name that
is pending or emitted is never queued again.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class EmissionScheduler:
    """Worklist of named types waiting to be emitted.

    Pending names are drained in the order they were first requested, so the
    output is the same from one run to the next.
    """

    def __init__(self):
        self._pending: dict[str, Callable[[], None]] = {}
        self._emitted: list[str] = []
        self._emitted_set: set[str] = set()

    def request(self, name: str, thunk: Callable[[], None]) -> bool:
        """Queue ``thunk`` to emit ``name`` unless it is already pending or emitted.

        Returns:
            True if the name was queued
        """
        if name in self._pending or name in self._emitted_set:
            return False
        logger.debug("Queued %s", name)
        self._pending[name] = thunk
        return True

    def drain(self) -> None:
        """Run pending thunks until none are left.

        A thunk may request further names; they are appended to the queue.
        The running name stays pending until its thunk returns so that
        self-references are no-ops.
        """
        while self._pending:
            name = next(iter(self._pending))
            self._pending[name]()
            del self._pending[name]
            self._emitted.append(name)
            self._emitted_set.add(name)

    def is_pending(self, name: str) -> bool:
        return name in self._pending

    def is_emitted(self, name: str) -> bool:
        return name in self._emitted_set

    @property
    def pending(self) -> list[str]:
        """Names waiting to be emitted, in queue order."""
        return list(self._pending)

    @property
    def emitted(self) -> list[str]:
        """Names emitted so far, in emission order."""
        return list(self._emitted)
