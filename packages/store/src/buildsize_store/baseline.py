"""Cached snapshot of the tracked base branch.

Reused across invocations until a merge into the base branch clears it, so
the base branch is rebuilt at most once per merge instead of once per PR
event.
"""

from __future__ import annotations

import logging

from buildsize_store.state import RepoState, atomic_write_json, read_json

logger = logging.getLogger(__name__)


class BaselineCache:
    def __init__(self, state: RepoState):
        self._state = state

    @property
    def path(self):
        return self._state.baseline_path

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> dict | None:
        """Return the cached snapshot document, or None when nothing is cached."""
        if not self.exists():
            return None
        return read_json(self.path)

    def save(self, data: dict) -> None:
        self._state.ensure()
        atomic_write_json(self.path, data)
        logger.debug("Saved baseline for %s", self._state.slug)

    def clear(self) -> bool:
        """Delete the cached baseline. Returns False if there was none."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Cleared baseline for %s", self._state.slug)
        return True
