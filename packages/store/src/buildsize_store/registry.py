"""PR number -> comment id mapping, one JSON file per repository.

Entries are never removed: a reopened PR keeps updating its original comment.
"""

from __future__ import annotations

import logging

from buildsize_store.state import RepoState, atomic_write_json, read_json

logger = logging.getLogger(__name__)


class CommentRegistry:
    def __init__(self, state: RepoState):
        self._state = state

    @property
    def path(self):
        return self._state.comments_path

    def ensure(self) -> None:
        """Create an empty registry file if none exists yet."""
        if not self.path.exists():
            self._state.ensure()
            atomic_write_json(self.path, {})

    def all(self) -> dict[int, int]:
        if not self.path.exists():
            return {}
        return {int(pr): comment_id for pr, comment_id in read_json(self.path).items()}

    def get(self, pr_number: int) -> int | None:
        return self.all().get(pr_number)

    def set(self, pr_number: int, comment_id: int) -> None:
        """Record the comment id for a PR.

        Read-modify-write; callers serialize through RepoState.lock().
        """
        mapping = {str(pr): cid for pr, cid in self.all().items()}
        mapping[str(pr_number)] = comment_id
        self._state.ensure()
        atomic_write_json(self.path, mapping)
        logger.debug("Registered comment %s for %s#%d", comment_id, self._state.slug, pr_number)
