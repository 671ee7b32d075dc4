"""Create and update the build-size comment on a pull request.

Both operations return a CommentResult instead of raising: a failed call
must never leave an invalid id behind in the comment registry, so callers
check ``result.ok`` before persisting anything.

The client is lazy, so each operation is exactly one REST call: the repo,
issue and comment objects are never fetched before the POST or PATCH.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from github import Auth, Github, GithubException

logger = logging.getLogger(__name__)


@dataclass
class CommentResult:
    comment_id: int | None = None
    error: str | None = None
    status: int | None = None  # HTTP status of a failed call

    @property
    def ok(self) -> bool:
        return self.comment_id is not None and self.error is None

    @property
    def not_found(self) -> bool:
        return self.status in (404, 410)


class CommentClient:
    """Thin PyGithub wrapper for the one issue comment we maintain per PR."""

    def __init__(self, token: str):
        self._gh = Github(auth=Auth.Token(token), lazy=True)

    def _get_issue(self, repo_owner: str, repo_name: str, pr_number: int):
        return self._gh.get_repo(f"{repo_owner}/{repo_name}").get_issue(pr_number)

    def create(self, repo_owner: str, repo_name: str, body: str, pr_number: int) -> CommentResult:
        """POST a new comment on the PR's issue thread."""
        try:
            comment = self._get_issue(repo_owner, repo_name, pr_number).create_comment(body)
        except GithubException as e:
            logger.warning("Creating comment on %s/%s#%d failed: %s", repo_owner, repo_name, pr_number, e)
            return CommentResult(error=str(e), status=e.status)
        return _result(getattr(comment, "id", None), "create")

    def update(
        self,
        repo_owner: str,
        repo_name: str,
        body: str,
        comment_id: int,
        pr_number: int,
    ) -> CommentResult:
        """PATCH an existing comment by id."""
        try:
            comment = self._get_issue(repo_owner, repo_name, pr_number).get_comment(comment_id)
            comment.edit(body)
        except GithubException as e:
            logger.warning("Updating comment %s on %s/%s failed: %s", comment_id, repo_owner, repo_name, e)
            return CommentResult(error=str(e), status=e.status)
        return _result(getattr(comment, "id", None), "update")


def _result(comment_id, operation: str) -> CommentResult:
    if not isinstance(comment_id, int):
        logger.warning("GitHub %s response carried no comment id", operation)
        return CommentResult(error="response carried no comment id")
    logger.debug("Comment %s succeeded for id %s", operation, comment_id)
    return CommentResult(comment_id=comment_id)
