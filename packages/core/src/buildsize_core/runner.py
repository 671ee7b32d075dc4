"""Event dispatch and the compare-and-comment flow."""

from __future__ import annotations

import enum
import logging
import time

from buildsize_core.builder import ensure_clone, measure_build
from buildsize_core.config import remote_url
from buildsize_core.diff import compute_diff
from buildsize_core.event import PullRequestEvent
from buildsize_core.gh.comments import CommentClient, CommentResult
from buildsize_core.render import PLACEHOLDER_BODY, render_comment
from buildsize_core.snapshot import Snapshot, snapshot_from_dict, snapshot_to_dict
from buildsize_store.baseline import BaselineCache
from buildsize_store.registry import CommentRegistry
from buildsize_store.state import RepoState

logger = logging.getLogger(__name__)

_COMPARE_ACTIONS = ("opened", "synchronize")


class Outcome(str, enum.Enum):
    IGNORED = "ignored"
    COMMENTED = "commented"
    BASELINE_CLEARED = "baseline_cleared"
    NOOP = "noop"


class CommentError(RuntimeError):
    """Creating or updating the PR comment failed."""


def handle_event(
    event: PullRequestEvent,
    config: dict,
    client: CommentClient | None = None,
) -> Outcome:
    """Run the action for one pull-request event.

    Holds the repository lock for the whole invocation; concurrent events
    for the same repository wait for each other.
    """
    if event.action not in config["actions"]:
        logger.debug("Ignoring %s action", event.action)
        return Outcome.IGNORED
    logger.debug("Action %s on %s#%d", event.action, event.repo, event.pr_number)

    state = RepoState(config["data_dir"], event.repo_owner, event.repo_name)
    with state.lock():
        if event.action == "closed":
            return _handle_closed(event, config, state)
        if event.action in _COMPARE_ACTIONS:
            if client is None:
                client = CommentClient(config["github_token"])
            compare_and_comment(event, config, state, client)
            return Outcome.COMMENTED

    logger.debug("No handler for %s action", event.action)
    return Outcome.NOOP


def _handle_closed(event: PullRequestEvent, config: dict, state: RepoState) -> Outcome:
    # Any merge into the base branch invalidates the baseline, not only merges
    # of PRs this tool has commented on.
    if event.merged and event.base_ref == config["base_branch"]:
        if BaselineCache(state).clear():
            logger.info("PR #%d merged. Cleared %s baseline.", event.pr_number, config["base_branch"])
            return Outcome.BASELINE_CLEARED
    return Outcome.NOOP


def compare_and_comment(
    event: PullRequestEvent,
    config: dict,
    state: RepoState,
    client: CommentClient,
) -> Snapshot:
    """Build base and head, then publish the size diff on the PR.

    Returns the diff snapshot that was rendered into the comment.
    """
    start = time.monotonic()
    state.ensure()
    registry = CommentRegistry(state)
    registry.ensure()

    comment_id = _post_placeholder(event, registry, client)

    ensure_clone(
        remote_url(config, event.repo_owner, event.repo_name),
        state.git_path,
        timeout=config.get("git_timeout"),
    )
    baseline = ensure_baseline(state, config)
    head = measure_build(state.git_path, event.head_sha, config)

    logger.debug("Collecting diff")
    diff = compute_diff(head, baseline)
    _check(
        client.update(event.repo_owner, event.repo_name, render_comment(diff), comment_id, event.pr_number),
        "update",
    )
    logger.info("Updated comment %s", comment_id)
    logger.info("Runtime %.1fs", time.monotonic() - start)
    return diff


def ensure_baseline(state: RepoState, config: dict) -> Snapshot:
    """Load the cached base-branch snapshot, building and caching it on first use.

    An unreadable cache file is treated as missing and rebuilt.
    """
    cache = BaselineCache(state)
    try:
        data = cache.load()
        if data is not None:
            logger.debug("%s stats already exist", config["base_branch"])
            return snapshot_from_dict(data)
    except (ValueError, AttributeError) as e:
        logger.warning("Cached baseline for %s is unreadable (%s); rebuilding", state.slug, e)

    snapshot = measure_build(state.git_path, f"origin/{config['base_branch']}", config)
    cache.save(snapshot_to_dict(snapshot))
    return snapshot


def _post_placeholder(event: PullRequestEvent, registry: CommentRegistry, client: CommentClient) -> int:
    """Show progress on the PR right away; return the comment id to update later.

    A registered comment that no longer exists is replaced by a new one.
    """
    comment_id = registry.get(event.pr_number)
    if comment_id is not None:
        result = client.update(event.repo_owner, event.repo_name, PLACEHOLDER_BODY, comment_id, event.pr_number)
        if not result.not_found:
            _check(result, "update")
            return comment_id
        logger.info("Comment %s on %s#%d is gone; posting a new one", comment_id, event.repo, event.pr_number)

    logger.debug("Creating comment")
    result = _check(client.create(event.repo_owner, event.repo_name, PLACEHOLDER_BODY, event.pr_number), "create")
    registry.set(event.pr_number, result.comment_id)
    logger.debug("Created comment %s", result.comment_id)
    return result.comment_id


def _check(result: CommentResult, operation: str) -> CommentResult:
    if not result.ok:
        raise CommentError(f"Could not {operation} the build size comment: {result.error}")
    return result
