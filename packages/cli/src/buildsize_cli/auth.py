"""GitHub token resolution.

Resolution order (stops at first success):
  1. BUILDSIZE_GITHUB_TOKEN, for a token with more scope than the job's own
  2. GITHUB_TOKEN, injected by GitHub Actions
  3. `gh auth token`, so `buildsize run` works locally after `gh auth login`
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

TOKEN_ENV_VARS = ("BUILDSIZE_GITHUB_TOKEN", "GITHUB_TOKEN")


def _token_from_gh() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or None


def resolve_github_token() -> str | None:
    """Return a GitHub token, or None if no source has one. Never raises."""
    for name in TOKEN_ENV_VARS:
        token = os.environ.get(name)
        if token:
            logger.debug("Using GitHub token from %s.", name)
            return token

    token = _token_from_gh()
    if token:
        logger.debug("Resolved GitHub token via gh CLI session.")
    return token
