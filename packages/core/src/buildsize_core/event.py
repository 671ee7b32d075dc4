from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


@dataclass
class PullRequestEvent:
    """The fields of a GitHub ``pull_request`` webhook payload we act on."""

    action: str
    repo_owner: str = ""
    repo_name: str = ""
    pr_number: int = 0
    head_sha: str = ""
    base_ref: str = ""
    merged: bool = False

    @property
    def repo(self) -> str:
        return f"{self.repo_owner}/{self.repo_name}"

    @classmethod
    def from_payload(cls, payload: dict, monitored_actions: list[str] | None = None) -> PullRequestEvent:
        """Parse a payload dict.

        Only ``action`` is required when the action is not monitored, so an
        unrelated event never fails to parse.
        """
        action = _require(payload, "action")
        if monitored_actions is not None and action not in monitored_actions:
            return cls(action=action)
        return cls(
            action=action,
            repo_owner=_require(payload, "repository", "owner", "login"),
            repo_name=_require(payload, "repository", "name"),
            pr_number=int(_require(payload, "pull_request", "number")),
            head_sha=_require(payload, "pull_request", "head", "sha"),
            base_ref=_require(payload, "pull_request", "base", "ref"),
            merged=bool(payload["pull_request"].get("merged") or False),
        )


def _require(payload: dict, *keys: str):
    value = payload
    for i, key in enumerate(keys):
        if not isinstance(value, dict) or key not in value:
            raise ValueError(f"Event payload is missing '{'.'.join(keys[: i + 1])}'")
        value = value[key]
    return value


def load_event(path: str | Path, monitored_actions: list[str] | None = None) -> PullRequestEvent:
    """Read and parse the event payload file."""
    with open(path) as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"Event payload in {path} is not a JSON object")
    return PullRequestEvent.from_payload(payload, monitored_actions)
