"""Per-repository persisted state under ``<data_dir>/<owner>/<name>/``.

    master.json    cached baseline snapshot (absent until the first build)
    comments.json  PR number -> comment id
    git/           persistent clone of the tracked repository
    .lock          flock target serializing invocations for this repository

Decoupled from buildsize_core: files here hold plain JSON documents, and the
core converts them to snapshots.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def atomic_write_json(path: Path, data) -> None:
    """Write JSON to a sibling temp file, then replace ``path`` in one step."""
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            json.dump(data, f)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def read_json(path: Path):
    with open(path) as f:
        return json.load(f)


class RepoState:
    """Paths and locking for one tracked repository."""

    def __init__(self, data_dir: str | Path, owner: str, name: str):
        self.owner = owner
        self.name = name
        self.repo_path = Path(data_dir) / owner / name

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def baseline_path(self) -> Path:
        return self.repo_path / "master.json"

    @property
    def comments_path(self) -> Path:
        return self.repo_path / "comments.json"

    @property
    def git_path(self) -> Path:
        return self.repo_path / "git"

    @property
    def lock_path(self) -> Path:
        return self.repo_path / ".lock"

    def ensure(self) -> None:
        self.repo_path.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold an exclusive lock on this repository's state for the block.

        Blocks until any other invocation for the same repository releases it.
        """
        self.ensure()
        with open(self.lock_path, "w") as f:
            logger.debug("Waiting for lock on %s", self.slug)
            fcntl.flock(f, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(f, fcntl.LOCK_UN)
