"""Build a repository checkout at a given revision and snapshot its output.

The working copy is shared between builds and mutated in place (fetch, clean,
checkout), so callers must hold the repository lock for the whole build.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path

from buildsize_core.snapshot import Snapshot, take_snapshot

logger = logging.getLogger(__name__)

_STDERR_TAIL = 2000


class BuildError(RuntimeError):
    """A git, install or build step failed."""

    def __init__(self, command: list[str], returncode: int | None, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        if returncode is None:
            msg = f"`{shlex.join(command)}` timed out"
        else:
            msg = f"`{shlex.join(command)}` failed with exit status {returncode}"
        if stderr:
            msg += f":\n{stderr[-_STDERR_TAIL:]}"
        super().__init__(msg)


def _run(command: list[str], cwd: str | Path | None = None, timeout: float | None = None) -> str:
    """Run one command to completion, raising BuildError on failure or timeout."""
    logger.debug("Running %s (cwd=%s)", shlex.join(command), cwd)
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise BuildError(command, None, str(e.stderr or "")) from e
    if result.returncode != 0:
        raise BuildError(command, result.returncode, result.stderr)
    return result.stdout


def ensure_clone(remote: str, git_path: str | Path, timeout: float | None = None) -> None:
    """Clone ``remote`` into ``git_path`` unless a checkout is already there."""
    git_path = Path(git_path)
    if (git_path / ".git").exists():
        logger.debug("Repository already cloned at %s", git_path)
        return
    git_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("Cloning %s", remote)
    _run(["git", "clone", remote, str(git_path)], timeout=timeout)


def measure_build(git_path: str | Path, ref: str, config: dict) -> Snapshot:
    """Check out ``ref``, install and build, then snapshot the output directory.

    ``ref`` may be a remote branch (``origin/master``) or a commit sha. Any
    failing step raises BuildError; no partial snapshot is returned. The
    output directory is deleted before building, so it must lie inside the
    checkout.
    """
    git_path = Path(git_path)
    output_dir = git_path / config["output_dir"]
    if git_path.resolve() not in output_dir.resolve().parents:
        raise ValueError(f"output_dir must be a directory inside the checkout, got {config['output_dir']!r}")

    git_timeout = config.get("git_timeout")
    build_timeout = config.get("build_timeout")

    logger.info("Measuring build of %s", ref)
    _run(["git", "fetch"], cwd=git_path, timeout=git_timeout)

    logger.debug("Cleaning repository")
    _run(["git", "clean", "-f"], cwd=git_path, timeout=git_timeout)

    logger.debug("Checking out %s", ref)
    _run(["git", "checkout", ref], cwd=git_path, timeout=git_timeout)

    # Build output is usually gitignored, so clean leaves it behind.
    if output_dir.is_dir():
        logger.debug("Removing previous output at %s", output_dir)
        shutil.rmtree(output_dir)

    for key in ("install_command", "build_command"):
        _run(shlex.split(config[key]), cwd=git_path, timeout=build_timeout)

    if not output_dir.is_dir():
        raise BuildError(shlex.split(config["build_command"]), 0, f"no output directory at {output_dir}")

    logger.debug("Collecting stats")
    return take_snapshot(output_dir)
