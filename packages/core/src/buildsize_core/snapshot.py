"""Build-output snapshots.

A snapshot records the byte size of every file in a build output directory,
grouped by extension:

    {".js": ExtensionGroup(total_size=1234, files={"main.[hash].js": FileEntry(size=1234)})}

Content hashes in file names are replaced with ``[hash]`` so the same logical
file compares equal across builds.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

HASH_PLACEHOLDER = "[hash]"

# A whole hex run of 20-64 characters; the lookarounds keep longer runs intact.
_HASH_RE = re.compile(r"(?<![0-9a-f])[0-9a-f]{20,64}(?![0-9a-f])", re.IGNORECASE)


@dataclass
class FileEntry:
    """Size of one output file. ``size`` is None for files removed since the baseline."""

    size: int | None = None
    diff: int | None = None


@dataclass
class ExtensionGroup:
    total_size: int = 0
    files: dict[str, FileEntry] = field(default_factory=dict)
    diff: int | None = None


Snapshot = dict[str, ExtensionGroup]


def normalize_path(rel_path: str) -> str:
    return _HASH_RE.sub(HASH_PLACEHOLDER, rel_path)


def file_extension(name: str) -> str:
    """Return the extension including the dot, or "" (dotfiles have none)."""
    return os.path.splitext(os.path.basename(name))[1]


def take_snapshot(root: str | Path) -> Snapshot:
    """Walk ``root`` and return the sizes of all regular files beneath it."""
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Output directory not found: {root}")

    snapshot: Snapshot = {}
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if not path.is_file():
                continue
            size = path.stat().st_size
            group = snapshot.setdefault(file_extension(filename), ExtensionGroup())
            key = normalize_path(path.relative_to(root).as_posix())
            # Files differing only by hash collapse into one entry.
            entry = group.files.setdefault(key, FileEntry(size=0))
            entry.size += size
            group.total_size += size

    logger.debug(
        "Snapshot of %s: %d extension(s), %d file(s)",
        root,
        len(snapshot),
        sum(len(g.files) for g in snapshot.values()),
    )
    return snapshot


def snapshot_to_dict(snapshot: Snapshot) -> dict:
    """Encode a snapshot in the JSON shape stored in ``master.json``."""
    result = {}
    for ext, group in snapshot.items():
        files = {}
        for path, entry in group.files.items():
            encoded = {}
            if entry.size is not None:
                encoded["size"] = entry.size
            if entry.diff is not None:
                encoded["diff"] = entry.diff
            files[path] = encoded
        encoded_group = {"totalSize": group.total_size, "files": files}
        if group.diff is not None:
            encoded_group["diff"] = group.diff
        result[ext] = encoded_group
    return result


def snapshot_from_dict(data: dict) -> Snapshot:
    return {
        ext: ExtensionGroup(
            total_size=group.get("totalSize", 0),
            files={
                path: FileEntry(size=entry.get("size"), diff=entry.get("diff"))
                for path, entry in group.get("files", {}).items()
            },
            diff=group.get("diff"),
        )
        for ext, group in data.items()
    }
