"""Size deltas between a new build and the cached baseline."""

from __future__ import annotations

from buildsize_core.snapshot import ExtensionGroup, FileEntry, Snapshot

_EMPTY_GROUP = ExtensionGroup()


def compute_diff(new: Snapshot, baseline: Snapshot) -> Snapshot:
    """Return a copy of ``new`` with ``diff`` filled in on every group and file.

    Files only present in the baseline are added with a negative diff and no
    size. An extension missing from the baseline counts as an empty group.
    Extensions present only in the baseline are not reported.
    """
    result: Snapshot = {}
    for ext, group in new.items():
        base_group = baseline.get(ext, _EMPTY_GROUP)

        files: dict[str, FileEntry] = {}
        for path, entry in group.files.items():
            base_entry = base_group.files.get(path)
            old_size = base_entry.size if base_entry is not None and base_entry.size is not None else 0
            files[path] = FileEntry(size=entry.size, diff=(entry.size or 0) - old_size)

        for path, base_entry in base_group.files.items():
            if path in group.files:
                continue
            files[path] = FileEntry(diff=-(base_entry.size or 0))

        result[ext] = ExtensionGroup(
            total_size=group.total_size,
            files=files,
            diff=group.total_size - base_group.total_size,
        )
    return result
