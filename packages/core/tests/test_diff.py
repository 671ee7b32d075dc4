"""Tests for compute_diff."""

import copy

from buildsize_core.diff import compute_diff
from buildsize_core.snapshot import ExtensionGroup, FileEntry


def group(**sizes):
    files = {name.replace("_", "."): FileEntry(size=size) for name, size in sizes.items()}
    return ExtensionGroup(total_size=sum(sizes.values()), files=files)


def test_changed_file_diff():
    result = compute_diff({".js": group(main_js=100)}, {".js": group(main_js=80)})
    assert result[".js"].files["main.js"].diff == 20
    assert result[".js"].files["main.js"].size == 100


def test_added_file_diff_is_full_size():
    result = compute_diff({".js": group(main_js=100, new_js=50)}, {".js": group(main_js=100)})
    assert result[".js"].files["new.js"].diff == 50


def test_removed_file_listed_with_negative_diff():
    result = compute_diff({".js": group(main_js=100)}, {".js": group(main_js=100, old_js=30)})
    removed = result[".js"].files["old.js"]
    assert removed.diff == -30
    assert removed.size is None


def test_removed_files_follow_new_files():
    result = compute_diff({".js": group(b_js=1)}, {".js": group(a_js=1, b_js=1)})
    assert list(result[".js"].files) == ["b.js", "a.js"]


def test_group_diff_is_total_delta():
    result = compute_diff({".js": group(main_js=100, new_js=50)}, {".js": group(main_js=80, old_js=30)})
    assert result[".js"].diff == 40
    assert result[".js"].total_size == 150


def test_extension_missing_from_baseline_counts_as_empty():
    result = compute_diff({".css": group(style_css=12)}, {".js": group(main_js=100)})
    assert result[".css"].diff == 12
    assert result[".css"].files["style.css"].diff == 12


def test_extension_only_in_baseline_not_reported():
    result = compute_diff({".js": group(main_js=1)}, {".map": group(main_map=9)})
    assert ".map" not in result


def test_empty_snapshots():
    assert compute_diff({}, {}) == {}
    assert compute_diff({}, {".js": group(main_js=1)}) == {}


def test_inputs_untouched_and_idempotent():
    new = {".js": group(main_js=100)}
    baseline = {".js": group(main_js=80, old_js=30)}
    new_before = copy.deepcopy(new)
    baseline_before = copy.deepcopy(baseline)

    first = compute_diff(new, baseline)
    second = compute_diff(new, baseline)

    assert first == second
    assert new == new_before
    assert baseline == baseline_before
