"""Tests for the PR comment renderer."""

import pytest

from buildsize_core.render import EMPTY_BODY, format_bytes_delta, render_comment
from buildsize_core.snapshot import ExtensionGroup, FileEntry


@pytest.mark.parametrize(
    "delta,expected",
    [(1234, "+1,234 bytes"), (-56, "-56 bytes"), (0, "0 bytes"), (-1234567, "-1,234,567 bytes")],
)
def test_format_bytes_delta(delta, expected):
    assert format_bytes_delta(delta) == expected


def test_group_header_with_increase():
    diff = {".js": ExtensionGroup(total_size=120, files={"main.js": FileEntry(size=120, diff=20)}, diff=20)}

    body = render_comment(diff)

    assert body.startswith("<details>\n<summary>\n<code>\n.js&emsp;&emsp;\n")
    assert "+20 bytes" + "&emsp;" * 7 in body
    assert body.count(":arrow_up_small:") == 2
    assert body.rstrip().endswith("</details>")


def test_file_line_padded_to_column():
    diff = {".js": ExtensionGroup(total_size=1, files={"a.js": FileEntry(size=1, diff=-3)}, diff=-3)}

    body = render_comment(diff)

    assert "a.js" + "&emsp;" * 56 in body
    assert "-3 bytes" in body
    assert ":arrow_up_small:" not in body


def test_zero_diff_files_omitted():
    diff = {
        ".css": ExtensionGroup(
            total_size=10,
            files={"same.css": FileEntry(size=10, diff=0)},
            diff=0,
        )
    }

    body = render_comment(diff)

    assert "same.css" not in body
    assert "<br/>" not in body
    assert "0 bytes" in body
    assert ":arrow_up_small:" not in body


def test_removed_file_shown():
    diff = {
        ".js": ExtensionGroup(
            total_size=0,
            files={"gone.js": FileEntry(diff=-30)},
            diff=-30,
        )
    }
    assert "gone.js" in render_comment(diff)


def test_one_block_per_extension_in_order():
    diff = {
        ".js": ExtensionGroup(total_size=1, files={}, diff=1),
        ".css": ExtensionGroup(total_size=1, files={}, diff=0),
    }

    body = render_comment(diff)

    assert body.count("<details>") == 2
    assert body.index(".js") < body.index(".css")


def test_no_leading_whitespace():
    diff = {".js": ExtensionGroup(total_size=5, files={"a.js": FileEntry(size=5, diff=5)}, diff=5)}
    assert all(line == line.lstrip() for line in render_comment(diff).splitlines())


def test_deterministic():
    diff = {".js": ExtensionGroup(total_size=5, files={"a.js": FileEntry(size=5, diff=5)}, diff=5)}
    assert render_comment(diff) == render_comment(diff)


def test_empty_snapshot():
    assert render_comment({}) == EMPTY_BODY
