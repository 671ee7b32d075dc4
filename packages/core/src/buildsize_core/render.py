"""Render a diff snapshot as the markdown/HTML body of the PR comment."""

from __future__ import annotations

from buildsize_core.snapshot import Snapshot

PLACEHOLDER_BODY = "[calculating build size...]"
EMPTY_BODY = "_No build output found._"

_PAD = "&emsp;"
_INCREASE = ":arrow_up_small:"
_EXT_WIDTH = 5
_PATH_WIDTH = 60
_DELTA_WIDTH = 16


def _pad_end(text: str, width: int) -> str:
    return text + _PAD * max(width - len(text), 0)


def format_bytes_delta(delta: int) -> str:
    """``+1,234 bytes`` / ``-56 bytes`` / ``0 bytes``."""
    sign = "+" if delta > 0 else ""
    return f"{sign}{delta:,} bytes"


def _indicator(delta: int) -> str:
    return _INCREASE if delta > 0 else _PAD


def render_comment(diff_snapshot: Snapshot) -> str:
    """One collapsible block per extension, listing every file whose size changed."""
    if not diff_snapshot:
        return EMPTY_BODY

    lines: list[str] = []
    for ext, group in diff_snapshot.items():
        group_diff = group.diff or 0
        lines += [
            "<details>",
            "<summary>",
            "<code>",
            _pad_end(ext, _EXT_WIDTH),
            _pad_end(format_bytes_delta(group_diff), _DELTA_WIDTH),
            "</code>",
            _indicator(group_diff),
            "</summary>",
        ]
        for path, entry in group.files.items():
            diff = entry.diff or 0
            if diff == 0:
                continue
            lines += [
                "<code>",
                _pad_end(path, _PATH_WIDTH),
                _pad_end(format_bytes_delta(diff), _DELTA_WIDTH),
                "</code>",
                _indicator(diff),
                "<br/>",
            ]
        lines.append("</details>")
    return "\n".join(lines) + "\n"
