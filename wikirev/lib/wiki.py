"""Expected-revision checks for wiki edits."""

from __future__ import annotations

import difflib
from collections.abc import Mapping
from typing import Any

from wikirev.lib.errors import WikiChangedError

_INDEX_RULE = "=" * 67
_NO_NEWLINE = "\\ No newline at end of file\n"


def _as_lines(value: Any) -> list[str]:
    # Line endings are kept so trailing newline and CRLF changes still diff
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [f"{item}\n" for item in value]
    return str(value).splitlines(keepends=True)


def format_field_diff(field: str, expected: Any, current: Any) -> str:
    """Render one mismatched field as a unified diff of expected vs current.

    A diff line whose source line has no terminating newline is followed by
    a ``\\ No newline at end of file`` marker.
    """
    old, new = _as_lines(expected), _as_lines(current)
    if old == new:
        # Values that only differ in type, e.g. 1 and "1"
        old, new = [f"{expected!r}\n"], [f"{current!r}\n"]

    out = [f"Index: {field}\n", f"{_INDEX_RULE}\n"]
    for line in difflib.unified_diff(
        old,
        new,
        fromfile=field,
        tofile=field,
        fromfiledate="expected",
        tofiledate="current",
    ):
        if line.endswith("\n"):
            out.append(line)
        else:
            out.append(f"{line}\n{_NO_NEWLINE}")
    return "".join(out)


def diff_expected(expected: Mapping[str, Any], current: Mapping[str, Any]) -> list[str]:
    """Return one diff block per field whose expected value is stale.

    Fields missing from ``expected`` or set to ``None`` are not checked.
    """
    diffs = []
    for field, value in expected.items():
        if value is None:
            continue
        actual = current.get(field)
        if value != actual:
            diffs.append(format_field_diff(field, value, actual))
    return diffs


def match_expected(expected: Mapping[str, Any], current: Mapping[str, Any]) -> None:
    """Raise :class:`WikiChangedError` if ``expected`` disagrees with ``current``."""
    diffs = diff_expected(expected, current)
    if diffs:
        raise WikiChangedError("\n".join(diffs))
