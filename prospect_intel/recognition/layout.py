"""Line and block layout helpers shared by the validator and the coordinator."""

import re

_MUTUAL_LINE_RE = re.compile(r"\d[\d,.]*\s*[km]?\s*mutual\s+(friend|connection)", re.IGNORECASE)
_CONTINUATION_RE = re.compile(r"(\.\.\.|…)\s*(see more)?\s*$|^\s*posted\b", re.IGNORECASE)


def split_lines(text: str) -> list[str]:
    """Split text into stripped lines, keeping blank lines as separators."""
    return [line.strip() for line in text.splitlines()]


def group_lines(lines: list[str]) -> list[tuple[int, int]]:
    """Group lines into contiguous (start, end) spans.

    A block ends at a blank line, after a mutual-connections count line, and
    after a truncated "..." / "posted" line.
    """
    spans: list[tuple[int, int]] = []
    start: int | None = None
    for index, line in enumerate(lines):
        if not line:
            if start is not None:
                spans.append((start, index))
                start = None
            continue
        if start is None:
            start = index
        if _MUTUAL_LINE_RE.search(line) or _CONTINUATION_RE.search(line):
            spans.append((start, index + 1))
            start = None
    if start is not None:
        spans.append((start, len(lines)))
    return spans


def align_blocks(lines: list[str], blocks: list[list[str]]) -> list[tuple[int, int]]:
    """Map text blocks onto contiguous spans of ``lines``.

    Falls back to :func:`group_lines` when the blocks do not line up with the
    line sequence in order.
    """
    if not blocks:
        return group_lines(lines)

    spans: list[tuple[int, int]] = []
    cursor = 0
    for block in blocks:
        wanted = [line.strip() for line in block if line.strip()]
        if not wanted:
            continue
        start = _find_run(lines, wanted, cursor)
        if start is None:
            return group_lines(lines)
        end = start + len(wanted)
        spans.append((start, end))
        cursor = end
    return spans


def _find_run(lines: list[str], wanted: list[str], cursor: int) -> int | None:
    for start in range(cursor, len(lines) - len(wanted) + 1):
        if lines[start : start + len(wanted)] == wanted:
            return start
    return None
