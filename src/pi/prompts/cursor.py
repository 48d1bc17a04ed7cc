"""Relative cursor motion and line clearing on a line editor's output.

Every helper writes standard ANSI control sequences through
``rl.output.write`` so the motion goes wherever the prompt is being drawn.
"""

from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_CURSOR_UP_FMT = "\x1b[{}A"
_CURSOR_DOWN_FMT = "\x1b[{}B"
_CURSOR_FORWARD_FMT = "\x1b[{}C"
_CURSOR_BACKWARD_FMT = "\x1b[{}D"
_CURSOR_LINE_START = "\x1b[G"
_ERASE_LINE = "\x1b[2K"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"


def erase_lines(count: int) -> str:
    """Sequence erasing *count* lines, from the current one upward.

    Leaves the cursor at column 0 of the topmost erased line.
    """
    if count <= 0:
        return ""
    parts: list[str] = []
    for i in range(count):
        parts.append(_ERASE_LINE)
        if i < count - 1:
            parts.append(_CURSOR_UP_FMT.format(1))
    parts.append(_CURSOR_LINE_START)
    return "".join(parts)


def left(rl: Any, x: int) -> None:
    """Move the cursor *x* columns to the left."""
    if x > 0:
        rl.output.write(_CURSOR_BACKWARD_FMT.format(x))


def right(rl: Any, x: int) -> None:
    """Move the cursor *x* columns to the right."""
    if x > 0:
        rl.output.write(_CURSOR_FORWARD_FMT.format(x))


def up(rl: Any, x: int) -> None:
    """Move the cursor *x* lines up."""
    if x > 0:
        rl.output.write(_CURSOR_UP_FMT.format(x))


def down(rl: Any, x: int) -> None:
    """Move the cursor *x* lines down."""
    if x > 0:
        rl.output.write(_CURSOR_DOWN_FMT.format(x))


def clear_line(rl: Any, count: int) -> None:
    """Clear *count* lines, starting at the cursor and going up."""
    rl.output.write(erase_lines(count))


def hide(rl: Any) -> None:
    rl.output.write(_HIDE_CURSOR)


def show(rl: Any) -> None:
    rl.output.write(_SHOW_CURSOR)
