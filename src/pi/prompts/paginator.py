"""Windowing of long choice lists around the active line."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.prompts.style import dim
from pi.prompts.utils import break_lines

if TYPE_CHECKING:
    from pi.prompts.screen_manager import ScreenManager

MORE_CHOICES_HINT = "(Move up and down to reveal more choices)"


class Paginator:
    """Cut rendered choices down to *page_size* lines.

    With ``is_infinite`` the list wraps around and the active line drifts
    to the middle of the page; otherwise the page is clamped to the list
    ends.
    """

    def __init__(self, screen: ScreenManager | None = None, is_infinite: bool = True) -> None:
        self.pointer = 0
        self.last_index = 0
        self.screen = screen
        self.is_infinite = is_infinite

    def paginate(self, output: str, active: int, page_size: int | None = None) -> str:
        page_size = page_size or 7
        lines = output.split("\n")

        if self.screen is not None:
            broken = break_lines(lines, self.screen.normalized_cli_width())
            active = sum(len(chunks) for chunks in broken[:active])
            lines = [chunk for chunks in broken for chunk in chunks]

        if len(lines) <= page_size:
            return output

        if self.is_infinite:
            visible = self._infinite_lines(lines, active, page_size)
        else:
            visible = self._finite_lines(lines, active, page_size)
        self.last_index = active
        return "\n".join(visible) + "\n" + dim(MORE_CHOICES_HINT)

    def _finite_lines(self, lines: list[str], active: int, page_size: int) -> list[str]:
        top = active - page_size // 2
        if top < 0:
            top = 0
        elif top + page_size >= len(lines):
            top = len(lines) - page_size
        return lines[top : top + page_size]

    def _infinite_lines(self, lines: list[str], active: int, page_size: int) -> list[str]:
        middle = page_size // 2
        if self.pointer < middle and self.last_index < active and active - self.last_index < page_size:
            self.pointer = min(middle, self.pointer + active - self.last_index)

        # Three copies make the list loop; the active line sits at self.pointer
        looped = lines * 3
        top = max(0, active + len(lines) - self.pointer)
        return looped[top : top + page_size]
