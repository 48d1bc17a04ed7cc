"""In-place repainting of a prompt's multi-line output.

The terminal offers no canvas, only relative cursor moves and line clears,
so every render first erases exactly the footprint of the previous one.
That footprint lives in :class:`RenderState`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pi.prompts import cursor
from pi.prompts.utils import cli_width, force_line_return, height, last_line, strip_ansi, visible_width


@dataclass
class RenderState:
    """Footprint of the last render.

    ``height`` is the number of lines written, ``extra_lines_under_prompt``
    the number of those lines below the cursor, and ``width`` the terminal
    width used for wrapping.
    """

    height: int = 0
    extra_lines_under_prompt: int = 0
    width: int = 0


class ScreenManager:
    """Owns the screen region of one prompt session drawn through *rl*."""

    def __init__(self, rl: Any) -> None:
        self.rl = rl
        self.state = RenderState()

    @property
    def height(self) -> int:
        return self.state.height

    @property
    def extra_lines_under_prompt(self) -> int:
        return self.state.extra_lines_under_prompt

    def render(self, content: str, bottom_content: str | None = None) -> None:
        """Replace the previous output with *content* (and *bottom_content* below it).

        The cursor ends on the last line of *content*, where the line
        editor's own cursor would be.
        """
        self.rl.output.unmute()
        self.clean(self.state.extra_lines_under_prompt)

        # Write message to screen and set the prompt to control backspace
        prompt_line = last_line(content)
        raw_prompt_line = strip_ansi(prompt_line)

        # Only the length of rl.line can be trusted (the password prompt masks it)
        prompt = raw_prompt_line
        if self.rl.line:
            prompt = prompt[: -len(self.rl.line)]

        self.rl.set_prompt(prompt)

        # set_prompt changes the cursor position; read it afterwards
        cursor_pos = self.rl.get_cursor_pos()
        width = self.normalized_cli_width()

        content = force_line_return(content, width)
        if bottom_content:
            bottom_content = force_line_return(bottom_content, width)

        # A prompt line filling whole rows leaves the terminal in its pending
        # wrap state; force the line return so the cursor is on the next row
        prompt_line_width = visible_width(raw_prompt_line)
        if prompt_line_width and prompt_line_width % width == 0:
            content += "\n"

        full_content = content + ("\n" + bottom_content if bottom_content else "")
        self.rl.output.write(full_content)

        # Rows of the prompt line below the cursor count as bottom content
        prompt_line_up_diff = prompt_line_width // width - cursor_pos.rows
        bottom_content_height = prompt_line_up_diff + (height(bottom_content) if bottom_content else 0)
        cursor.up(self.rl, bottom_content_height)

        # Reset the cursor to the beginning of the line, then adjust right
        cursor.left(self.rl, visible_width(last_line(full_content)))
        cursor.right(self.rl, cursor_pos.cols)

        self.state = RenderState(
            height=height(full_content),
            extra_lines_under_prompt=bottom_content_height,
            width=width,
        )

        self.rl.output.mute()

    def clean(self, extra_lines: int) -> None:
        """Erase the previous render, starting *extra_lines* below the cursor."""
        cursor.down(self.rl, extra_lines)
        cursor.clear_line(self.rl, self.state.height)

    def done(self) -> None:
        self.rl.set_prompt("")
        self.rl.output.unmute()
        self.rl.output.write("\n")

    def release_cursor(self) -> None:
        """Move below trailing content so later output does not overwrite it."""
        cursor.down(self.rl, self.state.extra_lines_under_prompt)

    def normalized_cli_width(self) -> int:
        return cli_width(self.rl.output)
