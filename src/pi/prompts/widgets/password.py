"""Hidden or masked text input."""

from __future__ import annotations

from typing import Any

from pi.prompts.keys import KeyPress
from pi.prompts.style import cyan, dim, italic
from pi.prompts.widgets.base import BasePrompt


def mask(value: Any, mask_char: Any) -> str:
    text = "" if value is None else str(value)
    char = mask_char if isinstance(mask_char, str) else "*"
    return char * len(text)


class PasswordPrompt(BasePrompt):
    """Like input, but never echoes the value.

    With ``mask`` (a character, or ``True`` for ``*``) each typed character
    is shown as the mask; without it nothing is shown. A default is
    dropped as soon as a key is pressed.
    """

    hide_default = True
    answer: Any = None

    def _run(self) -> None:
        self._listen_for_submit(self.filter_input)
        self._listen("keypress", self._on_keypress)
        self.render()

    def filter_input(self, line: str) -> Any:
        if not line:
            default = self.opt.get("default")
            return "" if default is None else default
        return line

    def render(self, error: str | None = None) -> None:
        message = self.get_question()
        mask_char = self.opt.get("mask")

        if self.status == "answered":
            message += cyan(mask(self.answer, mask_char)) if mask_char else italic(dim("[hidden]"))
        elif mask_char:
            message += mask(self.rl.line, mask_char)
        else:
            message += italic(dim("[input is hidden] "))

        self.screen.render(message, self.error_line(error))

    def _on_keypress(self, sequence: str, key: KeyPress) -> None:
        self.opt["default"] = None
        self.render()

    def _on_end(self, value: Any) -> None:
        self.answer = value
        self.status = "answered"
        self.render()
        self.screen.done()
        self._resolve(value)
