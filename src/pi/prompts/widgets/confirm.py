"""Yes/no confirmation."""

from __future__ import annotations

import re
from typing import Any

from pi.prompts.style import cyan
from pi.prompts.widgets.base import BasePrompt

_YES_RE = re.compile(r"^(y(es)?|true)$", re.IGNORECASE)


class ConfirmPrompt(BasePrompt):
    """Answers ``True`` or ``False``.

    ``y``/``yes``/``true`` mean yes, anything else typed means no, and an
    empty line takes the default (yes unless ``default`` is ``False``).
    """

    def __init__(self, question, rl, answers=None) -> None:
        super().__init__(question, rl, answers)
        default = self.opt.get("default")
        self.raw_default = default is not False
        self.opt["default"] = "Y/n" if self.raw_default else "y/N"

    def _run(self) -> None:
        self._listen_for_submit(self.filter_input)
        self._listen("keypress", self._on_keypress)
        self.render()

    def filter_input(self, line: str) -> bool:
        text = line.strip() if line else ""
        if not text:
            return self.raw_default
        return bool(_YES_RE.match(text))

    def render(self, error: str | None = None, answer: Any = None) -> None:
        message = self.get_question()
        if isinstance(answer, bool):
            message += cyan("Yes" if answer else "No")
        else:
            message += self.rl.line
        self.screen.render(message, self.error_line(error))

    def _on_end(self, value: Any) -> None:
        self.status = "answered"
        self.render(answer=value)
        self.screen.done()
        self._resolve(value)
