"""Free text input."""

from __future__ import annotations

from typing import Any

from pi.prompts.style import cyan
from pi.prompts.widgets.base import BasePrompt


class InputPrompt(BasePrompt):
    """Single line of text; an empty line takes the default.

    An optional ``transformer(value, answers, {"is_final": bool})`` changes
    how the value is displayed without changing the answer.
    """

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
        is_final = self.status == "answered"
        value = self.answer if is_final else self.rl.line

        message = self.get_question()
        transformer = self.opt.get("transformer")
        if transformer is not None:
            message += str(transformer(value, self.answers, {"is_final": is_final}))
        elif is_final:
            message += cyan(str(value))
        else:
            message += value

        self.screen.render(message, self.error_line(error))

    def _on_end(self, value: Any) -> None:
        self.answer = value
        self.status = "answered"
        self.render()
        self.screen.done()
        self._resolve(value)

    def _on_error(self, value: Any, is_valid: Any) -> None:
        # The editor cleared the line on submit; give the text back unless
        # more submitted lines are already waiting
        if not self._queued_lines:
            text = self.last_line
            self.rl.line += text
            self.rl.cursor += len(text)
        super()._on_error(value, is_valid)
