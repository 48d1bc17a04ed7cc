"""Single selection from a list of choices."""

from __future__ import annotations

from typing import Any

from pi.prompts import cursor
from pi.prompts.errors import PromptConfigError
from pi.prompts.keys import KeyPress
from pi.prompts.objects import Choices, Separator
from pi.prompts.paginator import Paginator
from pi.prompts.style import POINTER, cyan, dim
from pi.prompts.widgets.base import BasePrompt

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")


def key_direction(key: KeyPress) -> str | None:
    """``"up"``/``"down"`` for arrow, vi and emacs style navigation keys."""
    if (key.name in UP_KEYS and not key.ctrl) or (key.ctrl and key.name == "p"):
        return "up"
    if (key.name in DOWN_KEYS and not key.ctrl) or (key.ctrl and key.name == "n"):
        return "down"
    return None


def increment_index(current: int, direction: str, length: int, loop: bool = True) -> int:
    """Move *current* one step in *direction* within ``range(length)``."""
    if length <= 0:
        return 0
    step = -1 if direction == "up" else 1
    if loop:
        return (current + step) % length
    return min(max(current + step, 0), length - 1)


def line_position(choices: Choices, selected: int) -> int:
    """Physical line of the *selected* real choice, counting separators."""
    real = choices.get_choice(selected)
    if real is None:
        return 0
    return choices.index_of(real)


def require_choices(opt: dict[str, Any]) -> Choices:
    choices = opt.get("choices")
    if not isinstance(choices, Choices) or not len(choices):
        raise PromptConfigError("You must provide a `choices` parameter")
    return choices


class ListPrompt(BasePrompt):
    """Pick one choice with the arrow keys (or a digit) and enter."""

    def __init__(self, question, rl, answers=None) -> None:
        super().__init__(question, rl, answers)
        self.choices = require_choices(self.opt)
        self.first_render = True
        self.selected = 0

        default = self.opt.get("default")
        if isinstance(default, int) and not isinstance(default, bool):
            if 0 <= default < self.choices.real_length:
                self.selected = default
        elif default is not None:
            values = self.choices.pluck("value")
            self.selected = values.index(default) if default in values else 0

        # The default is shown as the initial selection, not as a hint
        self.opt["default"] = None
        self.paginator = Paginator(self.screen, is_infinite=self.opt.get("loop", True) is not False)

    def _run(self) -> None:
        self._listen_for_submit(lambda line: self.current_value())
        self._listen("keypress", self._on_keypress)
        cursor.hide(self.rl)
        self.render()

    def current_value(self) -> Any:
        choice = self.choices.get_choice(self.selected)
        return choice.value if choice is not None else None

    def _on_keypress(self, sequence: str, key: KeyPress) -> None:
        # Navigation keys must not accumulate in the editor's line
        self.rl.line = ""
        self.rl.cursor = 0

        direction = key_direction(key)
        if direction is not None:
            self.selected = increment_index(
                self.selected, direction, self.choices.real_length, self.paginator.is_infinite
            )
        elif sequence.isdigit() and 0 < int(sequence) <= self.choices.real_length:
            self.selected = int(sequence) - 1
        self.render()

    def render(self, error: str | None = None) -> None:
        message = self.get_question()

        if self.first_render:
            message += dim("(Use arrow keys)")

        if self.status == "answered":
            choice = self.choices.get_choice(self.selected)
            message += cyan(str(choice.short if choice is not None else ""))
        else:
            choices_str = render_choices(self.choices, self.selected)
            position = line_position(self.choices, self.selected)
            message += "\n" + self.paginator.paginate(choices_str, position, self.opt.get("page_size"))

        self.first_render = False
        self.screen.render(message, self.error_line(error))

    def _on_end(self, value: Any) -> None:
        self.status = "answered"
        self.render()
        self.screen.done()
        cursor.show(self.rl)
        self._resolve(value)


def render_choices(choices: Choices, pointer: int) -> str:
    lines: list[str] = []
    separator_offset = 0
    for i, choice in enumerate(choices):
        if not Separator.exclude(choice):
            separator_offset += 1
            lines.append(f"  {choice}")
            continue

        if choice.disabled:
            separator_offset += 1
            reason = choice.disabled if isinstance(choice.disabled, str) else "Disabled"
            lines.append(f"  - {choice.name} ({reason})")
            continue

        is_selected = i - separator_offset == pointer
        line = (f"{POINTER} " if is_selected else "  ") + str(choice.name)
        lines.append(cyan(line) if is_selected else line)
    return "\n".join(lines)
