"""Multiple selection from a list of choices."""

from __future__ import annotations

from typing import Any

from pi.prompts import cursor
from pi.prompts.keys import KeyPress
from pi.prompts.objects import Choices, Separator
from pi.prompts.paginator import Paginator
from pi.prompts.style import POINTER, RADIO_OFF, RADIO_ON, bold, cyan, green
from pi.prompts.widgets.base import BasePrompt
from pi.prompts.widgets.list import increment_index, key_direction, line_position, require_choices


class CheckboxPrompt(BasePrompt):
    """Toggle any number of choices; the answer is the list of checked values.

    ``<space>`` toggles the pointed choice, ``a`` toggles all, ``i``
    inverts the selection and a digit toggles that choice. A list
    ``default`` pre-checks the choices with those values.
    """

    def __init__(self, question, rl, answers=None) -> None:
        super().__init__(question, rl, answers)
        self.choices = require_choices(self.opt)

        default = self.opt.get("default")
        if isinstance(default, (list, tuple, set)):
            for choice in self.choices.real_choices:
                if choice.value in default:
                    choice.checked = True

        self.pointer = 0
        self.selection: list[Any] = []
        self.space_key_pressed = False
        self.opt["default"] = None
        self.paginator = Paginator(self.screen, is_infinite=self.opt.get("loop", True) is not False)

    def _run(self) -> None:
        self._listen_for_submit(lambda line: self.current_value())
        self._listen("keypress", self._on_keypress)
        cursor.hide(self.rl)
        self.render()

    def current_value(self) -> list[Any]:
        checked = [c for c in self.choices.real_choices if c.checked]
        self.selection = [c.short for c in checked]
        return [c.value for c in checked]

    def _on_keypress(self, sequence: str, key: KeyPress) -> None:
        self.rl.line = ""
        self.rl.cursor = 0

        direction = key_direction(key)
        if direction is not None:
            self.pointer = increment_index(
                self.pointer, direction, self.choices.real_length, self.paginator.is_infinite
            )
        elif key.name == "space":
            self.space_key_pressed = True
            self.toggle_choice(self.pointer)
        elif key.name == "a" and not key.ctrl:
            self.toggle_all()
        elif key.name == "i" and not key.ctrl:
            self.invert_selection()
        elif sequence.isdigit() and 0 < int(sequence) <= self.choices.real_length:
            self.pointer = int(sequence) - 1
            self.toggle_choice(self.pointer)
        self.render()

    def toggle_choice(self, index: int) -> None:
        choice = self.choices.get_choice(index)
        if choice is not None:
            choice.checked = not choice.checked

    def toggle_all(self) -> None:
        should_check = any(not c.checked for c in self.choices.real_choices)
        for choice in self.choices.real_choices:
            choice.checked = should_check

    def invert_selection(self) -> None:
        for choice in self.choices.real_choices:
            choice.checked = not choice.checked

    def render(self, error: str | None = None) -> None:
        message = self.get_question()

        if not self.space_key_pressed and self.status != "answered":
            message += (
                f"(Press {cyan(bold('<space>'))} to select, {cyan(bold('<a>'))} to toggle all, "
                f"{cyan(bold('<i>'))} to invert selection)"
            )

        if self.status == "answered":
            message += cyan(", ".join(str(s) for s in self.selection))
        else:
            choices_str = render_checkbox_choices(self.choices, self.pointer)
            position = line_position(self.choices, self.pointer)
            message += "\n" + self.paginator.paginate(choices_str, position, self.opt.get("page_size"))

        self.screen.render(message, self.error_line(error))

    def _on_end(self, value: Any) -> None:
        self.status = "answered"
        self.space_key_pressed = True
        self.render()
        self.screen.done()
        cursor.show(self.rl)
        self._resolve(value)


def render_checkbox_choices(choices: Choices, pointer: int) -> str:
    lines: list[str] = []
    separator_offset = 0
    for i, choice in enumerate(choices):
        if not Separator.exclude(choice):
            separator_offset += 1
            lines.append(f" {choice}")
            continue

        if choice.disabled:
            separator_offset += 1
            reason = choice.disabled if isinstance(choice.disabled, str) else "Disabled"
            lines.append(f" - {choice.name} ({reason})")
            continue

        box = green(RADIO_ON) if choice.checked else RADIO_OFF
        line = f"{box} {choice.name}"
        if i - separator_offset == pointer:
            lines.append(cyan(POINTER + line))
        else:
            lines.append(" " + line)
    return "\n".join(lines)
