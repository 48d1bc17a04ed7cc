"""Choice normalization for list-style widgets."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any, Callable

from pi.prompts.style import LINE, dim


class Separator:
    """A non-selectable line between choices."""

    type = "separator"

    def __init__(self, line: str | None = None) -> None:
        self.line = dim(line if line is not None else LINE * 15)

    def __str__(self) -> str:
        return self.line

    @staticmethod
    def exclude(obj: Any) -> bool:
        """Filter helper: ``False`` for separators, ``True`` for everything else."""
        return getattr(obj, "type", None) != "separator" and not (
            isinstance(obj, Mapping) and obj.get("type") == "separator"
        )


class Choice:
    """A selectable entry with ``name`` (display), ``value`` and ``short``.

    Missing fields fall back on each other: ``name`` on ``value``,
    ``value`` on ``name``, ``short`` on ``name``. Extra mapping keys become
    attributes.
    """

    def __new__(cls, val: Any = None, answers: Mapping[str, Any] | None = None):
        if isinstance(val, (Choice, Separator)) or (isinstance(val, Mapping) and val.get("type") == "separator"):
            return val
        return super().__new__(cls)

    def __init__(self, val: Any = None, answers: Mapping[str, Any] | None = None) -> None:
        if isinstance(val, Choice):
            return

        if isinstance(val, Mapping):
            data = dict(val)
            for key, value in data.items():
                setattr(self, key, value)
            self.name: Any = data.get("name", data.get("value"))
            self.value: Any = data.get("value", self.name)
            self.short: Any = data.get("short", self.name)
        else:
            self.name = val
            self.value = val
            self.short = val

        disabled = getattr(self, "disabled", False)
        if callable(disabled):
            self.disabled = disabled(answers or {})
        else:
            self.disabled = disabled
        self.checked = bool(getattr(self, "checked", False))

    def __repr__(self) -> str:
        return f"Choice(name={self.name!r}, value={self.value!r})"


class Choices:
    """Ordered collection of :class:`Choice` and :class:`Separator` entries."""

    def __init__(self, choices: list[Any], answers: Mapping[str, Any] | None = None) -> None:
        self.answers = answers
        self.choices: list[Any] = [Choice(val, answers) for val in choices]

    @property
    def real_choices(self) -> list[Choice]:
        """Selectable choices: separators and disabled entries are skipped."""
        return [c for c in self.choices if Separator.exclude(c) and not c.disabled]

    @property
    def real_length(self) -> int:
        return len(self.real_choices)

    def get_choice(self, selector: int) -> Choice | None:
        """Selectable choice at *selector*, counting only real choices."""
        real = self.real_choices
        if 0 <= selector < len(real):
            return real[selector]
        return None

    def get(self, selector: int) -> Any:
        """Entry at *selector* in the full list, separators included."""
        if 0 <= selector < len(self.choices):
            return self.choices[selector]
        return None

    def index_of(self, choice: Any) -> int:
        return self.choices.index(choice)

    def where(self, predicate: Callable[[Choice], bool]) -> list[Choice]:
        return [c for c in self.real_choices if predicate(c)]

    def pluck(self, attr: str) -> list[Any]:
        return [getattr(c, attr, None) for c in self.real_choices]

    def push(self, *values: Any) -> None:
        self.choices.extend(Choice(val, self.answers) for val in values)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.choices)

    def __len__(self) -> int:
        return len(self.choices)
