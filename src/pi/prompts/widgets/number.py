"""Numeric input."""

from __future__ import annotations

import math
import re
from typing import Any

from pi.prompts.resolvers import call_async
from pi.prompts.widgets.input import InputPrompt

_NUMBER_RE = re.compile(r"^(-?\d+|-?\d+\.\d*|-?\d*\.\d+)(e[+-]?\d+)?$", re.IGNORECASE)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isnan(value)


class NumberPrompt(InputPrompt):
    """Input parsed as ``int`` or ``float``; anything else is ``nan``."""

    def __init__(self, question, rl, answers=None) -> None:
        super().__init__(question, rl, answers)
        validate = self.opt["validate"]

        async def validate_number(value: Any, answers: Any = None) -> Any:
            if not _is_number(value):
                return False
            return await call_async(validate, value, answers)

        self.opt["validate"] = validate_number

    def filter_input(self, line: str) -> Any:
        text = line.strip() if line else ""
        match = _NUMBER_RE.match(text)
        if match:
            number = match.group(0)
            if re.fullmatch(r"-?\d+", number):
                return int(number)
            return float(number)
        default = self.opt.get("default")
        return math.nan if default is None else default
