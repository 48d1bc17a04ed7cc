"""Built-in widgets, one per question ``type``."""

from pi.prompts.widgets.base import BasePrompt
from pi.prompts.widgets.checkbox import CheckboxPrompt
from pi.prompts.widgets.confirm import ConfirmPrompt
from pi.prompts.widgets.input import InputPrompt
from pi.prompts.widgets.list import ListPrompt
from pi.prompts.widgets.number import NumberPrompt
from pi.prompts.widgets.password import PasswordPrompt

__all__ = [
    "BasePrompt",
    "CheckboxPrompt",
    "ConfirmPrompt",
    "InputPrompt",
    "ListPrompt",
    "NumberPrompt",
    "PasswordPrompt",
]
