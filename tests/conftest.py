import io

import pytest

from pi.prompts.readline import ReadLine
from .virtual_terminal import VirtualTerminal


@pytest.fixture
def terminal():
    """An 80-column in-memory terminal."""
    return VirtualTerminal(columns=80)


@pytest.fixture
def rl(terminal):
    """A line editor writing to ``terminal`` with no real input behind it."""
    editor = ReadLine(input=io.StringIO(), output=terminal)
    yield editor
    editor.close()


@pytest.fixture(autouse=True)
def _no_env_overrides(monkeypatch):
    monkeypatch.delenv("CLI_WIDTH", raising=False)
    monkeypatch.delenv("PI_PROMPTS_SKIP_TTY_CHECKS", raising=False)
    monkeypatch.delenv("PI_PROMPTS_WRITE_LOG", raising=False)
