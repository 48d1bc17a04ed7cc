"""Tests for the built-in widgets driven through a line editor."""

from __future__ import annotations

import asyncio
import math

import pytest

from pi.prompts.errors import PromptConfigError
from pi.prompts.objects import Separator
from pi.prompts.widgets import (
    BasePrompt,
    CheckboxPrompt,
    ConfirmPrompt,
    InputPrompt,
    ListPrompt,
    NumberPrompt,
    PasswordPrompt,
)
from pi.prompts.widgets.list import increment_index
from pi.prompts.widgets.password import mask

KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_ENTER = "\r"
CTRL_U = "\x15"


async def settle() -> None:
    """Let scheduled callbacks and submission tasks run."""
    for _ in range(10):
        await asyncio.sleep(0)


async def start(prompt: BasePrompt) -> asyncio.Future:
    task = asyncio.ensure_future(prompt.run())
    await settle()
    return task


# ---------------------------------------------------------------------------
# BasePrompt
# ---------------------------------------------------------------------------


class TestBasePrompt:
    def test_question_is_copied(self, rl) -> None:
        question = {"type": "input", "name": "q", "message": "Q"}
        prompt = InputPrompt(question, rl)
        prompt.opt["message"] = "changed"
        assert question["message"] == "Q"
        assert "validate" not in question

    def test_message_defaults_to_name(self, rl) -> None:
        prompt = InputPrompt({"type": "input", "name": "color"}, rl)
        assert prompt.opt["message"] == "color:"

    def test_missing_name(self, rl) -> None:
        with pytest.raises(PromptConfigError):
            InputPrompt({"type": "input", "message": "Q"}, rl)

    def test_header_shows_default_while_pending(self, rl) -> None:
        prompt = InputPrompt({"name": "q", "message": "Q", "default": "x"}, rl)
        assert "(x)" in prompt.get_question()

    def test_custom_prefix_and_suffix(self, rl) -> None:
        prompt = InputPrompt({"name": "q", "message": "Q", "prefix": "!", "suffix": ":"}, rl)
        assert prompt.get_question().startswith("! ")
        assert ":" in prompt.get_question()

    @pytest.mark.asyncio
    async def test_input_end_rejects(self, rl) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Q"}, rl))
        rl.emit("end")
        with pytest.raises(EOFError):
            await task

    @pytest.mark.asyncio
    async def test_listeners_removed_after_run(self, rl) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Q"}, rl))
        rl.feed("x" + KEY_ENTER)
        await task
        assert rl.listener_count("line") == 0
        assert rl.listener_count("keypress") == 0
        assert rl.listener_count("end") == 0

    @pytest.mark.asyncio
    async def test_pasted_lines_are_submitted_one_at_a_time(self, rl) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Q"}, rl))
        rl.feed("a" + KEY_ENTER + "b" + KEY_ENTER)
        assert await task == "a"

        # The second line waits for whoever listens next
        got = []
        rl.on("line", got.append)
        await settle()
        assert got == ["b"]

    @pytest.mark.asyncio
    async def test_queued_line_retried_after_rejection(self, rl) -> None:
        seen = []

        def validate(value, answers):
            seen.append(value)
            return value == "ok" or "Type ok"

        task = await start(InputPrompt({"name": "q", "message": "Q", "validate": validate}, rl))
        rl.feed("bad" + KEY_ENTER + "ok" + KEY_ENTER)
        assert await task == "ok"
        assert seen == ["bad", "ok"]
        assert rl.line == ""


# ---------------------------------------------------------------------------
# input
# ---------------------------------------------------------------------------


class TestInputPrompt:
    @pytest.mark.asyncio
    async def test_returns_typed_text(self, rl, terminal) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Name"}, rl))
        rl.feed("Ada" + KEY_ENTER)
        assert await task == "Ada"
        assert terminal.lines()[0] == "? Name Ada"

    @pytest.mark.asyncio
    async def test_empty_line_takes_default(self, rl) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Q", "default": "dflt"}, rl))
        rl.feed(KEY_ENTER)
        assert await task == "dflt"

    @pytest.mark.asyncio
    async def test_empty_line_without_default(self, rl) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Q"}, rl))
        rl.feed(KEY_ENTER)
        assert await task == ""

    @pytest.mark.asyncio
    async def test_typing_is_rendered(self, rl, terminal) -> None:
        task = await start(InputPrompt({"name": "q", "message": "Q"}, rl))
        rl.feed("abc")
        await settle()
        assert terminal.lines() == ["? Q abc"]
        assert terminal.position == (0, 7)
        rl.feed(KEY_ENTER)
        await task

    @pytest.mark.asyncio
    async def test_filter_receives_answers(self, rl) -> None:
        seen = {}

        def upper(value, answers):
            seen.update(answers)
            return value.upper()

        prompt = InputPrompt({"name": "q", "message": "Q", "filter": upper}, rl, {"prev": 1})
        task = await start(prompt)
        rl.feed("abc" + KEY_ENTER)
        assert await task == "ABC"
        assert seen == {"prev": 1}

    @pytest.mark.asyncio
    async def test_validation_message_then_retry(self, rl, terminal) -> None:
        def validate(value, answers):
            return True if value == "ok" else "Type ok"

        task = await start(InputPrompt({"name": "q", "message": "Q", "validate": validate}, rl))
        rl.feed("bad" + KEY_ENTER)
        await settle()
        assert not task.done()
        assert terminal.lines() == ["? Q bad", ">> Type ok"]
        # The rejected text is back in the editor
        assert rl.line == "bad"

        rl.feed(CTRL_U + "ok" + KEY_ENTER)
        assert await task == "ok"

    @pytest.mark.asyncio
    async def test_async_validate(self, rl) -> None:
        async def validate(value, answers):
            await asyncio.sleep(0)
            return len(value) > 2

        task = await start(InputPrompt({"name": "q", "message": "Q", "validate": validate}, rl))
        rl.feed("ab" + KEY_ENTER)
        await settle()
        assert not task.done()
        rl.feed(CTRL_U + "abc" + KEY_ENTER)
        assert await task == "abc"

    @pytest.mark.asyncio
    async def test_validator_exception_rejects(self, rl) -> None:
        def validate(value, answers):
            raise RuntimeError("validator broke")

        task = await start(InputPrompt({"name": "q", "message": "Q", "validate": validate}, rl))
        rl.feed("x" + KEY_ENTER)
        with pytest.raises(RuntimeError, match="validator broke"):
            await task

    @pytest.mark.asyncio
    async def test_transformer_flags(self, rl, terminal) -> None:
        calls = []

        def transformer(value, answers, flags):
            calls.append((value, flags["is_final"]))
            return f"<{value}>"

        prompt = InputPrompt({"name": "q", "message": "Q", "transformer": transformer}, rl)
        task = await start(prompt)
        rl.feed("hi" + KEY_ENTER)
        assert await task == "hi"
        assert calls[-1] == ("hi", True)
        assert ("hi", False) in calls
        assert terminal.lines()[0] == "? Q <hi>"


# ---------------------------------------------------------------------------
# number
# ---------------------------------------------------------------------------


class TestNumberPrompt:
    @pytest.mark.asyncio
    async def test_integer(self, rl) -> None:
        task = await start(NumberPrompt({"name": "n", "message": "N"}, rl))
        rl.feed("42" + KEY_ENTER)
        assert await task == 42

    @pytest.mark.asyncio
    async def test_float(self, rl) -> None:
        task = await start(NumberPrompt({"name": "n", "message": "N"}, rl))
        rl.feed("-3.5" + KEY_ENTER)
        assert await task == -3.5

    @pytest.mark.asyncio
    async def test_default(self, rl) -> None:
        task = await start(NumberPrompt({"name": "n", "message": "N", "default": 7}, rl))
        rl.feed(KEY_ENTER)
        assert await task == 7

    @pytest.mark.asyncio
    async def test_not_a_number_is_rejected(self, rl) -> None:
        task = await start(NumberPrompt({"name": "n", "message": "N"}, rl))
        rl.feed("abc" + KEY_ENTER)
        await settle()
        assert not task.done()
        assert rl.line == "abc"
        rl.feed(CTRL_U + "1" + KEY_ENTER)
        assert await task == 1

    def test_filter_gives_nan(self, rl) -> None:
        prompt = NumberPrompt({"name": "n", "message": "N"}, rl)
        assert math.isnan(prompt.filter_input("12abc"))

    @pytest.mark.asyncio
    async def test_custom_validate_still_applies(self, rl) -> None:
        task = await start(NumberPrompt({"name": "n", "message": "N", "validate": lambda v, a: v > 10 or "Too small"}, rl))
        rl.feed("5" + KEY_ENTER)
        await settle()
        assert not task.done()
        rl.feed(CTRL_U + "50" + KEY_ENTER)
        assert await task == 50


# ---------------------------------------------------------------------------
# confirm
# ---------------------------------------------------------------------------


class TestConfirmPrompt:
    @pytest.mark.parametrize("typed", ["y", "Y", "yes", "true"])
    @pytest.mark.asyncio
    async def test_yes(self, rl, typed) -> None:
        task = await start(ConfirmPrompt({"name": "c", "message": "Continue?"}, rl))
        rl.feed(typed + KEY_ENTER)
        assert await task is True

    @pytest.mark.parametrize("typed", ["n", "no", "false", "nope"])
    @pytest.mark.asyncio
    async def test_no(self, rl, typed) -> None:
        task = await start(ConfirmPrompt({"name": "c", "message": "Continue?"}, rl))
        rl.feed(typed + KEY_ENTER)
        assert await task is False

    @pytest.mark.asyncio
    async def test_empty_defaults_to_yes(self, rl, terminal) -> None:
        task = await start(ConfirmPrompt({"name": "c", "message": "Continue?"}, rl))
        assert "(Y/n)" in terminal.lines()[0]
        rl.feed(KEY_ENTER)
        assert await task is True
        assert terminal.lines()[0] == "? Continue? Yes"

    @pytest.mark.asyncio
    async def test_default_false(self, rl, terminal) -> None:
        task = await start(ConfirmPrompt({"name": "c", "message": "Continue?", "default": False}, rl))
        assert "(y/N)" in terminal.lines()[0]
        rl.feed(KEY_ENTER)
        assert await task is False
        assert terminal.lines()[0] == "? Continue? No"


# ---------------------------------------------------------------------------
# password
# ---------------------------------------------------------------------------


class TestPasswordPrompt:
    def test_mask_helper(self) -> None:
        assert mask("abc", "#") == "###"
        assert mask("abc", True) == "***"
        assert mask(None, "*") == ""

    @pytest.mark.asyncio
    async def test_hidden_input(self, rl, terminal) -> None:
        task = await start(PasswordPrompt({"name": "p", "message": "Secret"}, rl))
        rl.feed("hunter2")
        await settle()
        assert "hunter2" not in terminal.lines()[0]
        assert "[input is hidden]" in terminal.lines()[0]
        rl.feed(KEY_ENTER)
        assert await task == "hunter2"
        assert terminal.lines()[0] == "? Secret [hidden]"

    @pytest.mark.asyncio
    async def test_masked_input(self, rl, terminal) -> None:
        task = await start(PasswordPrompt({"name": "p", "message": "Secret", "mask": "*"}, rl))
        rl.feed("abc")
        await settle()
        assert terminal.lines() == ["? Secret ***"]
        assert terminal.position == (0, 12)
        rl.feed(KEY_ENTER)
        assert await task == "abc"
        assert terminal.lines()[0] == "? Secret ***"

    @pytest.mark.asyncio
    async def test_default_is_not_shown(self, rl, terminal) -> None:
        task = await start(PasswordPrompt({"name": "p", "message": "Secret", "default": "s3cr3t"}, rl))
        assert "s3cr3t" not in terminal.output
        assert "[hidden]" in terminal.lines()[0]
        rl.feed(KEY_ENTER)
        assert await task == "s3cr3t"

    @pytest.mark.asyncio
    async def test_keypress_clears_default(self, rl, terminal) -> None:
        task = await start(PasswordPrompt({"name": "p", "message": "Secret", "default": "s3cr3t", "mask": "*"}, rl))
        rl.feed("x\x7f")
        await settle()
        assert "[hidden]" not in terminal.lines()[0]
        rl.feed(KEY_ENTER)
        assert await task == ""


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


class TestListPrompt:
    def test_increment_index(self) -> None:
        assert increment_index(0, "up", 3) == 2
        assert increment_index(2, "down", 3) == 0
        assert increment_index(0, "up", 3, loop=False) == 0
        assert increment_index(2, "down", 3, loop=False) == 2

    def test_requires_choices(self, rl) -> None:
        with pytest.raises(PromptConfigError):
            ListPrompt({"name": "l", "message": "L"}, rl)

    @pytest.mark.asyncio
    async def test_first_choice_by_default(self, rl, terminal) -> None:
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        assert "(Use arrow keys)" in terminal.lines()[0]
        assert terminal.lines()[1] == "❯ a"
        assert terminal.cursor_visible is False
        rl.feed(KEY_ENTER)
        assert await task == "a"
        assert terminal.lines()[0] == "? Pick a"
        assert terminal.cursor_visible is True

    @pytest.mark.asyncio
    async def test_arrow_navigation(self, rl) -> None:
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        rl.feed(KEY_DOWN + KEY_DOWN + KEY_UP + KEY_ENTER)
        assert await task == "b"

    @pytest.mark.asyncio
    async def test_vi_keys_and_wrap(self, rl) -> None:
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        rl.feed("k" + KEY_ENTER)
        assert await task == "c"

    @pytest.mark.asyncio
    async def test_no_wrap_without_loop(self, rl) -> None:
        question = {"name": "l", "message": "Pick", "choices": ["a", "b", "c"], "loop": False}
        task = await start(ListPrompt(question, rl))
        rl.feed(KEY_UP + KEY_ENTER)
        assert await task == "a"

    @pytest.mark.asyncio
    async def test_digit_selects(self, rl) -> None:
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        rl.feed("3" + KEY_ENTER)
        assert await task == "c"

    @pytest.mark.asyncio
    async def test_default_by_value_and_index(self, rl) -> None:
        choices = [{"name": "A", "value": "a"}, {"name": "B", "value": "b"}]
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": choices, "default": "b"}, rl))
        rl.feed(KEY_ENTER)
        assert await task == "b"

        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": choices, "default": 1}, rl))
        rl.feed(KEY_ENTER)
        assert await task == "b"

    @pytest.mark.asyncio
    async def test_separators_and_disabled_are_skipped(self, rl, terminal) -> None:
        choices = ["a", Separator(), {"name": "b", "disabled": "soon"}, "c"]
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": choices}, rl))
        assert "  - b (soon)" in terminal.lines()
        rl.feed(KEY_DOWN + KEY_ENTER)
        assert await task == "c"

    @pytest.mark.asyncio
    async def test_filter_gets_value(self, rl) -> None:
        question = {
            "name": "l",
            "message": "Pick",
            "choices": ["a", "b"],
            "filter": lambda value, answers: value.upper(),
        }
        task = await start(ListPrompt(question, rl))
        rl.feed(KEY_DOWN + KEY_ENTER)
        assert await task == "B"

    @pytest.mark.asyncio
    async def test_short_name_in_final_render(self, rl, terminal) -> None:
        choices = [{"name": "A long name", "value": "a", "short": "A"}]
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": choices}, rl))
        rl.feed(KEY_ENTER)
        await task
        assert terminal.lines()[0] == "? Pick A"

    @pytest.mark.asyncio
    async def test_long_list_is_paginated(self, rl, terminal) -> None:
        choices = [f"item {i}" for i in range(20)]
        task = await start(ListPrompt({"name": "l", "message": "Pick", "choices": choices, "page_size": 5}, rl))
        assert "(Move up and down to reveal more choices)" in terminal.lines()
        assert len([line for line in terminal.lines() if "item" in line]) == 5
        rl.feed(KEY_ENTER)
        assert await task == "item 0"


# ---------------------------------------------------------------------------
# checkbox
# ---------------------------------------------------------------------------


class TestCheckboxPrompt:
    @pytest.mark.asyncio
    async def test_nothing_checked(self, rl) -> None:
        task = await start(CheckboxPrompt({"name": "c", "message": "Pick", "choices": ["a", "b"]}, rl))
        rl.feed(KEY_ENTER)
        assert await task == []

    @pytest.mark.asyncio
    async def test_space_toggles(self, rl, terminal) -> None:
        task = await start(CheckboxPrompt({"name": "c", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        rl.feed(" " + KEY_DOWN + KEY_DOWN + " ")
        await settle()
        assert terminal.lines()[1] == " ◉ a"
        assert terminal.lines()[3] == "❯◉ c"
        rl.feed(KEY_ENTER)
        assert await task == ["a", "c"]
        assert terminal.lines()[0] == "? Pick a, c"

    @pytest.mark.asyncio
    async def test_toggle_all_and_invert(self, rl) -> None:
        task = await start(CheckboxPrompt({"name": "c", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        rl.feed(" a")
        await settle()
        rl.feed("i" + " " + KEY_ENTER)
        assert await task == ["a"]

    @pytest.mark.asyncio
    async def test_digit_toggles(self, rl) -> None:
        task = await start(CheckboxPrompt({"name": "c", "message": "Pick", "choices": ["a", "b", "c"]}, rl))
        rl.feed("2" + KEY_ENTER)
        assert await task == ["b"]

    @pytest.mark.asyncio
    async def test_default_and_checked_choices(self, rl) -> None:
        choices = ["a", "b", {"name": "c", "checked": True}]
        task = await start(CheckboxPrompt({"name": "c", "message": "Pick", "choices": choices, "default": ["a"]}, rl))
        rl.feed(KEY_ENTER)
        assert await task == ["a", "c"]

    @pytest.mark.asyncio
    async def test_validate_receives_values(self, rl) -> None:
        question = {
            "name": "c",
            "message": "Pick",
            "choices": ["a", "b"],
            "validate": lambda values, answers: bool(values) or "Pick one",
        }
        task = await start(CheckboxPrompt(question, rl))
        rl.feed(KEY_ENTER)
        await settle()
        assert not task.done()
        rl.feed(" " + KEY_ENTER)
        assert await task == ["a"]
