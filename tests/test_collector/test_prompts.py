"""Unit tests for prompt providers (edhor_stack.collector.prompts).

Tests cover:
- Answer token parsing (indices, values, unknown tokens)
- RichPromptProvider with ``rich.prompt`` patched out
- Ctrl-C / EOF turning into PromptCancelled
- DefaultsPromptProvider
"""

from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from edhor_stack.collector.models import App, Package
from edhor_stack.collector.prompts import (
    ConfirmPrompt,
    DefaultsPromptProvider,
    MultiSelectPrompt,
    Option,
    PromptCancelled,
    RichPromptProvider,
    SelectPrompt,
    TextPrompt,
    _default_token,
    _resolve_tokens,
)

pytestmark = pytest.mark.unit

APP_OPTIONS = (
    Option(App.WEB, "Web", "recommended"),
    Option(App.MOBILE, "Mobile"),
)


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False)


# ---------------------------------------------------------------------------
# Token parsing
# ---------------------------------------------------------------------------


class TestResolveTokens:
    def test_indices(self):
        assert _resolve_tokens(APP_OPTIONS, "2,1") == [App.MOBILE, App.WEB]

    def test_values_case_insensitive(self):
        assert _resolve_tokens(APP_OPTIONS, " Web , mobile") == [App.WEB, App.MOBILE]

    def test_empty_answer(self):
        assert _resolve_tokens(APP_OPTIONS, "") == []

    def test_duplicates_dropped(self):
        assert _resolve_tokens(APP_OPTIONS, "web,1") == [App.WEB]

    @pytest.mark.parametrize("answer", ["desktop", "3", "0", "web,nope"])
    def test_unknown_token(self, answer):
        assert _resolve_tokens(APP_OPTIONS, answer) is None


class TestDefaultToken:
    def test_renders_values_in_option_order(self):
        assert _default_token(APP_OPTIONS, [App.MOBILE, App.WEB]) == "web,mobile"

    def test_no_defaults(self):
        assert _default_token(APP_OPTIONS, []) == ""
        assert _default_token(APP_OPTIONS, [None]) == ""


# ---------------------------------------------------------------------------
# RichPromptProvider
# ---------------------------------------------------------------------------


class TestRichPromptProvider:
    async def test_text_strips(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", return_value="  my-app  "):
            assert await provider.text(TextPrompt("Project name", default="x")) == "my-app"

    async def test_text_passes_default(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", return_value="a") as ask:
            await provider.text(TextPrompt("Project name", default="hint"))
        assert ask.call_args.kwargs["default"] == "hint"

    async def test_select_by_index(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", return_value="2"):
            value = await provider.select(SelectPrompt("App?", APP_OPTIONS, App.WEB))
        assert value is App.MOBILE

    async def test_select_reasks_on_multiple(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch(
            "edhor_stack.collector.prompts.Prompt.ask", side_effect=["1,2", "web"]
        ) as ask:
            value = await provider.select(SelectPrompt("App?", APP_OPTIONS, App.WEB))
        assert value is App.WEB
        assert ask.call_count == 2

    async def test_select_default_token(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", return_value="mobile") as ask:
            await provider.select(SelectPrompt("App?", APP_OPTIONS, App.MOBILE))
        assert ask.call_args.kwargs["default"] == "mobile"

    async def test_multiselect(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", return_value="1,2"):
            values = await provider.multiselect(MultiSelectPrompt("Apps?", APP_OPTIONS))
        assert values == [App.WEB, App.MOBILE]

    async def test_multiselect_blank_is_empty(self, quiet_console):
        options = (Option(Package.UI, "UI"),)
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", return_value=""):
            values = await provider.multiselect(MultiSelectPrompt("Packages?", options))
        assert values == []

    async def test_multiselect_reasks_on_unknown(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch(
            "edhor_stack.collector.prompts.Prompt.ask", side_effect=["tv", "mobile"]
        ) as ask:
            values = await provider.multiselect(MultiSelectPrompt("Apps?", APP_OPTIONS))
        assert values == [App.MOBILE]
        assert ask.call_count == 2

    async def test_confirm(self, quiet_console):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Confirm.ask", return_value=False) as ask:
            assert await provider.confirm(ConfirmPrompt("CI?", initial_value=True)) is False
        assert ask.call_args.kwargs["default"] is True

    @pytest.mark.parametrize("exc", [KeyboardInterrupt, EOFError])
    async def test_abort_becomes_cancelled(self, quiet_console, exc):
        provider = RichPromptProvider(quiet_console)
        with patch("edhor_stack.collector.prompts.Prompt.ask", side_effect=exc):
            with pytest.raises(PromptCancelled):
                await provider.text(TextPrompt("Project name"))
        with patch("edhor_stack.collector.prompts.Confirm.ask", side_effect=exc):
            with pytest.raises(PromptCancelled):
                await provider.confirm(ConfirmPrompt("CI?"))

    async def test_messages_are_printed(self):
        out = io.StringIO()
        provider = RichPromptProvider(Console(file=out, force_terminal=False))
        await provider.intro("create-edhor-stack")
        await provider.invalid("Project name is required")
        await provider.cancel("Setup cancelled.")
        text = out.getvalue()
        assert "create-edhor-stack" in text
        assert "Project name is required" in text
        assert "Setup cancelled." in text


# ---------------------------------------------------------------------------
# DefaultsPromptProvider
# ---------------------------------------------------------------------------


class TestDefaultsPromptProvider:
    async def test_returns_defaults(self, quiet_console):
        provider = DefaultsPromptProvider(quiet_console)
        assert await provider.text(TextPrompt("Name", default="demo")) == "demo"
        assert await provider.select(SelectPrompt("App?", APP_OPTIONS, App.MOBILE)) is App.MOBILE
        assert await provider.select(SelectPrompt("App?", APP_OPTIONS)) is App.WEB
        assert await provider.multiselect(
            MultiSelectPrompt("Apps?", APP_OPTIONS, (App.WEB,))
        ) == [App.WEB]
        assert await provider.confirm(ConfirmPrompt("CI?", initial_value=True)) is True

    async def test_invalid_cancels(self, quiet_console):
        provider = DefaultsPromptProvider(quiet_console)
        with pytest.raises(PromptCancelled):
            await provider.invalid("Use lowercase letters, numbers, and hyphens only")
