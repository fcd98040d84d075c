"""Prompt provider interface and its Rich terminal implementation.

The collector never talks to the terminal directly. It describes each
question with a small frozen prompt spec and hands it to a
``PromptProvider``. Providers signal a user abort by raising
``PromptCancelled``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

from rich.console import Console
from rich.prompt import Confirm, Prompt

from edhor_stack.utils import console as default_console


class PromptCancelled(Exception):
    """Raised by a provider when the user aborts a prompt (Ctrl-C / EOF)."""


# ---------------------------------------------------------------------------
# Prompt specs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Option:
    """One selectable choice."""
    value: Any
    label: str
    hint: str = ""


@dataclass(frozen=True)
class TextPrompt:
    message: str
    default: str = ""


@dataclass(frozen=True)
class SelectPrompt:
    message: str
    options: tuple[Option, ...]
    initial_value: Any = None


@dataclass(frozen=True)
class MultiSelectPrompt:
    message: str
    options: tuple[Option, ...]
    initial_values: tuple[Any, ...] = field(default_factory=tuple)
    required: bool = False


@dataclass(frozen=True)
class ConfirmPrompt:
    message: str
    initial_value: bool = False


class PromptProvider(Protocol):
    """What the collector needs from an interactive front end."""

    async def intro(self, title: str) -> None: ...

    async def text(self, spec: TextPrompt) -> str: ...

    async def select(self, spec: SelectPrompt) -> Any: ...

    async def multiselect(self, spec: MultiSelectPrompt) -> list[Any]: ...

    async def confirm(self, spec: ConfirmPrompt) -> bool: ...

    async def invalid(self, message: str) -> None: ...

    async def cancel(self, message: str) -> None: ...


# ---------------------------------------------------------------------------
# Rich implementation
# ---------------------------------------------------------------------------

class RichPromptProvider:
    """Terminal prompts built on ``rich.prompt``.

    Select prompts list the options with a number and accept either the
    number or the option value. Multi-select prompts accept a comma-separated
    list of numbers or values; an empty answer keeps the initial selection.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    async def intro(self, title: str) -> None:
        self.console.print()
        self.console.print(f"[bold black on cyan] {title} [/bold black on cyan]")
        self.console.print()

    async def text(self, spec: TextPrompt) -> str:
        answer = self._ask(spec.message, default=spec.default or None)
        return (answer or "").strip()

    async def select(self, spec: SelectPrompt) -> Any:
        self._print_options(spec.options)
        default_token = _default_token(spec.options, [spec.initial_value])
        while True:
            answer = self._ask(spec.message, default=default_token)
            chosen = _resolve_tokens(spec.options, answer or "")
            if chosen is not None and len(chosen) == 1:
                return chosen[0]
            self.console.print("[prompt.invalid]Please pick exactly one option")

    async def multiselect(self, spec: MultiSelectPrompt) -> list[Any]:
        self._print_options(spec.options)
        default_token = _default_token(spec.options, list(spec.initial_values))
        suffix = " (comma-separated)" if spec.required else " (comma-separated, blank for none)"
        while True:
            answer = self._ask(spec.message + suffix, default=default_token)
            chosen = _resolve_tokens(spec.options, answer or "")
            if chosen is not None:
                return chosen
            self.console.print("[prompt.invalid]Unknown option; use the listed numbers or names")

    async def confirm(self, spec: ConfirmPrompt) -> bool:
        try:
            return Confirm.ask(spec.message, default=spec.initial_value, console=self.console)
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled(spec.message) from exc

    async def invalid(self, message: str) -> None:
        self.console.print(f"[bold yellow]{message}[/bold yellow]")

    async def cancel(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/bold red]")

    # -- Helpers -------------------------------------------------------------

    def _ask(self, message: str, default: Optional[str]) -> Optional[str]:
        try:
            if not default:
                return Prompt.ask(message, console=self.console)
            return Prompt.ask(message, console=self.console, default=default)
        except (KeyboardInterrupt, EOFError) as exc:
            raise PromptCancelled(message) from exc

    def _print_options(self, options: Sequence[Option]) -> None:
        for index, option in enumerate(options, start=1):
            hint = f" [dim]({option.hint})[/dim]" if option.hint else ""
            self.console.print(f"  [cyan]{index}[/cyan]. {option.label}{hint}")


class DefaultsPromptProvider:
    """Non-interactive provider that accepts every default.

    Used by ``--yes``. Validation failures cannot be corrected without a
    user, so the first invalid answer cancels the run.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or default_console

    async def intro(self, title: str) -> None:
        self.console.print(f"[bold cyan]{title}[/bold cyan] [dim](using defaults)[/dim]")

    async def text(self, spec: TextPrompt) -> str:
        return spec.default

    async def select(self, spec: SelectPrompt) -> Any:
        if spec.initial_value is not None:
            return spec.initial_value
        return spec.options[0].value

    async def multiselect(self, spec: MultiSelectPrompt) -> list[Any]:
        return list(spec.initial_values)

    async def confirm(self, spec: ConfirmPrompt) -> bool:
        return spec.initial_value

    async def invalid(self, message: str) -> None:
        self.console.print(f"[bold yellow]{message}[/bold yellow]")
        raise PromptCancelled(message)

    async def cancel(self, message: str) -> None:
        self.console.print(f"[bold red]{message}[/bold red]")


# ---------------------------------------------------------------------------
# Token parsing
# ---------------------------------------------------------------------------

def _option_value_str(value: Any) -> str:
    return str(getattr(value, "value", value))


def _default_token(options: Sequence[Option], values: Sequence[Any]) -> str:
    """Render initial values as the comma-separated answer the user would type."""
    wanted = {_option_value_str(v) for v in values if v is not None}
    return ",".join(
        _option_value_str(o.value) for o in options if _option_value_str(o.value) in wanted
    )


def _resolve_tokens(options: Sequence[Option], answer: str) -> Optional[list[Any]]:
    """Map a comma-separated answer onto option values.

    Tokens may be 1-based indices or option values. Returns ``None`` if any
    token is unknown. Duplicates are dropped, first occurrence wins.
    """
    chosen: list[Any] = []
    for raw in answer.split(","):
        token = raw.strip().lower()
        if not token:
            continue
        match: Optional[Option] = None
        if token.isdigit() and 1 <= int(token) <= len(options):
            match = options[int(token) - 1]
        else:
            for option in options:
                if _option_value_str(option.value).lower() == token:
                    match = option
                    break
        if match is None:
            return None
        if match.value not in chosen:
            chosen.append(match.value)
    return chosen
