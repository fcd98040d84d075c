"""Configuration collector.

Runs the question table against a ``PromptProvider`` and produces exactly
one ``ProjectConfig``, or a ``Cancelled`` outcome if the user aborts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from .models import ProjectConfig, UiOptions
from .prompts import (
    ConfirmPrompt,
    MultiSelectPrompt,
    PromptCancelled,
    PromptProvider,
    SelectPrompt,
    TextPrompt,
)
from .steps import (
    QUESTION_STEPS,
    SELECTION_REQUIRED_MESSAGE,
    PromptKind,
    Step,
    StepContext,
)

INTRO_TITLE = "create-edhor-stack"
CANCEL_MESSAGE = "Setup cancelled."


@dataclass(frozen=True)
class Cancelled:
    """Outcome of a run the user aborted. ``step`` is where it happened."""
    step: str


class ConfigurationCollector:
    """Asks the question table in order and builds a ``ProjectConfig``.

    Steps that do not apply are skipped; their answer is either absent or
    set to the step's fallback. Invalid answers are reported through the
    provider and the same step is asked again.
    """

    def __init__(
        self,
        provider: PromptProvider,
        steps: Sequence[Step] = QUESTION_STEPS,
        *,
        default_name: str = "my-app",
    ) -> None:
        self.provider = provider
        self.steps = tuple(steps)
        self.default_name = default_name

    async def collect(
        self, initial_name_hint: Optional[str] = None
    ) -> Union[ProjectConfig, Cancelled]:
        await self.provider.intro(INTRO_TITLE)

        answers: dict[str, Any] = {}
        for step in self.steps:
            ctx = StepContext(
                answers=dict(answers),
                name_hint=initial_name_hint,
                default_name=self.default_name,
            )
            if not step.is_applicable(ctx):
                if step.has_fallback:
                    answers[step.key] = step.fallback
                continue

            try:
                answers[step.key] = await self._ask_until_valid(step, ctx)
            except PromptCancelled:
                await self.provider.cancel(CANCEL_MESSAGE)
                return Cancelled(step=step.key)

        return build_config(answers)

    async def _ask_until_valid(self, step: Step, ctx: StepContext) -> Any:
        default = step.resolve_default(ctx)
        while True:
            value = await self._ask(step, ctx, default)
            message = self._check(step, value)
            if message is None:
                return value
            await self.provider.invalid(message)
            # Re-ask with what the user typed so they can correct it.
            if step.kind is PromptKind.TEXT:
                default = value

    def _check(self, step: Step, value: Any) -> Optional[str]:
        if step.kind is PromptKind.MULTISELECT and step.required and not value:
            return SELECTION_REQUIRED_MESSAGE
        if step.validate is not None:
            return step.validate(value)
        return None

    async def _ask(self, step: Step, ctx: StepContext, default: Any) -> Any:
        if step.kind is PromptKind.TEXT:
            return await self.provider.text(
                TextPrompt(message=step.message, default=default or "")
            )
        if step.kind is PromptKind.SELECT:
            return await self.provider.select(
                SelectPrompt(
                    message=step.message,
                    options=step.resolve_options(ctx),
                    initial_value=default,
                )
            )
        if step.kind is PromptKind.MULTISELECT:
            options = step.resolve_options(ctx)
            offered = {o.value for o in options}
            selected = await self.provider.multiselect(
                MultiSelectPrompt(
                    message=step.message,
                    options=options,
                    initial_values=tuple(v for v in (default or ()) if v in offered),
                    required=step.required,
                )
            )
            return tuple(selected)
        return await self.provider.confirm(
            ConfirmPrompt(message=step.message, initial_value=bool(default))
        )


def build_config(answers: dict[str, Any]) -> ProjectConfig:
    """Turn the collected answers into the immutable ``ProjectConfig``."""
    fields = {
        key: value
        for key, value in answers.items()
        if key not in ("ui_style", "ui_base_color")
    }
    if "ui_style" in answers or "ui_base_color" in answers:
        ui_fields: dict[str, Any] = {}
        if "ui_style" in answers:
            ui_fields["style"] = answers["ui_style"]
        if "ui_base_color" in answers:
            ui_fields["base_color"] = answers["ui_base_color"]
        fields["ui"] = UiOptions(**ui_fields)
    return ProjectConfig(**fields)


async def collect(
    provider: PromptProvider,
    initial_name_hint: Optional[str] = None,
    *,
    default_name: str = "my-app",
) -> Union[ProjectConfig, Cancelled]:
    """Shortcut for ``ConfigurationCollector(provider).collect(hint)``."""
    collector = ConfigurationCollector(provider, default_name=default_name)
    return await collector.collect(initial_name_hint)
