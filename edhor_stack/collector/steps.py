"""The ordered question table.

Each question is a declarative ``Step``. Option sets, defaults and
applicability may be computed from the answers collected so far; answers
only ever flow forward through the table.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .models import (
    NAME_PATTERN,
    ApiFramework,
    App,
    Database,
    Package,
    UiBaseColor,
    UiStyle,
)
from .prompts import Option

_NAME_RE = re.compile(NAME_PATTERN)

NAME_REQUIRED_MESSAGE = "Project name is required"
NAME_PATTERN_MESSAGE = "Use lowercase letters, numbers, and hyphens only"
SELECTION_REQUIRED_MESSAGE = "Select at least one option"


class PromptKind(str, Enum):
    TEXT = "text"
    SELECT = "select"
    MULTISELECT = "multiselect"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class StepContext:
    """What a step may look at when computing its options or default."""
    answers: Mapping[str, Any]
    name_hint: Optional[str] = None
    default_name: str = "my-app"


Computed = Callable[[StepContext], Any]


@dataclass(frozen=True)
class Step:
    """One question in the flow.

    Attributes:
        key: Answer key; matches the ``ProjectConfig`` field it feeds.
        kind: Which prompt widget asks it.
        message: Question text.
        options: Static options, or a callable computing them from the context.
        default: Static default, or a callable computing it from the context.
        validate: Returns a user-facing message for an invalid answer, else ``None``.
        required: Multi-select only; at least one value must be chosen.
        applies: Returns ``False`` when the step must be skipped.
        fallback: Answer recorded when the step is skipped, used only if
            ``has_fallback`` is set. Otherwise the answer is left absent.
    """

    key: str
    kind: PromptKind
    message: str
    options: Union[Sequence[Option], Computed] = ()
    default: Union[Any, Computed] = None
    validate: Optional[Callable[[Any], Optional[str]]] = None
    required: bool = False
    applies: Optional[Callable[[StepContext], bool]] = None
    fallback: Any = None
    has_fallback: bool = False

    def resolve_options(self, ctx: StepContext) -> tuple[Option, ...]:
        options = self.options(ctx) if callable(self.options) else self.options
        return tuple(options)

    def resolve_default(self, ctx: StepContext) -> Any:
        return self.default(ctx) if callable(self.default) else self.default

    def is_applicable(self, ctx: StepContext) -> bool:
        """A step applies unless its predicate says no or it has nothing to offer."""
        if self.applies is not None and not self.applies(ctx):
            return False
        if self.kind in (PromptKind.SELECT, PromptKind.MULTISELECT):
            return bool(self.resolve_options(ctx))
        return True


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------

def validate_name(value: str) -> Optional[str]:
    """Return an error message for an invalid project name, else ``None``."""
    if not value:
        return NAME_REQUIRED_MESSAGE
    if not _NAME_RE.fullmatch(value):
        return NAME_PATTERN_MESSAGE
    return None


# ---------------------------------------------------------------------------
# Dependent option sets and predicates
# ---------------------------------------------------------------------------

def package_options(ctx: StepContext) -> list[Option]:
    """Packages on offer. Auth is only offered once a database was chosen."""
    options = [
        Option(Package.UI, "UI (shadcn/ui + Tailwind)", "recommended"),
        Option(Package.SHARED, "Shared (Zod schemas + types)"),
    ]
    if ctx.answers.get("database", Database.NONE) != Database.NONE:
        options.append(Option(Package.AUTH, "Auth (Better Auth)"))
    options.append(Option(Package.STRIPE, "Stripe (payments + webhooks)"))
    return options


def wants_ui(ctx: StepContext) -> bool:
    return Package.UI in ctx.answers.get("packages", ())


def wants_api(ctx: StepContext) -> bool:
    return ctx.answers.get("database") != Database.CONVEX


def _name_default(ctx: StepContext) -> str:
    return ctx.name_hint or ctx.default_name


# ---------------------------------------------------------------------------
# The question table
# ---------------------------------------------------------------------------

QUESTION_STEPS: tuple[Step, ...] = (
    Step(
        key="name",
        kind=PromptKind.TEXT,
        message="Project name",
        default=_name_default,
        validate=validate_name,
    ),
    Step(
        key="apps",
        kind=PromptKind.MULTISELECT,
        message="Which apps do you want?",
        options=(
            Option(App.WEB, "Web (TanStack Start)", "recommended"),
            Option(App.MOBILE, "Mobile (Expo + React Native)"),
        ),
        default=(App.WEB,),
        required=True,
    ),
    Step(
        key="database",
        kind=PromptKind.SELECT,
        message="Backend setup?",
        options=(
            Option(Database.NONE, "None", "external API"),
            Option(Database.CONVEX, "Convex", "real-time serverless"),
            Option(Database.DRIZZLE, "Drizzle + PostgreSQL", "traditional"),
        ),
        default=Database.NONE,
    ),
    Step(
        key="packages",
        kind=PromptKind.MULTISELECT,
        message="Additional packages?",
        options=package_options,
        default=(),
    ),
    Step(
        key="ui_style",
        kind=PromptKind.SELECT,
        message="UI style?",
        options=(
            Option(UiStyle.NEW_YORK, "New York", "recommended"),
            Option(UiStyle.DEFAULT, "Default"),
        ),
        default=UiStyle.NEW_YORK,
        applies=wants_ui,
    ),
    Step(
        key="ui_base_color",
        kind=PromptKind.SELECT,
        message="Base color?",
        options=(
            Option(UiBaseColor.ZINC, "Zinc", "neutral"),
            Option(UiBaseColor.SLATE, "Slate", "cool"),
            Option(UiBaseColor.STONE, "Stone", "warm"),
            Option(UiBaseColor.NEUTRAL, "Neutral"),
            Option(UiBaseColor.GRAY, "Gray"),
        ),
        default=UiBaseColor.ZINC,
        applies=wants_ui,
    ),
    Step(
        key="api",
        kind=PromptKind.SELECT,
        message="API framework?",
        options=(
            Option(ApiFramework.HONO, "Hono", "recommended"),
            Option(ApiFramework.ELYSIA, "Elysia"),
            Option(ApiFramework.NONE, "None"),
        ),
        default=ApiFramework.HONO,
        applies=wants_api,
        fallback=ApiFramework.NONE,
        has_fallback=True,
    ),
    Step(
        key="testing",
        kind=PromptKind.CONFIRM,
        message="Add testing setup? (Vitest + Playwright)",
        default=True,
    ),
    Step(
        key="ci",
        kind=PromptKind.CONFIRM,
        message="Add GitHub Actions CI?",
        default=True,
    ),
    Step(
        key="deployment",
        kind=PromptKind.CONFIRM,
        message="Add deployment configuration? (Docker)",
        default=False,
    ),
)
