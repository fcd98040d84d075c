"""Shared pytest fixtures for the create-edhor-stack test suite.

Provides reusable fixtures for:
- A scripted prompt provider that answers questions by step key
- Small template trees written into ``tmp_path``
- Ready-made ``ProjectConfig`` values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from edhor_stack.collector.models import (
    ApiFramework,
    App,
    Database,
    Package,
    ProjectConfig,
    UiBaseColor,
    UiOptions,
    UiStyle,
)
from edhor_stack.collector.prompts import (
    ConfirmPrompt,
    MultiSelectPrompt,
    PromptCancelled,
    SelectPrompt,
    TextPrompt,
)
from edhor_stack.collector.steps import QUESTION_STEPS
from edhor_stack.scaffolder import LocalFileStore, ScaffoldEngine, TemplateStore


# ---------------------------------------------------------------------------
# Scripted prompt provider
# ---------------------------------------------------------------------------

CANCEL = object()
"""Script entry that makes the provider raise ``PromptCancelled``."""

_KEY_BY_MESSAGE = {step.message: step.key for step in QUESTION_STEPS}


class ScriptedPromptProvider:
    """Prompt provider driven by a script of answers per step key.

    Each keyword argument is a list of answers returned in order for that
    step. Unscripted steps answer with the prompt's default. ``CANCEL``
    raises ``PromptCancelled``. The overwrite confirmation is scripted under
    the key ``"overwrite"``.
    """

    CANCEL = CANCEL

    def __init__(self, **script: list[Any]) -> None:
        self.script = {key: list(values) for key, values in script.items()}
        self.asked: list[str] = []
        self.specs: dict[str, Any] = {}
        self.invalid_messages: list[str] = []
        self.cancel_messages: list[str] = []
        self.intros: list[str] = []

    def _key(self, message: str) -> str:
        if message.endswith("Overwrite?"):
            return "overwrite"
        return _KEY_BY_MESSAGE.get(message, message)

    def _next(self, spec: Any, default: Any) -> Any:
        key = self._key(spec.message)
        self.asked.append(key)
        self.specs[key] = spec
        queue = self.script.get(key)
        if not queue:
            return default
        answer = queue.pop(0)
        if answer is CANCEL:
            raise PromptCancelled(spec.message)
        return answer

    async def intro(self, title: str) -> None:
        self.intros.append(title)

    async def text(self, spec: TextPrompt) -> str:
        return self._next(spec, spec.default)

    async def select(self, spec: SelectPrompt) -> Any:
        return self._next(spec, spec.initial_value)

    async def multiselect(self, spec: MultiSelectPrompt) -> list[Any]:
        return list(self._next(spec, list(spec.initial_values)))

    async def confirm(self, spec: ConfirmPrompt) -> bool:
        return self._next(spec, spec.initial_value)

    async def invalid(self, message: str) -> None:
        self.invalid_messages.append(message)

    async def cancel(self, message: str) -> None:
        self.cancel_messages.append(message)


@pytest.fixture
def scripted():
    """Factory fixture: ``scripted(name=["demo"], apps=[[App.WEB]])``."""
    return ScriptedPromptProvider


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------

def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Write ``{relative_path: content}`` under *root* and return *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def templates_dir(tmp_path: Path) -> Path:
    """A minimal template root with base, one app and two packages."""
    return write_tree(
        tmp_path / "templates",
        {
            "base/package.json.hbs": '{"name": "{{name}}"}\n',
            "base/README.md.hbs": "# {{name}}\n",
            "base/notes.md": "Keep {{name}} literal\n",
            "base/.husky/pre-commit": "#!/usr/bin/env sh\necho hook\n",
            "apps/web/package.json": '{"name": "@{{name}}/web"}\n',
            "apps/web/src/index.tsx": "<h1>{{name}}</h1>\n",
            "packages/ui/components.json": '{"style": "{{uiStyle}}", "baseColor": "{{uiBaseColor}}"}\n',
            "packages/shared/src/types.ts": "export type Id = string; // {{name}}\n",
            "api/hono/src/index.ts": "export default {};\n",
            "database/drizzle/package.json": '{"name": "@{{name}}/database"}\n',
            "extras/testing/vitest.config.ts": "export default {};\n",
            "extras/ci/.github/workflows/ci.yml.hbs": "name: {{name}} CI\n",
            "extras/deployment/Dockerfile.hbs": "# {{name}}\n",
        },
    )


@pytest.fixture
def engine(templates_dir: Path) -> ScaffoldEngine:
    """Scaffold engine over the ``templates_dir`` fixture."""
    files = LocalFileStore()
    return ScaffoldEngine(TemplateStore(files, templates_dir), files)


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------

@pytest.fixture
def minimal_config() -> ProjectConfig:
    """Web only, no database, no packages, all toggles off."""
    return ProjectConfig(
        name="demo",
        apps=(App.WEB,),
        database=Database.NONE,
        packages=(),
        api=ApiFramework.NONE,
        testing=False,
        ci=False,
        deployment=False,
    )


@pytest.fixture
def full_config() -> ProjectConfig:
    """Every app, drizzle, every package and every toggle."""
    return ProjectConfig(
        name="full-stack",
        apps=(App.WEB, App.MOBILE),
        database=Database.DRIZZLE,
        packages=(Package.UI, Package.SHARED, Package.AUTH, Package.STRIPE),
        ui=UiOptions(style=UiStyle.DEFAULT, base_color=UiBaseColor.SLATE),
        api=ApiFramework.HONO,
        testing=True,
        ci=True,
        deployment=True,
    )
