"""Pydantic v2 models for the project configuration.

Defines the closed option enumerations offered by the question flow and the
immutable ``ProjectConfig`` handed from the collector to the scaffold engine.
Conditional answers are modelled structurally: the UI sub-choices live in a
``UiOptions`` object that only exists when the ``ui`` package is selected.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

NAME_PATTERN = r"^[a-z0-9-]+$"


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class App(str, Enum):
    """Application templates placed under ``apps/``."""
    WEB = "web"
    MOBILE = "mobile"


class Database(str, Enum):
    """Backend / database choice. ``convex`` is the real-time serverless option."""
    NONE = "none"
    CONVEX = "convex"
    DRIZZLE = "drizzle"


class Package(str, Enum):
    """Optional workspace packages placed under ``packages/``."""
    UI = "ui"
    SHARED = "shared"
    AUTH = "auth"
    STRIPE = "stripe"


class UiStyle(str, Enum):
    """shadcn/ui component style."""
    NEW_YORK = "new-york"
    DEFAULT = "default"


class UiBaseColor(str, Enum):
    """shadcn/ui base color palette."""
    ZINC = "zinc"
    SLATE = "slate"
    STONE = "stone"
    NEUTRAL = "neutral"
    GRAY = "gray"


class ApiFramework(str, Enum):
    """Standalone API application framework."""
    NONE = "none"
    HONO = "hono"
    ELYSIA = "elysia"


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------

class UiOptions(BaseModel):
    """Sub-choices that only exist when the ``ui`` package is selected."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    style: UiStyle = Field(default=UiStyle.NEW_YORK, description="Component style")
    base_color: UiBaseColor = Field(default=UiBaseColor.ZINC, description="Base color palette")


class ProjectConfig(BaseModel):
    """The immutable result of the question flow.

    Cross-field rules are enforced at construction time, so an instance is
    always internally consistent:

    * ``ui`` is set exactly when ``Package.UI`` is selected;
    * ``Package.AUTH`` requires a database;
    * the ``convex`` backend carries no separate API framework.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(..., min_length=1, pattern=NAME_PATTERN, description="Project directory name")
    apps: tuple[App, ...] = Field(..., min_length=1, description="Apps to generate, in selection order")
    database: Database = Field(default=Database.NONE)
    packages: tuple[Package, ...] = Field(default=())
    ui: Optional[UiOptions] = Field(default=None, description="Present only with the ui package")
    api: ApiFramework = Field(default=ApiFramework.NONE)
    testing: bool = Field(default=True, description="Vitest + Playwright setup")
    ci: bool = Field(default=True, description="GitHub Actions workflow")
    deployment: bool = Field(default=False, description="Deployment configuration")

    @field_validator("apps", "packages")
    @classmethod
    def _no_duplicates(cls, value: tuple) -> tuple:
        if len(set(value)) != len(value):
            raise ValueError("duplicate selections are not allowed")
        return value

    @model_validator(mode="after")
    def _check_dependencies(self) -> "ProjectConfig":
        has_ui = self.has_package(Package.UI)
        if has_ui and self.ui is None:
            raise ValueError("ui options are required when the ui package is selected")
        if not has_ui and self.ui is not None:
            raise ValueError("ui options are only allowed with the ui package")
        if self.has_package(Package.AUTH) and self.database is Database.NONE:
            raise ValueError("the auth package requires a database")
        if self.database is Database.CONVEX and self.api is not ApiFramework.NONE:
            raise ValueError("convex projects do not use a separate API framework")
        return self

    def has_package(self, package: Package) -> bool:
        """Return ``True`` if *package* was selected."""
        return package in self.packages

    def template_vars(self) -> dict[str, str]:
        """Return the ``{{placeholder}}`` bindings used when rendering templates.

        UI variables are only bound when UI options exist; unbound
        placeholders render as empty strings.
        """
        variables = {
            "name": self.name,
            "database": self.database.value,
            "api": self.api.value,
        }
        if self.ui is not None:
            variables["uiStyle"] = self.ui.style.value
            variables["uiBaseColor"] = self.ui.base_color.value
        return variables

    def summary(self) -> dict[str, str]:
        """Return a human-readable ``{label: value}`` view for the CLI summary."""
        data = {
            "Name": self.name,
            "Apps": ", ".join(a.value for a in self.apps),
            "Database": self.database.value,
            "Packages": ", ".join(p.value for p in self.packages) or "-",
        }
        if self.ui is not None:
            data["UI"] = f"{self.ui.style.value} / {self.ui.base_color.value}"
        data["API"] = self.api.value
        data["Testing"] = "yes" if self.testing else "no"
        data["CI"] = "yes" if self.ci else "no"
        data["Deployment"] = "yes" if self.deployment else "no"
        return data
