"""create-edhor-stack settings.

Typed runtime settings for the generator. Like the rest of the data model
these are Pydantic v2 models, so they are validated at construction time and
can be built from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from edhor_stack.collector.models import NAME_PATTERN

_PACKAGE_TEMPLATES_DIR = Path(__file__).parent / "templates"


class Settings(BaseModel):
    """Global generator settings.

    Instances are created once by the CLI entry point and handed to the
    collector (for the default project name) and to the template store.
    """

    templates_dir: Path = Field(
        default=_PACKAGE_TEMPLATES_DIR,
        description="Root directory holding the base/apps/packages template trees",
    )
    output_dir: Path = Field(
        default=Path("."),
        description="Parent directory the project folder is created in",
    )
    default_name: str = Field(
        default="my-app",
        pattern=NAME_PATTERN,
        description="Project name offered when no name hint is given",
    )

    @field_validator("templates_dir", "output_dir")
    @classmethod
    def _expand_user(cls, value: Path) -> Path:
        return value.expanduser()

    def project_dir(self, name: str) -> Path:
        """Return the absolute target directory for a project called *name*."""
        return (self.output_dir / name).resolve()

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            EDHOR_TEMPLATES_DIR, EDHOR_OUTPUT_DIR, EDHOR_DEFAULT_NAME.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EDHOR_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["EDHOR_TEMPLATES_DIR"])
        if os.environ.get("EDHOR_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EDHOR_OUTPUT_DIR"])
        if os.environ.get("EDHOR_DEFAULT_NAME"):
            kwargs["default_name"] = os.environ["EDHOR_DEFAULT_NAME"]
        return cls(**kwargs)
