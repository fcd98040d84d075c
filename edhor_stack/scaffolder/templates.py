"""Template trees and ``{{placeholder}}`` rendering.

Provides:

* ``render`` -- a single-pass, total substitution of ``{{identifier}}``
  tokens;
* ``RENDER_POLICY`` -- the one table deciding which files are rendered and
  which are copied byte-for-byte;
* ``TemplateStore`` -- read-only access to the named template trees shipped
  in ``edhor_stack/templates/`` (``base``, ``apps/<app>``,
  ``packages/<package>``, ``api/<framework>``, ``database/<backend>``,
  ``extras/<toggle>``).
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path
from typing import Mapping

from .files import FileStore

# ---------------------------------------------------------------------------
# Variable rendering
# ---------------------------------------------------------------------------

_PLACEHOLDER_RE = re.compile(r"\{\{(\w+)\}\}")


def render(content: str, variables: Mapping[str, str]) -> str:
    """Replace every ``{{identifier}}`` in *content* with its bound value.

    Unbound identifiers become the empty string. Substituted values are not
    scanned again, and anything that is not a well-formed placeholder
    (``{{}}``, ``{{ name }}``, unmatched braces) is left as-is.
    """
    return _PLACEHOLDER_RE.sub(lambda m: variables.get(m.group(1), ""), content)


# ---------------------------------------------------------------------------
# Render policy
# ---------------------------------------------------------------------------

TEMPLATE_SUFFIX = ".hbs"


class RenderAction(str, Enum):
    RENDER = "render"
    COPY_RAW = "copy-raw"


RENDER_POLICY: dict[str, RenderAction] = {
    TEMPLATE_SUFFIX: RenderAction.RENDER,
    ".json": RenderAction.RENDER,
    ".tsx": RenderAction.RENDER,
}


def policy_for(filename: str) -> RenderAction:
    """Look up what to do with a source file, by its (source) name."""
    for suffix, action in RENDER_POLICY.items():
        if filename.endswith(suffix):
            return action
    return RenderAction.COPY_RAW


def output_name(filename: str) -> str:
    """Destination name for a source entry: ``X.hbs`` -> ``X``."""
    if filename.endswith(TEMPLATE_SUFFIX) and len(filename) > len(TEMPLATE_SUFFIX):
        return filename[: -len(TEMPLATE_SUFFIX)]
    return filename


# ---------------------------------------------------------------------------
# TemplateStore
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parents[1] / "templates"


class TemplateStore:
    """Read-only catalog of template trees addressed by logical name.

    A logical name is a slash-separated path relative to the template root,
    e.g. ``"base"`` or ``"apps/web"``.
    """

    def __init__(self, files: FileStore, root: str | Path | None = None) -> None:
        self.files = files
        self.root = Path(root) if root is not None else _DEFAULT_TEMPLATE_DIR

    def path(self, name: str) -> Path:
        """Filesystem location of the tree called *name*."""
        return self.root.joinpath(*name.split("/"))

    async def exists(self, name: str) -> bool:
        return await self.files.exists(self.path(name))
