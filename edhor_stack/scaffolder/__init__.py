"""create-edhor-stack scaffolder -- materializes project trees.

Takes a finished ``ProjectConfig`` and copies the matching template trees
into a target directory, substituting ``{{placeholder}}`` variables.

Quick usage::

    from edhor_stack.scaffolder import ScaffoldEngine

    engine = ScaffoldEngine()
    result = await engine.scaffold(config, Path("./my-app"))
"""

from edhor_stack.scaffolder.engine import (
    PRE_COMMIT_HOOK,
    ScaffoldEngine,
    ScaffoldError,
    ScaffoldResult,
    scaffold,
)
from edhor_stack.scaffolder.files import DirEntry, FileStore, LocalFileStore
from edhor_stack.scaffolder.templates import (
    RENDER_POLICY,
    RenderAction,
    TemplateStore,
    output_name,
    policy_for,
    render,
)

__all__ = [
    "ScaffoldEngine",
    "ScaffoldError",
    "ScaffoldResult",
    "PRE_COMMIT_HOOK",
    "scaffold",
    "FileStore",
    "LocalFileStore",
    "DirEntry",
    "TemplateStore",
    "RENDER_POLICY",
    "RenderAction",
    "output_name",
    "policy_for",
    "render",
]
