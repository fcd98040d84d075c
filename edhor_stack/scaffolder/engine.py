"""Scaffold engine.

Takes a finished ``ProjectConfig`` and materializes the selected template
trees under a target root, rendering ``{{placeholder}}`` variables in
template-eligible files and copying everything else byte-for-byte.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from edhor_stack.collector.models import ApiFramework, Database, ProjectConfig

from .files import FileStore, LocalFileStore
from .templates import RenderAction, TemplateStore, output_name, policy_for, render

PRE_COMMIT_HOOK = Path(".husky") / "pre-commit"


class ScaffoldError(Exception):
    """Raised when the target tree cannot be materialized."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(f"{message}: {path}" if path is not None else message)


@dataclass
class ScaffoldResult:
    """What a ``scaffold`` run produced.

    Attributes:
        root: The target root directory.
        trees: Logical names of the template trees that were materialized.
        skipped: Logical names of selected trees with no template (not an error).
        files: Every written file, relative to ``root``.
    """

    root: Path
    trees: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)


class ScaffoldEngine:
    """Materializes a ``ProjectConfig`` into a directory tree.

    The engine unconditionally writes into the target root. Clearing an
    existing target first is the caller's job; running twice into the same
    directory overwrites files in place.
    """

    def __init__(
        self,
        templates: TemplateStore | None = None,
        files: FileStore | None = None,
    ) -> None:
        self.files = files or (templates.files if templates is not None else LocalFileStore())
        self.templates = templates or TemplateStore(self.files)

    # -- Public API --------------------------------------------------------

    async def scaffold(self, config: ProjectConfig, target_root: str | Path) -> ScaffoldResult:
        """Generate the project for *config* under *target_root*.

        Raises:
            ScaffoldError: If the ``base`` template is missing or any
                filesystem operation fails. Files written before the failure
                are left in place.
        """
        root = Path(target_root)
        result = ScaffoldResult(root=root)
        variables = config.template_vars()

        try:
            # 1. Target root
            await self.files.ensure_dir(root)

            # 2. Base tree (mandatory)
            if not await self.templates.exists("base"):
                raise ScaffoldError("Base template not found", self.templates.path("base"))
            await self._materialize_tree("base", root, variables, result)

            # 3. Toggled extras land in the root
            for toggle, enabled in (
                ("testing", config.testing),
                ("ci", config.ci),
                ("deployment", config.deployment),
            ):
                if enabled:
                    await self._materialize_optional(f"extras/{toggle}", root, variables, result)

            # 4. Workspace folders
            await self.files.ensure_dir(root / "apps")
            await self.files.ensure_dir(root / "packages")

            # 5. Apps, in selection order
            for app in config.apps:
                await self._materialize_optional(
                    f"apps/{app.value}", root / "apps" / app.value, variables, result
                )

            # 6. Standalone API app
            if config.api is not ApiFramework.NONE:
                await self._materialize_optional(
                    f"api/{config.api.value}", root / "apps" / "api", variables, result
                )

            # 7. Database package
            if config.database is not Database.NONE:
                await self._materialize_optional(
                    f"database/{config.database.value}",
                    root / "packages" / "database",
                    variables,
                    result,
                )

            # 8. Selected packages
            for package in config.packages:
                await self._materialize_optional(
                    f"packages/{package.value}",
                    root / "packages" / package.value,
                    variables,
                    result,
                )

            # 9. Fix-ups
            hook = root / PRE_COMMIT_HOOK
            if await self.files.exists(hook):
                await self.files.set_executable(hook)
        except OSError as exc:
            raise ScaffoldError(f"Failed to write project ({exc.strerror or exc})", _exc_path(exc)) from exc

        return result

    # -- Tree materialization ---------------------------------------------

    async def _materialize_optional(
        self,
        name: str,
        dest: Path,
        variables: Mapping[str, str],
        result: ScaffoldResult,
    ) -> None:
        """Materialize *name* if the store has it, otherwise record the skip."""
        if not await self.templates.exists(name):
            result.skipped.append(name)
            return
        await self._materialize_tree(name, dest, variables, result)

    async def _materialize_tree(
        self,
        name: str,
        dest: Path,
        variables: Mapping[str, str],
        result: ScaffoldResult,
    ) -> None:
        await self.copy_template(self.templates.path(name), dest, variables, result)
        result.trees.append(name)

    async def copy_template(
        self,
        src_dir: Path,
        dest_dir: Path,
        variables: Mapping[str, str],
        result: ScaffoldResult | None = None,
    ) -> None:
        """Recursively copy *src_dir* into *dest_dir*, rendering eligible files.

        Each source entry is written exactly once. Two entries that map to
        the same destination name (``x.json`` next to ``x.json.hbs``) are
        rejected.
        """
        await self.files.ensure_dir(dest_dir)
        entries = await self.files.read_dir_entries(src_dir)

        seen: dict[str, str] = {}
        for entry in entries:
            dest_name = entry.name if entry.is_dir else output_name(entry.name)
            if dest_name in seen:
                raise ScaffoldError(
                    f"Template entries {seen[dest_name]!r} and {entry.name!r} "
                    f"both produce {dest_name!r}",
                    src_dir,
                )
            seen[dest_name] = entry.name

            src_path = src_dir / entry.name
            dest_path = dest_dir / dest_name

            if entry.is_dir:
                await self.copy_template(src_path, dest_path, variables, result)
                continue

            if policy_for(entry.name) is RenderAction.RENDER:
                try:
                    content = await self.files.read_text(src_path)
                except UnicodeDecodeError as exc:
                    raise ScaffoldError("Template is not valid UTF-8", src_path) from exc
                await self.files.write_text(dest_path, render(content, variables))
            else:
                await self.files.write_bytes(dest_path, await self.files.read_bytes(src_path))

            if result is not None:
                result.files.append(_relative(dest_path, result.root))


async def scaffold(
    config: ProjectConfig,
    target_root: str | Path,
    templates_dir: str | Path | None = None,
) -> ScaffoldResult:
    """Scaffold with the local filesystem and the given (or bundled) templates."""
    files = LocalFileStore()
    engine = ScaffoldEngine(TemplateStore(files, templates_dir), files)
    return await engine.scaffold(config, target_root)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _relative(path: Path, root: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _exc_path(exc: OSError) -> Path | None:
    return Path(exc.filename) if exc.filename else None
