"""create-edhor-stack command line entry point.

Asks the configuration questions, confirms overwriting an existing target
directory, scaffolds the project and prints the next steps.

Usage::

    create-edhor-stack
    create-edhor-stack my-app
    create-edhor-stack my-app --output ~/code --yes
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from edhor_stack.collector import (
    Cancelled,
    ConfigurationCollector,
    ConfirmPrompt,
    DefaultsPromptProvider,
    PromptCancelled,
    PromptProvider,
    RichPromptProvider,
)
from edhor_stack.collector.collector import CANCEL_MESSAGE
from edhor_stack.collector.models import ProjectConfig
from edhor_stack.config import Settings
from edhor_stack.scaffolder import LocalFileStore, ScaffoldEngine, ScaffoldError, TemplateStore
from edhor_stack.utils import (
    console,
    print_error,
    print_info,
    print_next_steps,
    print_success,
    print_summary_table,
    print_warning,
)


async def run(
    settings: Settings,
    provider: PromptProvider,
    name_hint: Optional[str] = None,
) -> int:
    """Run one interactive session. Returns the process exit code."""
    collector = ConfigurationCollector(provider, default_name=settings.default_name)
    config = await collector.collect(name_hint)
    if isinstance(config, Cancelled):
        return 0

    files = LocalFileStore()
    target = settings.project_dir(config.name)

    if await files.exists(target):
        try:
            overwrite = await provider.confirm(
                ConfirmPrompt(
                    message=f"Directory {config.name} already exists. Overwrite?",
                    initial_value=False,
                )
            )
        except PromptCancelled:
            overwrite = False
        if not overwrite:
            await provider.cancel(CANCEL_MESSAGE)
            return 0
        print_warning(f"Removing existing directory {target}")
        try:
            await files.remove_tree(target)
        except OSError as exc:
            print_error(f"Error: could not remove {target}: {exc}")
            return 1

    engine = ScaffoldEngine(TemplateStore(files, settings.templates_dir), files)
    try:
        with console.status("Creating project..."):
            result = await engine.scaffold(config, target)
    except ScaffoldError as exc:
        print_error("Failed to create project")
        print_error(f"Error: {exc}")
        return 1

    print_success("Project created!")
    for name in result.skipped:
        print_info(f"No template for {name}, skipped")
    print_summary_table(config.summary(), title="Configuration")
    print_next_steps(next_steps(config))
    print_success("Happy coding!")
    return 0


def next_steps(config: ProjectConfig) -> list[str]:
    """Shell commands suggested after generation."""
    return [
        f"cd {config.name}",
        "bun install",
        "git init && git add -A && git commit -m 'Initial commit'",
        "bun dev",
    ]


def build_parser():
    import argparse

    parser = argparse.ArgumentParser(
        prog="create-edhor-stack",
        description="Create a new edhor-stack monorepo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-edhor-stack\n"
            "  create-edhor-stack my-app\n"
            "  create-edhor-stack my-app -o ~/code --yes\n"
        ),
    )
    parser.add_argument(
        "name",
        nargs="?",
        default=None,
        help="Project name (offered as the default answer)",
    )
    parser.add_argument(
        "--output", "-o",
        default=None,
        help="Parent directory for the project (default: current directory)",
    )
    parser.add_argument(
        "--templates",
        default=None,
        help="Use template trees from this directory instead of the bundled ones",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Accept every default without prompting",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``create-edhor-stack`` / ``python -m edhor_stack``."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        print_error(f"Error: invalid environment settings: {exc}")
        sys.exit(1)

    updates = {}
    if args.output:
        updates["output_dir"] = Path(args.output).expanduser()
    if args.templates:
        updates["templates_dir"] = Path(args.templates).expanduser()
    if updates:
        settings = settings.model_copy(update=updates)

    provider: PromptProvider = DefaultsPromptProvider() if args.yes else RichPromptProvider()
    sys.exit(asyncio.run(run(settings, provider, args.name)))


if __name__ == "__main__":
    main()
