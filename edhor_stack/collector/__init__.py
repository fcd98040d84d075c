"""create-edhor-stack configuration collector.

Asks the ordered, dependency-aware question flow and produces a single
immutable ``ProjectConfig``.

Key classes:
    ConfigurationCollector - Runs the question table against a prompt provider
    ProjectConfig          - Frozen, internally consistent configuration
    RichPromptProvider     - Terminal prompts built on ``rich.prompt``
    Cancelled              - Outcome returned when the user aborts
"""

from .collector import Cancelled, ConfigurationCollector, build_config, collect
from .models import (
    ApiFramework,
    App,
    Database,
    Package,
    ProjectConfig,
    UiBaseColor,
    UiOptions,
    UiStyle,
)
from .prompts import (
    ConfirmPrompt,
    DefaultsPromptProvider,
    MultiSelectPrompt,
    Option,
    PromptCancelled,
    PromptProvider,
    RichPromptProvider,
    SelectPrompt,
    TextPrompt,
)
from .steps import QUESTION_STEPS, PromptKind, Step, StepContext, validate_name

__all__ = [
    # Collector
    "ConfigurationCollector",
    "Cancelled",
    "build_config",
    "collect",
    # Models
    "ProjectConfig",
    "UiOptions",
    "App",
    "Database",
    "Package",
    "UiStyle",
    "UiBaseColor",
    "ApiFramework",
    # Prompts
    "PromptProvider",
    "RichPromptProvider",
    "DefaultsPromptProvider",
    "PromptCancelled",
    "Option",
    "TextPrompt",
    "SelectPrompt",
    "MultiSelectPrompt",
    "ConfirmPrompt",
    # Question table
    "QUESTION_STEPS",
    "PromptKind",
    "Step",
    "StepContext",
    "validate_name",
]
