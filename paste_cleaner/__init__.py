"""Paste Cleaner - strip editor export cruft from pasted HTML fragments."""

from .ai import (
    AIError,
    AIRequestFailedError,
    AIUnavailableError,
    GeminiGenerator,
    clean_with_ai,
    is_ai_available,
)
from .config import AIConfig, CleanerConfig, ConfigurationError, load_config
from .core import (
    CleaningMode,
    CleanOptions,
    InvalidInputKindError,
    clean_paste,
    clean_paste_sync,
)
from .generators.markdown import html_to_markdown
from .pipeline import apply_rules, detect_rules, normalize_whitespace
from .rules import DEFAULT_REGISTRY, PlatformRule, RuleRegistry

__version__ = "1.0.0"

__all__ = [
    "AIConfig",
    "AIError",
    "AIRequestFailedError",
    "AIUnavailableError",
    "CleanOptions",
    "CleanerConfig",
    "CleaningMode",
    "ConfigurationError",
    "DEFAULT_REGISTRY",
    "GeminiGenerator",
    "InvalidInputKindError",
    "PlatformRule",
    "RuleRegistry",
    "apply_rules",
    "clean_paste",
    "clean_paste_sync",
    "clean_with_ai",
    "detect_rules",
    "html_to_markdown",
    "is_ai_available",
    "load_config",
    "normalize_whitespace",
]
