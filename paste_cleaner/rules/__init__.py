"""Platform-specific cleaning rules."""

from . import apple_pages, confluence, figma, general, google_docs, notion, pdf, word
from .base import PlatformRule, RuleRegistry, compile_patterns

# Application order. The catch-all must stay last: vendor rules recognize
# their own comment payloads before the generic stripper removes them.
DEFAULT_REGISTRY = RuleRegistry(
    [
        notion.RULE,
        google_docs.RULE,
        word.RULE,
        apple_pages.RULE,
        confluence.RULE,
        figma.RULE,
        pdf.RULE,
        general.RULE,
    ]
)


def get_rule(name: str) -> PlatformRule:
    """
    Get a registered rule by name.

    Args:
        name: Rule name (e.g., 'notion', 'google-docs')

    Returns:
        The rule

    Raises:
        ValueError: If no rule has that name
    """
    rule = DEFAULT_REGISTRY.get(name.lower())
    if not rule:
        available = ", ".join(DEFAULT_REGISTRY.names())
        raise ValueError(f"Unknown rule: {name}. Available: {available}")
    return rule


def list_rules() -> list[str]:
    """List rule names in application order."""
    return DEFAULT_REGISTRY.names()


def build_registry(disabled: list[str] | None = None) -> RuleRegistry:
    """
    Build the registry used for cleaning, leaving out ``disabled`` rules.

    Raises:
        ValueError: If a name is unknown or refers to the catch-all rule.
    """
    if not disabled:
        return DEFAULT_REGISTRY
    for name in disabled:
        get_rule(name)
    return DEFAULT_REGISTRY.without(*(name.lower() for name in disabled))


__all__ = [
    "DEFAULT_REGISTRY",
    "PlatformRule",
    "RuleRegistry",
    "build_registry",
    "compile_patterns",
    "get_rule",
    "list_rules",
]
