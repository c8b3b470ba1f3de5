"""Base types for platform-specific cleaning rules."""

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

Transform = Callable[[str], str]

# Flags shared by every trigger pattern
PATTERN_FLAGS = re.IGNORECASE | re.DOTALL


def compile_patterns(*patterns: str) -> tuple[re.Pattern, ...]:
    """Compile trigger patterns with the flags every rule uses."""
    return tuple(re.compile(p, PATTERN_FLAGS) for p in patterns)


@dataclass(frozen=True)
class PlatformRule:
    """
    One authoring tool's export quirks.

    Attributes:
        name: Unique, stable identifier (e.g. "google-docs").
        patterns: Trigger patterns. They only decide whether ``transform``
            runs, extraction happens inside ``transform``.
        transform: Rewrites the whole fragment.
        always_apply: Run regardless of the triggers. Reserved for the
            catch-all rule that performs the final security stripping.
        description: Human-readable summary shown by the CLI.
    """

    name: str
    patterns: tuple[re.Pattern, ...]
    transform: Transform
    always_apply: bool = False
    description: str = ""

    def matches(self, html: str) -> bool:
        """Check whether the rule should run on ``html``."""
        if self.always_apply:
            return True
        return self.triggered_by(html)

    def triggered_by(self, html: str) -> bool:
        """Check whether any trigger pattern matches, ignoring ``always_apply``."""
        return any(pattern.search(html) for pattern in self.patterns)

    def apply(self, html: str) -> str:
        """Run the transform."""
        return self.transform(html)


class RuleRegistry:
    """
    Immutable, ordered collection of platform rules.

    Order is significant: rules run first to last, and the catch-all
    rule is expected to come last.
    """

    def __init__(self, rules: Iterable[PlatformRule]):
        self._rules = tuple(rules)

        seen: set[str] = set()
        for rule in self._rules:
            if rule.name in seen:
                raise ValueError(f"Duplicate rule name: {rule.name}")
            seen.add(rule.name)

    def __iter__(self) -> Iterator[PlatformRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, name: object) -> bool:
        return any(rule.name == name for rule in self._rules)

    def __repr__(self) -> str:
        return f"RuleRegistry({', '.join(self.names())})"

    def names(self) -> list[str]:
        """Rule names in application order."""
        return [rule.name for rule in self._rules]

    def get(self, name: str) -> PlatformRule | None:
        """Find a rule by name."""
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def without(self, *names: str) -> "RuleRegistry":
        """
        Return a new registry leaving out the named rules.

        Raises:
            KeyError: If a name is not registered.
            ValueError: If a name refers to an always-applied rule.
        """
        for name in names:
            rule = self.get(name)
            if rule is None:
                raise KeyError(name)
            if rule.always_apply:
                raise ValueError(f"Rule '{name}' always applies and cannot be disabled")
        return RuleRegistry(rule for rule in self._rules if rule.name not in names)
