"""Configuration loading and validation for the paste cleaner."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .logger import get_logger
from .rules import RuleRegistry, build_registry

logger = get_logger(__name__)

OUTPUT_FORMATS = ("html", "markdown")

DEFAULT_AI_MODEL = "gemini-1.5-flash"
DEFAULT_AI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"

ENV_PREFIX = "PASTE_CLEANER"


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""

    pass


@dataclass
class AIConfig:
    """Settings for the optional AI-assisted cleaner."""

    model: str = DEFAULT_AI_MODEL
    endpoint: str = DEFAULT_AI_ENDPOINT
    api_key_env: str = DEFAULT_API_KEY_ENV
    timeout: float | None = None  # None: no timeout, callers bound latency

    def __post_init__(self):
        """Apply environment variable overrides."""
        model_override = os.environ.get(f"{ENV_PREFIX}_AI_MODEL")
        if model_override:
            logger.debug(f"Overriding AI model from environment: {model_override}")
            self.model = model_override

    def resolve_api_key(self) -> str | None:
        """Read the API key from the configured environment variable."""
        return os.environ.get(self.api_key_env) or None


@dataclass
class CleanerConfig:
    """Top-level cleaner configuration."""

    default_format: str = "html"
    disabled_rules: list[str] = field(default_factory=list)
    ai: AIConfig = field(default_factory=AIConfig)
    logging: dict = field(default_factory=dict)

    def __post_init__(self):
        """Apply environment variable overrides and validate."""
        format_override = os.environ.get(f"{ENV_PREFIX}_FORMAT")
        if format_override:
            logger.debug(f"Overriding default format from environment: {format_override}")
            self.default_format = format_override.lower()

        if self.default_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid format '{self.default_format}'. "
                f"Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )

    def build_registry(self) -> RuleRegistry:
        """
        Build the rule registry with ``disabled_rules`` left out.

        Raises:
            ConfigurationError: If a disabled rule is unknown or cannot be
                disabled.
        """
        try:
            return build_registry(self.disabled_rules)
        except (KeyError, ValueError) as e:
            raise ConfigurationError(f"Invalid disabled_rules: {e}") from e


def _parse_ai(raw: dict) -> AIConfig:
    timeout = raw.get("timeout")
    if timeout is not None and (not isinstance(timeout, (int, float)) or timeout <= 0):
        raise ConfigurationError(f"ai.timeout must be a positive number, got {timeout!r}")

    return AIConfig(
        model=raw.get("model", DEFAULT_AI_MODEL),
        endpoint=raw.get("endpoint", DEFAULT_AI_ENDPOINT).rstrip("/"),
        api_key_env=raw.get("api_key_env", DEFAULT_API_KEY_ENV),
        timeout=timeout,
    )


def parse_config(raw: dict) -> CleanerConfig:
    """
    Build a CleanerConfig from an already-parsed mapping.

    Raises:
        ConfigurationError: If a field has the wrong shape
    """
    disabled = raw.get("disabled_rules") or []
    if not isinstance(disabled, list) or not all(isinstance(n, str) for n in disabled):
        raise ConfigurationError("disabled_rules must be a list of rule names")

    raw_ai = raw.get("ai") or {}
    if not isinstance(raw_ai, dict):
        raise ConfigurationError("ai must be a mapping")

    config = CleanerConfig(
        default_format=str(raw.get("default_format", "html")).lower(),
        disabled_rules=disabled,
        ai=_parse_ai(raw_ai),
        logging=raw.get("logging") or {},
    )

    # Surface bad rule names at load time rather than first use
    config.build_registry()
    return config


def load_config(config_path: Path) -> CleanerConfig:
    """
    Load and validate cleaner configuration from a YAML file.

    Args:
        config_path: Path to config.yaml

    Returns:
        CleanerConfig object with validated configuration

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    logger.debug(f"Loading configuration from {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config: {e}") from e

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ConfigurationError("Config file must contain a mapping")

    return parse_config(raw_config)
