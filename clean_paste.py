#!/usr/bin/env python3
"""
Paste Cleaner
=============

Command-line interface for cleaning HTML fragments pasted from editors.

Usage:
    python clean_paste.py clean fragment.html              # Clean to HTML
    python clean_paste.py clean fragment.html -f markdown  # Clean to Markdown
    pbpaste | python clean_paste.py clean                  # Read from stdin
    python clean_paste.py clean fragment.html --ai         # AI-assisted
    python clean_paste.py list-rules                       # Show rule order
    python clean_paste.py detect fragment.html             # Which rules fire
"""

import sys
from pathlib import Path

import click

from paste_cleaner import __version__
from paste_cleaner.config import CleanerConfig, ConfigurationError, load_config
from paste_cleaner.core import CleanOptions, clean_paste_sync
from paste_cleaner.logger import DEFAULT_LOG_LEVEL, get_logger, setup_logging
from paste_cleaner.pipeline import detect_rules

DEFAULT_CONFIG = Path(__file__).parent / "config.yaml"


def setup_logging_from_config(
    config: CleanerConfig,
    config_dir: Path,
    log_level_override: str | None = None,
    log_file_override: Path | None = None,
) -> None:
    """Configure logging based on config file and CLI overrides."""
    logging_cfg = config.logging

    effective_log_level = log_level_override or logging_cfg.get("log_level", DEFAULT_LOG_LEVEL)
    effective_log_file = log_file_override or logging_cfg.get("log_file")
    log_dir = config_dir if effective_log_file else None

    setup_logging(
        level=effective_log_level,
        log_file=str(effective_log_file) if effective_log_file else None,
        log_dir=log_dir,
        log_format=logging_cfg.get("log_format", "text"),
        max_bytes=logging_cfg.get("max_file_size", 5 * 1024 * 1024),
        backup_count=logging_cfg.get("backup_count", 3),
    )


def read_fragment(source: str) -> str:
    """Read a fragment from a file path, or stdin for '-'."""
    with click.open_file(source, "r", encoding="utf-8") as f:
        return f.read()


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default=DEFAULT_CONFIG,
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    "-l",
    type=click.Choice(
        ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False
    ),
    default=None,
    help="Override log level from config",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path from config",
)
@click.version_option(version=__version__, prog_name="paste-clean")
@click.pass_context
def cli(ctx, config: Path, log_level: str | None, log_file: Path | None):
    """
    Paste Cleaner - strip editor export cruft from pasted HTML.

    Cleans fragments copied from Notion, Google Docs, Word, Pages,
    Confluence, Figma and PDF viewers down to minimal HTML or Markdown.
    """
    ctx.ensure_object(dict)

    # A missing default config is fine, a missing explicit one is not
    try:
        if config.exists() or config != DEFAULT_CONFIG:
            cfg = load_config(config)
        else:
            cfg = CleanerConfig()
    except ConfigurationError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    ctx.obj["config"] = cfg
    setup_logging_from_config(cfg, config.parent, log_level, log_file)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("source", default="-")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["html", "markdown"], case_sensitive=False),
    default=None,
    help="Output format (defaults to the configured format)",
)
@click.option(
    "--ai",
    "use_ai",
    is_flag=True,
    default=False,
    help="Use the AI cleaner, falling back to rules on failure",
)
@click.option(
    "--api-key",
    type=str,
    default=None,
    envvar="PASTE_CLEANER_API_KEY",
    help="API key for the AI cleaner (implies --ai)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result to a file instead of stdout",
)
@click.pass_context
def clean(
    ctx,
    source: str,
    output_format: str | None,
    use_ai: bool,
    api_key: str | None,
    output: Path | None,
):
    """
    Clean an HTML fragment read from SOURCE (a file, or '-' for stdin).
    """
    cfg: CleanerConfig = ctx.obj["config"]
    logger = get_logger(__name__)

    try:
        fragment = read_fragment(source)
    except OSError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    ai: bool | str | None = None
    if api_key:
        ai = api_key
    elif use_ai:
        ai = True

    options = CleanOptions(
        format=(output_format or cfg.default_format).lower(),
        ai=ai,
    )
    result = clean_paste_sync(fragment, options, config=cfg)
    logger.debug(f"Cleaned fragment: {len(fragment)} -> {len(result)} chars")

    if output:
        output.write_text(result + "\n", encoding="utf-8")
        click.echo(f"Wrote {len(result)} chars to {output}", err=True)
    else:
        click.echo(result)


@cli.command("list-rules")
@click.pass_context
def list_rules(ctx):
    """
    List the cleaning rules in the order they are applied.
    """
    cfg: CleanerConfig = ctx.obj["config"]
    registry = cfg.build_registry()

    click.echo(f"\n{'#':<3} {'Name':<16} {'Mode':<10} Description")
    click.echo("-" * 78)
    for i, rule in enumerate(registry, 1):
        mode = click.style("always", fg="cyan") if rule.always_apply else "triggered"
        click.echo(f"{i:<3} {rule.name:<16} {mode:<10} {rule.description}")

    disabled = ", ".join(cfg.disabled_rules)
    if disabled:
        click.echo(click.style(f"\nDisabled: {disabled}", fg="yellow"))


@cli.command()
@click.argument("source", default="-")
@click.pass_context
def detect(ctx, source: str):
    """
    Show which rules trigger on the fragment in SOURCE.
    """
    cfg: CleanerConfig = ctx.obj["config"]

    try:
        fragment = read_fragment(source)
    except OSError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)

    matched = detect_rules(fragment, cfg.build_registry())
    if not matched:
        click.echo("No platform markers found")
        return

    for name in matched:
        click.echo(click.style(f"  ✓ {name}", fg="green"))


if __name__ == "__main__":
    cli()
