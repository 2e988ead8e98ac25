#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for mdpeek.

Usage::

    mdpeek [term|html] [FILE] [options]

``FILE`` defaults to ``README.md``. Without a target the document is rendered
for the terminal.

Exit codes
----------
0
    Success
1
    Unexpected error
3
    Validation error (unknown theme, bad option value, bad configuration)
4
    File error (missing document, undecodable bytes, unwritable output)
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from mdpeek.api import render_file
from mdpeek.constants import CLEAR_SCREEN, CONFIG_ENV_VAR, DEFAULT_DOCUMENT, DEFAULT_WATCH_DEBOUNCE, RenderTarget
from mdpeek.exceptions import ConfigError, FileError, MdpeekError, ValidationError
from mdpeek.logging_utils import configure_logging
from mdpeek.options.html import HtmlRendererOptions
from mdpeek.options.terminal import TerminalRendererOptions
from mdpeek.themes import THEME_NAMES, get_theme

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

TARGETS: tuple[RenderTarget, ...] = ("term", "html")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DEFAULT_LOG_LEVEL = "WARNING"


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    if isinstance(exception, (ValidationError, ConfigError, ValueError)):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (FileError, OSError)):
        return EXIT_FILE_ERROR

    return EXIT_ERROR


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser (the optional target word is handled by :func:`main`)."""
    from mdpeek import __version__

    terminal_help = TerminalRendererOptions.field_help()
    html_help = HtmlRendererOptions.field_help()

    parser = argparse.ArgumentParser(
        prog="mdpeek",
        usage="%(prog)s [term|html] [FILE] [options]",
        description="Render Markdown for the terminal or as HTML.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=DEFAULT_DOCUMENT,
        help=f"Markdown document to render (default: {DEFAULT_DOCUMENT})",
    )
    parser.add_argument(
        "--theme",
        metavar="NAME",
        help=f"Terminal color theme, one of: {', '.join(THEME_NAMES)}",
    )
    parser.add_argument(
        "--color-system",
        dest="color_system",
        choices=["standard", "256", "truecolor"],
        help=terminal_help["color_system"],
    )
    parser.add_argument("--rule-width", dest="rule_width", type=int, help=terminal_help["rule_width"])
    parser.add_argument("--watch", action="store_true", help="Re-render whenever the document changes")
    parser.add_argument("-o", "--out", help="Write output to this file instead of stdout")
    parser.add_argument(
        "--standalone",
        action="store_true",
        default=None,
        help=html_help["standalone"],
    )
    parser.add_argument("--title", help=html_help["title"])
    parser.add_argument("--config", help="Configuration file (TOML, YAML, JSON or pyproject.toml)")
    parser.add_argument("--no-config", dest="no_config", action="store_true", help="Ignore configuration files")
    parser.add_argument("--log-level", dest="log_level", choices=LOG_LEVELS, help="Logging level")
    parser.add_argument("--log-file", dest="log_file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Timestamped, verbose log output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def split_target(argv: list[str]) -> tuple[RenderTarget, list[str]]:
    """Remove a leading ``term``/``html`` word from the arguments.

    Examples
    --------
        >>> split_target(["html", "notes.md"])
        ('html', ['notes.md'])
        >>> split_target(["notes.md"])
        ('term', ['notes.md'])

    """
    if argv and argv[0] in TARGETS:
        return argv[0], argv[1:]  # type: ignore[return-value]
    return "term", argv


def merge_settings(config: Dict[str, Any], parsed_args: argparse.Namespace) -> Dict[str, Any]:
    """Overlay command line values on configuration values.

    Only arguments the user actually gave (not None) override the config.
    """
    settings = dict(config)
    for key in ("theme", "standalone", "title", "rule_width", "color_system", "log_level"):
        value = getattr(parsed_args, key, None)
        if value is not None:
            settings[key] = value
    return settings


def build_options(settings: Dict[str, Any]) -> tuple[TerminalRendererOptions, HtmlRendererOptions]:
    """Build emitter options from merged settings.

    Raises
    ------
    ValueError
        If an option value is out of range
    InvalidThemeError
        If the theme name is unknown

    """
    terminal_kwargs: Dict[str, Any] = {}
    if "theme" in settings:
        terminal_kwargs["theme"] = get_theme(settings["theme"]).name
    if "color_system" in settings:
        terminal_kwargs["color_system"] = settings["color_system"]
    if "rule_width" in settings:
        terminal_kwargs["rule_width"] = settings["rule_width"]

    html_kwargs: Dict[str, Any] = {}
    if "standalone" in settings:
        html_kwargs["standalone"] = settings["standalone"]
    if "title" in settings:
        html_kwargs["title"] = settings["title"]

    return TerminalRendererOptions(**terminal_kwargs), HtmlRendererOptions(**html_kwargs)


def _make_writer(out: Optional[str], clear_screen: bool) -> Callable[[str], None]:
    def write(output: str) -> None:
        if out:
            Path(out).write_text(output, encoding="utf-8")
            return
        if clear_screen:
            sys.stdout.write(CLEAR_SCREEN)
        sys.stdout.write(output)
        sys.stdout.flush()

    return write


def main(args: list[str] | None = None) -> int:
    """Execute the CLI.

    Parameters
    ----------
    args : list of str, optional
        Arguments without the program name; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Exit code

    """
    argv = list(sys.argv[1:] if args is None else args)
    target, argv = split_target(argv)

    parser = create_parser()
    parsed_args = parser.parse_args(argv)

    configure_logging(parsed_args.log_level or DEFAULT_LOG_LEVEL, parsed_args.log_file, parsed_args.trace)

    document = Path(parsed_args.file)

    config: Dict[str, Any] = {}
    if not parsed_args.no_config:
        try:
            config = load_config(parsed_args.config, document)
        except ConfigError as e:
            logger.error("%s", e)
            return EXIT_VALIDATION_ERROR

    settings = merge_settings(config, parsed_args)
    if "log_level" in config and not parsed_args.log_level:
        configure_logging(settings["log_level"], parsed_args.log_file, parsed_args.trace)

    try:
        terminal_options, html_options = build_options(settings)
    except (ValidationError, ValueError) as e:
        logger.error("%s", e)
        return EXIT_VALIDATION_ERROR

    write = _make_writer(parsed_args.out, clear_screen=parsed_args.watch and target == "term")

    def render_and_write() -> None:
        output = render_file(
            document,
            target,
            terminal_options=terminal_options,
            html_options=html_options,
        )
        write(output)

    try:
        render_and_write()
    except (MdpeekError, OSError) as e:
        logger.error("%s", e)
        return get_exit_code_for_exception(e)

    if parsed_args.watch:
        from mdpeek.cli.watch import run_watch_mode

        return run_watch_mode(document, render_and_write, debounce=DEFAULT_WATCH_DEBOUNCE)

    return EXIT_SUCCESS


def load_config(explicit_path: Optional[str], document: Path) -> Dict[str, Any]:
    """Load configuration for ``document`` (explicit path, environment, then discovery)."""
    from mdpeek.cli.config import load_config_with_priority

    return load_config_with_priority(
        explicit_path=explicit_path,
        env_var_path=os.environ.get(CONFIG_ENV_VAR),
        start_dir=document.parent,
    )


__all__ = ["main", "create_parser", "get_exit_code_for_exception", "EXIT_SUCCESS", "EXIT_ERROR"]
