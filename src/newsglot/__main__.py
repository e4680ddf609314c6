"""Main entry point for the newsglot command-line interface."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from . import __version__, paths
from .cache import TranslationCache
from .config import PipelineConfig, RenderStyle, load_config
from .errors import UnsupportedLanguageError
from .extraction import project_plain_text
from .languages import SUPPORTED_LANGUAGES, find_language
from .logging_utils import setup_logging
from .session import Error, TranslationSession
from .templates import DEFAULT_CONFIG_YAML
from .translate import build_translate_fn, get_translator
from .types import ContentUnit

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments for the newsglot CLI.

    Returns:
        argparse.Namespace: An object containing the parsed command-line arguments.

    """
    parser = argparse.ArgumentParser(prog="newsglot", description="Translate article markup without touching its structure.")
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"newsglot {__version__}",
        help="Show the version number and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug level logging.",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    init_parser = subparsers.add_parser("init", help="Create a default newsglot configuration.")
    init_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="The directory to initialize the project in (default: current directory).",
    )

    subparsers.add_parser("languages", help="List the supported languages.")

    translate_parser = subparsers.add_parser("translate", help="Translate an HTML article.")
    translate_parser.add_argument("input_file", help="Path to the HTML fragment to translate.")
    translate_parser.add_argument("-t", "--to", dest="target_language", required=True, help="Target language code (e.g. 'en').")
    translate_parser.add_argument("-c", "--config", help="Path to a configuration file. Defaults to the project's main.yaml.")
    translate_parser.add_argument("--plain-text", dest="plain_text_file", help="Plain-text fallback of the article. Defaults to the visible text of the input.")
    translate_parser.add_argument("-o", "--output", help="Write the rendered HTML here instead of standard output.")
    translate_parser.add_argument("-p", "--provider", help="Override the configured translation provider.")
    translate_parser.add_argument("--theme", choices=["light", "dark"], help="Override the configured theme.")
    translate_parser.add_argument("--print-text", action="store_true", help="Also print the plain-text projection.")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help(sys.stderr)
        sys.exit(1)
    return args


def _init_project(target_path: str) -> int:
    """Create the project's configuration directory and default main.yaml."""
    config_file = paths.default_config_file(Path(target_path).resolve())

    if config_file.exists():
        logger.warning("Configuration file already exists at: %s", config_file)
        return 0

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(DEFAULT_CONFIG_YAML, encoding="utf-8")
    except OSError:
        logger.exception("Failed to initialize project")
        return 1
    logger.info("Created default configuration at: %s", config_file)
    return 0


def _list_languages() -> int:
    for language in SUPPORTED_LANGUAGES:
        print(f"{language.code:<4} {language.flag} {language.name}")  # noqa: T201
    return 0


def _load_config(config_path: str | None) -> PipelineConfig | None:
    """
    Load the configuration from an explicit path or from the project directory.

    Without an explicit path and outside a project, the built-in defaults are used.

    Returns:
        The configuration, or None if an explicit or discovered file cannot be loaded.

    """
    try:
        if config_path:
            return load_config(config_path)
        discovered = paths.find_config_file()
    except FileNotFoundError:
        if config_path:
            logger.exception("Could not find a valid configuration file.")
            return None
        logger.info("No project configuration found; using defaults.")
        return PipelineConfig()
    except (ValueError, OSError):
        logger.exception("Failed to load the configuration.")
        return None

    logger.info("Loading configuration from: %s", discovered)
    try:
        return load_config(discovered)
    except (ValueError, OSError):
        logger.exception("Failed to load the configuration.")
        return None


def _run_translate(args: argparse.Namespace) -> int:
    """Translate one article and write the rendered result."""
    config = _load_config(args.config)
    if config is None:
        return 1

    overrides: dict = {}
    if args.provider:
        overrides["provider"] = args.provider
    if args.theme:
        overrides["style"] = RenderStyle(theme=args.theme, font_size=config.style.font_size)
    if overrides:
        config = config.model_copy(update=overrides)

    try:
        target_language = find_language(args.target_language).code
    except UnsupportedLanguageError:
        logger.exception("Cannot translate to '%s'.", args.target_language)
        return 1

    try:
        html_body = Path(args.input_file).read_text(encoding="utf-8")
        plain_body = Path(args.plain_text_file).read_text(encoding="utf-8") if args.plain_text_file else project_plain_text(html_body)
        unit = ContentUnit(plain_body=plain_body, source_language=config.source_language, html_body=html_body)
    except OSError:
        logger.exception("Could not read the input files.")
        return 1
    except ValueError:
        logger.exception("The input has no readable text.")
        return 1

    try:
        translator = get_translator(config.provider, config)
    except ValueError:
        logger.exception("Invalid provider configuration.")
        return 1
    if translator is None:
        logger.error("Translation provider '%s' is not available.", config.provider)
        return 1

    cache: TranslationCache | None = None
    cache_path: Path | None = None
    if config.cache_enabled:
        cache_path = paths.get_cache_file()
        cache = TranslationCache.load(cache_path) if cache_path else TranslationCache()
    session = TranslationSession.from_config(unit, build_translate_fn(translator, config, cache), config)

    state = asyncio.run(session.select_language(target_language))
    rendered = session.render()

    if args.output:
        Path(args.output).write_text(rendered.html, encoding="utf-8")
        logger.info("Wrote %s content to %s", rendered.language, args.output)
    else:
        print(rendered.html)  # noqa: T201
    if args.print_text:
        print(rendered.plain_text)  # noqa: T201

    if cache is not None and cache_path is not None:
        cache.save(cache_path)

    if isinstance(state, Error):
        logger.error("Translation to '%s' failed; the original content was written.", target_language)
        return 1
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """
    Run the main entry point for the newsglot command-line interface.

    Dispatches to the 'init', 'languages' or 'translate' command and exits with its status.
    """
    args = _parse_args(argv)
    setup_logging(version=__version__, debug=args.debug)

    if args.command == "init":
        exit_code = _init_project(args.path)
    elif args.command == "languages":
        exit_code = _list_languages()
    else:
        exit_code = _run_translate(args)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
