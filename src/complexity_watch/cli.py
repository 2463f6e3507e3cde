"""Command-line interface for complexity-watch."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from .complexity_analysis import ComplexityAnalyzer, default_registry
from .config import ComplexityWatchConfig
from .reporting import format_results

# Configure logging - default to WARNING to reduce verbosity
logging.basicConfig(
    level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="complexity-watch",
        description="Complexity Watch - Cognitive complexity analyzer for C++ and Python",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Analyze a single file
  complexity-watch src/module.py

  # Analyze a directory recursively, reporting functions scoring 10 or more
  complexity-watch src/ --recursive --threshold 10

  # Analyze the tracked files of a git repository as JSON
  complexity-watch /path/to/repo --format json

  # Skip generated and vendored code
  complexity-watch . -r --ignore "build/" --ignore "third_party/**"

Environment variables:
  COMPLEXITY_THRESHOLD, COMPLEXITY_LANGUAGE, COMPLEXITY_IGNORE (comma-separated),
  COMPLEXITY_RECURSIVE, COMPLEXITY_BOOLEAN_OPERATORS, COMPLEXITY_FORMAT,
  COMPLEXITY_VERBOSE. Command-line arguments take precedence.
        """,
    )

    parser.add_argument(
        "path",
        help="File, directory or git repository to analyze",
    )

    # Analysis arguments
    parser.add_argument(
        "--language",
        "-l",
        default=None,
        help="Force the language (cpp or python) instead of detecting it from file extensions",
    )
    parser.add_argument(
        "--threshold",
        "-t",
        type=int,
        default=None,
        help="Only report functions with complexity at or above this value (default: 0)",
    )
    parser.add_argument(
        "--ignore",
        "-i",
        action="append",
        default=None,
        metavar="PATTERN",
        help="Gitignore-style pattern of files to skip (can be repeated)",
    )
    parser.add_argument(
        "--recursive",
        "-r",
        action="store_true",
        default=None,
        help="Analyze directories recursively",
    )
    parser.add_argument(
        "--no-boolean-operators",
        dest="boolean_operators",
        action="store_false",
        default=None,
        help="Do not count sequences of boolean operators",
    )

    # Output arguments
    parser.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default=None,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=None,
        help="Enable verbose logging and list complexity factors",
    )

    return parser


def load_config(args: argparse.Namespace) -> ComplexityWatchConfig:
    """Merge command-line arguments over the environment configuration.

    Raises:
        ValueError: If a resulting setting is invalid
    """
    config = ComplexityWatchConfig.from_env()

    analysis_overrides = {}
    if args.language is not None:
        analysis_overrides["language"] = args.language
    if args.threshold is not None:
        analysis_overrides["threshold"] = args.threshold
    if args.ignore:
        analysis_overrides["ignore_patterns"] = list(args.ignore)
    if args.recursive is not None:
        analysis_overrides["recursive"] = args.recursive
    if args.boolean_operators is not None:
        analysis_overrides["include_boolean_operators"] = args.boolean_operators

    output_overrides = {}
    if args.format is not None:
        output_overrides["format"] = args.format
    if args.verbose is not None:
        output_overrides["verbose"] = args.verbose

    return ComplexityWatchConfig(
        analysis=replace(config.analysis, **analysis_overrides),
        output=replace(config.output, **output_overrides),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run an analysis and print the report to stdout.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``)

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ValueError as e:
        parser.error(str(e))

    # Set logging level based on verbose flag
    if config.output.verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger("complexity_watch").setLevel(logging.DEBUG)
    else:
        # Keep default WARNING level for non-verbose mode
        logging.getLogger().setLevel(logging.WARNING)

    input_path = Path(args.path)
    if not input_path.exists():
        logger.error(f"Invalid input path: {input_path}")
        return 1

    try:
        registry = default_registry()
        language = config.analysis.language
        if language and not registry.is_supported(language):
            parser.error(
                f"Unsupported language: {language} "
                f"(supported: {', '.join(sorted(registry.supported_languages()))})"
            )

        analyzer = ComplexityAnalyzer(registry, config.analysis)
        results = analyzer.analyze_path(input_path, config.analysis.recursive)
        sys.stdout.write(format_results(results, config.output.format, config.output.verbose))
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except Exception as e:
        logger.error(f"An error occurred: {e}")
        return 1

    return 0


def cli():
    """Command-line entry point for complexity-watch."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")
        sys.exit(1)


if __name__ == "__main__":
    cli()
