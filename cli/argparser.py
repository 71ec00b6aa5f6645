"""
CLI argument parser module.
Provides the argparse-based command-line interface of parser-builder.
"""

import argparse
from typing import List, Optional

from parser_builder.config.builder_config import DEFAULT_THREADS


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="parser-builder",
        description="Clone and build every tree-sitter grammar listed on the tree-sitter wiki",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build every listed grammar with the defaults
  parser-builder

  # Build only a few languages with 4 parallel workers
  parser-builder --languages python,go,rust --threads 4

  # Custom output and checkout directories
  parser-builder -o ./libs/ -s ./src/ -c ./languages.json
        """,
    )

    # Build options
    build_group = parser.add_argument_group("Build Options")
    build_group.add_argument(
        "-o", "--output",
        type=str,
        default="./shared_libs/",
        help="Directory receiving the built shared libraries (default: ./shared_libs/)"
    )
    build_group.add_argument(
        "-s", "--source-destination",
        type=str,
        default="./shared_libs_src/",
        help="Directory receiving the grammar checkouts (default: ./shared_libs_src/)"
    )
    build_group.add_argument(
        "-c", "--config-destination",
        type=str,
        default="./config.json",
        help="Language registry JSON file (default: ./config.json)"
    )
    build_group.add_argument(
        "-t", "--threads",
        type=str,
        default=str(DEFAULT_THREADS),
        help=f"Maximum parallel builds (default: {DEFAULT_THREADS})"
    )
    build_group.add_argument(
        "-l", "--languages",
        type=str,
        action="append",
        help="Comma-separated languages to build (default: all)"
    )

    # Catalog options
    catalog_group = parser.add_argument_group("Catalog Options")
    catalog_group.add_argument(
        "--catalog-url",
        type=str,
        help="Parser listing page (default: tree-sitter wiki, or $PARSER_BUILDER_CATALOG_URL)"
    )

    # General options
    parser.add_argument(
        "--log-file",
        type=str,
        default="log/output.log",
        help="Log file path (default: log/output.log)"
    )
    parser.add_argument(
        "--by-language",
        action="store_true",
        help="Show a per-language breakdown in the final summary"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        args: List of arguments to parse (defaults to sys.argv)

    Returns:
        Parsed argument namespace
    """
    parser = create_parser()
    return parser.parse_args(args)
