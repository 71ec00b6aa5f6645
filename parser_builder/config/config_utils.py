import logging
import os
from typing import Any, Iterable, Optional, Set, Union

from parser_builder.config.builder_config import DEFAULT_CATALOG_URL, DEFAULT_THREADS, BuilderConfig

CATALOG_URL_ENV = "PARSER_BUILDER_CATALOG_URL"


def resolve_thread_count(value: Any) -> int:
    """Return a usable worker count, falling back to the default for invalid values."""
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            pass

    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        logging.warning(f"Invalid thread count {value!r}. Falling back to {DEFAULT_THREADS}.")
        return DEFAULT_THREADS
    return value


def parse_languages(raw: Optional[Union[str, Iterable[str]]]) -> Set[str]:
    if not raw:
        return set()

    if isinstance(raw, str):
        raw = [raw]

    languages = set()
    for chunk in raw:
        for name in chunk.split(","):
            name = name.strip()
            if name:
                languages.add(name)
    return languages


def build_config(args: Any) -> BuilderConfig:
    """
    Build a BuilderConfig from parsed command line arguments.

    Args:
        args: Namespace produced by cli.argparser.parse_args

    Returns:
        Normalized builder configuration
    """
    catalog_url = getattr(args, "catalog_url", None) or os.getenv(CATALOG_URL_ENV) or DEFAULT_CATALOG_URL

    return BuilderConfig(
        output_dir=os.path.expanduser(args.output),
        source_dir=os.path.expanduser(args.source_destination),
        config_path=os.path.expanduser(args.config_destination),
        threads=resolve_thread_count(args.threads),
        languages=parse_languages(args.languages),
        catalog_url=catalog_url,
        log_file=getattr(args, "log_file", None),
    )
