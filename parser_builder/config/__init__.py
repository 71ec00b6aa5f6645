"""Configuration module for the parser builder."""

from parser_builder.config.builder_config import (
    DEFAULT_CATALOG_URL,
    DEFAULT_THREADS,
    BuilderConfig,
    ParserDescriptor,
)
from parser_builder.config.config_utils import build_config, parse_languages, resolve_thread_count

__all__ = [
    "DEFAULT_CATALOG_URL",
    "DEFAULT_THREADS",
    "BuilderConfig",
    "ParserDescriptor",
    "build_config",
    "parse_languages",
    "resolve_thread_count",
]
